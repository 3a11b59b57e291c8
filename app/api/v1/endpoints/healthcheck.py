# ============================================================================
# FILE: app/api/v1/endpoints/healthcheck.py
# ============================================================================
from fastapi import APIRouter
from app.schemas.response import ApiResponse

router = APIRouter()

@router.get("/", response_model=ApiResponse[str])
async def healthcheck():
    return ApiResponse(data="OK", message="Healthcheck successful")
