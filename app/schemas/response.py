# ============================================================================
# FILE: app/schemas/response.py
# Uniform success envelope and paginated page shape
# ============================================================================
from pydantic import BaseModel, computed_field
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")

class ApiResponse(BaseModel, Generic[T]):
    """Envelope around every successful payload"""
    status_code: int = 200
    data: Optional[T] = None
    message: str = "Success"

    @computed_field
    @property
    def success(self) -> bool:
        return self.status_code < 400

class Page(BaseModel, Generic[T]):
    """One page of a feed plus what a client needs to render pagination"""
    items: List[T]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
