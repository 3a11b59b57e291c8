# ============================================================================
# FILE: app/api/v1/endpoints/user.py
# ============================================================================
from fastapi import APIRouter, Body, Depends, File, Form, Request, Response, UploadFile, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.api.dependencies import (
    ACCESS_COOKIE,
    REFRESH_COOKIE,
    actor_id,
    require_current_user,
)
from app.config import settings
from app.core.exceptions import BadRequestError
from app.core.media_storage import MediaStorage, get_media_storage
from app.schemas.response import ApiResponse
from app.schemas.user import (
    AccountUpdate,
    ChannelProfile,
    LoginResponse,
    PasswordChange,
    RefreshTokenRequest,
    TokenPair,
    UserCreate,
    UserLogin,
    UserResponse,
)
from app.schemas.video import VideoCard
from app.services.user_service import user_service
from app.db.models.user import User
import logging

logger = logging.getLogger(__name__)
router = APIRouter()


def _set_auth_cookies(response: Response, tokens: TokenPair) -> None:
    options = {"httponly": True, "secure": settings.COOKIE_SECURE, "samesite": "lax"}
    response.set_cookie(ACCESS_COOKIE, tokens.access_token, **options)
    response.set_cookie(REFRESH_COOKIE, tokens.refresh_token, **options)


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
def register(
    username: str = Form(...),
    email: str = Form(...),
    full_name: str = Form(...),
    password: str = Form(...),
    avatar: Optional[UploadFile] = File(None),
    cover_image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage)
):
    """
    Register a new user account
    Avatar is required, cover image is optional
    """
    try:
        user_data = UserCreate(username=username, email=email, full_name=full_name, password=password)
    except ValidationError as e:
        errors = [{"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]} for err in e.errors()]
        raise BadRequestError("All fields are required and must be valid", errors)

    user = user_service.register_user(db, storage, user_data, avatar, cover_image)
    return ApiResponse(
        status_code=status.HTTP_201_CREATED,
        data=UserResponse.model_validate(user),
        message="User registered successfully"
    )

@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db)
):
    """
    Login with username or email and password
    Sets access/refresh cookies and returns the tokens
    """
    user = user_service.authenticate_user(db, credentials.username, credentials.email, credentials.password)
    tokens = user_service.issue_tokens(db, user)
    _set_auth_cookies(response, tokens)
    logger.info(f"User logged in: {user.username}")
    return ApiResponse(
        data=LoginResponse(**tokens.model_dump(), user=UserResponse.model_validate(user)),
        message="User logged in successfully"
    )

@router.post("/logout", response_model=ApiResponse[dict])
def logout(
    response: Response,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user_service.logout(db, current_user)
    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)
    return ApiResponse(data={}, message="User logged out successfully")

@router.post("/refresh-token", response_model=ApiResponse[TokenPair])
def refresh_token(
    request: Request,
    response: Response,
    payload: Optional[RefreshTokenRequest] = Body(None),
    db: Session = Depends(get_db)
):
    """Issue a new token pair from the refresh cookie or body"""
    incoming = request.cookies.get(REFRESH_COOKIE) or (payload.refresh_token if payload else None)
    tokens = user_service.refresh_tokens(db, incoming)
    _set_auth_cookies(response, tokens)
    return ApiResponse(data=tokens, message="Access token refreshed")

@router.post("/change-password", response_model=ApiResponse[dict])
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user_service.change_password(db, current_user, data)
    return ApiResponse(data={}, message="Password changed successfully")

@router.get("/current-user", response_model=ApiResponse[UserResponse])
def get_current_user_info(
    current_user: User = Depends(require_current_user)
):
    """
    Get current user information
    Requires authentication
    """
    return ApiResponse(data=UserResponse.model_validate(current_user), message="Current user fetched")

@router.patch("/update-account", response_model=ApiResponse[UserResponse])
def update_account(
    data: AccountUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    user = user_service.update_account(db, current_user, data)
    return ApiResponse(data=UserResponse.model_validate(user), message="Account details updated")

@router.patch("/avatar", response_model=ApiResponse[UserResponse])
def update_avatar(
    avatar: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    current_user: User = Depends(require_current_user)
):
    user = user_service.update_image(db, storage, current_user, avatar, "avatar_url")
    return ApiResponse(data=UserResponse.model_validate(user), message="Avatar updated")

@router.patch("/cover-image", response_model=ApiResponse[UserResponse])
def update_cover_image(
    cover_image: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    current_user: User = Depends(require_current_user)
):
    user = user_service.update_image(db, storage, current_user, cover_image, "cover_image_url")
    return ApiResponse(data=UserResponse.model_validate(user), message="Cover image updated")

@router.get("/c/{username}", response_model=ApiResponse[ChannelProfile])
def get_channel_profile(
    username: str,
    db: Session = Depends(get_db),
    viewer_id: Optional[int] = Depends(actor_id)
):
    """Channel page: profile, subscriber counts and whether the caller is subscribed"""
    profile = user_service.get_channel_profile(db, username, viewer_id)
    return ApiResponse(data=profile, message="Channel profile fetched")

@router.get("/history", response_model=ApiResponse[List[VideoCard]])
def get_watch_history(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_current_user)
):
    """
    Get user's watch history, most recent first
    Requires authentication
    """
    history = user_service.get_watch_history(db, current_user)
    return ApiResponse(data=history, message="Watch history fetched")
