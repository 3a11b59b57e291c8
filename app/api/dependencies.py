# ============================================================================
# FILE: app/api/dependencies.py
# ============================================================================
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.exceptions import UnauthorizedError
from app.core.security import decode_access_token
from app.db.models.user import User
from typing import Optional

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/users/login", auto_error=False)

def get_token(request: Request, bearer: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    """Access token from the cookie, falling back to the Authorization header"""
    return request.cookies.get(ACCESS_COOKIE) or bearer

def get_current_user(
    token: Optional[str] = Depends(get_token),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Get current authenticated user from JWT token
    Returns None if no token or invalid token (allows anonymous access)
    """
    if not token:
        return None
    
    try:
        payload = decode_access_token(token)
        user_id = int(payload["sub"])
    except (UnauthorizedError, ValueError):
        return None
    
    return db.get(User, user_id)

def require_current_user(
    token: Optional[str] = Depends(get_token),
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """
    Require authenticated user (raises 401 if not authenticated)
    Use this dependency for protected endpoints
    """
    if current_user is None:
        raise UnauthorizedError("Invalid access token" if token else "Not authenticated")
    return current_user

def actor_id(current_user: Optional[User] = Depends(get_current_user)) -> Optional[int]:
    """Id of the caller, or None for anonymous requests"""
    return current_user.id if current_user else None
