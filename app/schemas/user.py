# ============================================================================
# FILE: app/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

class UserCreate(BaseModel):
    """Schema for user registration"""
    username: str = Field(..., min_length=3, max_length=30)
    email: EmailStr
    full_name: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)

    class Config:
        str_strip_whitespace = True

class UserLogin(BaseModel):
    """Schema for user login (username or email)"""
    username: Optional[str] = None
    email: Optional[EmailStr] = None
    password: str

class UserResponse(BaseModel):
    """Schema for user response"""
    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: Optional[str] = None
    created_at: datetime
    
    class Config:
        from_attributes = True

class OwnerSummary(BaseModel):
    """Public-safe projection of a user embedded in other resources"""
    id: int
    username: str
    full_name: str
    avatar_url: str

    class Config:
        from_attributes = True

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class LoginResponse(TokenPair):
    user: UserResponse

class RefreshTokenRequest(BaseModel):
    refresh_token: Optional[str] = None

class PasswordChange(BaseModel):
    old_password: str
    new_password: str = Field(..., min_length=6)
    confirm_password: str

class AccountUpdate(BaseModel):
    full_name: str = Field(..., min_length=1)
    email: EmailStr

    class Config:
        str_strip_whitespace = True

class ChannelProfile(BaseModel):
    """Channel page header with live subscription counts"""
    id: int
    username: str
    full_name: str
    email: str
    avatar_url: str
    cover_image_url: Optional[str] = None
    subscriber_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
