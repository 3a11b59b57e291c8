# ============================================================================
# FILE: app/config.py
# ============================================================================
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""
    
    # App settings
    APP_NAME: str = "VideoTube"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./videotube.db"  # Change to PostgreSQL in production
    
    # Security
    SECRET_KEY: str = "your-secret-key-change-this-in-production"
    REFRESH_SECRET_KEY: str = "your-refresh-secret-key-change-this-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    REFRESH_TOKEN_EXPIRE_DAYS: int = 10
    COOKIE_SECURE: bool = True
    
    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]
    
    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 50
    
    # Requests that run longer than this are answered with 504
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    
    # Media storage ("cloudinary" or "local")
    MEDIA_BACKEND: str = "cloudinary"
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    MEDIA_ROOT: str = "./media"
    TEMP_UPLOAD_DIR: str = "./public/temp"
    
    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
