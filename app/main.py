# ============================================================================
# FILE: app/main.py
# ============================================================================
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from app.api.v1.router import api_router
from app.core.exceptions import error_response, register_exception_handlers
from app.core.logging import setup_logging
from app.config import settings
import asyncio
import logging
import os

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title="VideoTube API",
    description="Video sharing backend: channels, videos, comments, likes, playlists and tweets",
    version="1.0.0"
)

register_exception_handlers(app)

@app.middleware("http")
async def request_deadline(request: Request, call_next):
    """Answer 504 when a request outlives REQUEST_TIMEOUT_SECONDS"""
    try:
        return await asyncio.wait_for(call_next(request), timeout=settings.REQUEST_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        logger.error(f"Request timed out: {request.method} {request.url.path}")
        return error_response(504, "Request timed out")

# CORS middleware, outermost so timeout answers carry CORS headers too
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API v1 router
app.include_router(api_router, prefix="/api/v1")

# Serve locally stored media when running without Cloudinary
if settings.MEDIA_BACKEND == "local":
    os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
    app.mount("/media", StaticFiles(directory=settings.MEDIA_ROOT), name="media")

@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    logger.info("Starting VideoTube API")
    # Create database tables if they do not exist yet
    from app.db.base import Base, import_models
    from app.db.session import engine
    import_models()
    Base.metadata.create_all(bind=engine)

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    from app.db.session import engine
    engine.dispose()
    logger.info("Shutting down VideoTube API")

@app.get("/health")
async def health_check():
    return {"status": "healthy"}

@app.get("/")
async def root():
    return {"message": "VideoTube API", "version": "1.0.0", "docs": "/docs"}
