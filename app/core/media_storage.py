# ============================================================================
# FILE: app/core/media_storage.py
# Media storage backends: Cloudinary in production, local disk for development
# ============================================================================
from abc import ABC, abstractmethod
import cloudinary
import cloudinary.uploader
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional
from uuid import uuid4
import logging
import os
import shutil

from app.config import settings
from app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class MediaStorage(ABC):
    """Interface used by the services: upload(local_path) and delete(url)"""

    @abstractmethod
    def upload(self, local_path: str) -> Dict[str, Optional[object]]:
        """Store a local file and return {"url": ..., "duration": ...}"""
        pass

    @abstractmethod
    def delete(self, url: str) -> None:
        pass


class CloudinaryMediaStorage(MediaStorage):
    """Uploads to Cloudinary with resource_type auto (images and videos)"""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True,
        )

    @staticmethod
    def public_id_from_url(url: str) -> str:
        """https://res.cloudinary.com/<cloud>/video/upload/v1/abc.mp4 -> abc"""
        last_part = url.rstrip("/").split("/")[-1]
        return last_part.split(".")[0]

    def upload(self, local_path: str) -> Dict[str, Optional[object]]:
        try:
            result = cloudinary.uploader.upload(local_path, resource_type="auto")
        except Exception as e:
            logger.error(f"Cloudinary upload failed for {local_path}: {e}")
            raise UpstreamError("Media upload failed")
        logger.info(f"Uploaded media to Cloudinary: {result.get('public_id')}")
        return {"url": result.get("secure_url"), "duration": result.get("duration")}

    def delete(self, url: str) -> None:
        public_id = self.public_id_from_url(url)
        resource_type = "video" if "/video/" in url else "image"
        try:
            cloudinary.uploader.destroy(public_id, resource_type=resource_type)
        except Exception as e:
            logger.error(f"Cloudinary delete failed for {public_id}: {e}")
            raise UpstreamError("Media delete failed")
        logger.info(f"Deleted media from Cloudinary: {public_id}")


class LocalMediaStorage(MediaStorage):
    """Copies files under a local directory served at /media"""

    def __init__(self, root: str, base_url: str = "/media"):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def upload(self, local_path: str) -> Dict[str, Optional[object]]:
        ext = os.path.splitext(local_path)[1]
        filename = f"{uuid4().hex}{ext}"
        try:
            shutil.copyfile(local_path, self.root / filename)
        except OSError as e:
            logger.error(f"Local media write failed for {local_path}: {e}")
            raise UpstreamError("Media upload failed")
        return {"url": f"{self.base_url}/{filename}", "duration": None}

    def delete(self, url: str) -> None:
        filename = url.rstrip("/").split("/")[-1]
        target = self.root / filename
        if target.exists():
            target.unlink()
            logger.info(f"Deleted local media: {filename}")


def build_media_storage() -> MediaStorage:
    if settings.MEDIA_BACKEND == "local":
        return LocalMediaStorage(settings.MEDIA_ROOT)
    if not settings.CLOUDINARY_CLOUD_NAME:
        logger.warning("Cloudinary is not configured; uploads will fail")
    return CloudinaryMediaStorage(
        settings.CLOUDINARY_CLOUD_NAME,
        settings.CLOUDINARY_API_KEY,
        settings.CLOUDINARY_API_SECRET,
    )


@lru_cache
def get_media_storage() -> MediaStorage:
    """FastAPI dependency returning the configured backend"""
    return build_media_storage()


def delete_quietly(storage: MediaStorage, url: Optional[str]) -> None:
    """Best-effort removal of media that is no longer referenced"""
    if not url:
        return
    try:
        storage.delete(url)
    except UpstreamError:
        logger.warning(f"Could not delete old media {url}")
