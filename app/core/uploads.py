# ============================================================================
# FILE: app/core/uploads.py
# ============================================================================
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
from uuid import uuid4
from fastapi import UploadFile
import logging
import os
import shutil

from app.config import settings

logger = logging.getLogger(__name__)


@contextmanager
def spooled_upload(upload: UploadFile, temp_dir: str = None) -> Iterator[str]:
    """
    Copy an incoming upload to a temporary file and yield its path
    The temporary file is removed on exit, whether the block succeeded or not
    """
    directory = Path(temp_dir or settings.TEMP_UPLOAD_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    ext = os.path.splitext(upload.filename or "")[1]
    path = directory / f"{uuid4().hex}{ext}"

    try:
        with open(path, "wb") as buffer:
            shutil.copyfileobj(upload.file, buffer)
        yield str(path)
    finally:
        try:
            os.remove(path)
        except OSError as e:
            logger.warning(f"Could not remove temp upload {path}: {e}")


def store_upload(storage, upload: UploadFile) -> dict:
    """Spool an upload to disk and hand it to the media storage"""
    with spooled_upload(upload) as local_path:
        return storage.upload(local_path)
