# ============================================================================
# FILE: app/core/logging.py
# ============================================================================
import logging
from app.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging() -> None:
    """Configure root logging once for the whole process"""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)

    # passlib probes the bcrypt version at import and logs a noisy traceback
    logging.getLogger("passlib").setLevel(logging.ERROR)
