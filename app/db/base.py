# ============================================================================
# FILE: app/db/base.py
# ============================================================================
from sqlalchemy.orm import declarative_base

Base = declarative_base()

def import_models() -> None:
    """Register every model on Base.metadata before create_all"""
    from app.db.models import (  # noqa: F401
        comment, history, like, playlist, subscription, tweet, user, video
    )
