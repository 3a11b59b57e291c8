# ============================================================================
# FILE: app/services/base.py
# ============================================================================
from typing import Optional, Type, TypeVar
from sqlalchemy.orm import Session
from app.core.exceptions import ForbiddenError, NotFoundError

ModelT = TypeVar("ModelT")


def get_or_404(db: Session, model: Type[ModelT], object_id: int, message: Optional[str] = None) -> ModelT:
    instance = db.get(model, object_id)
    if instance is None:
        raise NotFoundError(message or f"{model.__name__} not found")
    return instance


def ensure_owner(instance, user_id: int, message: Optional[str] = None) -> None:
    """Only the owner may mutate a resource"""
    if instance.owner_id != user_id:
        raise ForbiddenError(message or f"Only the owner can modify this {type(instance).__name__.lower()}")
