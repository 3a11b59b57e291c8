# ============================================================================
# FILE: app/services/toggle.py
# ============================================================================
from dataclasses import dataclass
from typing import Any, Dict, Optional
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.core.exceptions import ConflictError
import logging

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2


@dataclass
class ToggleOutcome:
    added: bool
    record: Optional[Any] = None


def toggle_relation(db: Session, model, match: Dict[str, Any]) -> ToggleOutcome:
    """
    Flip a relation row between present and absent in one conditional step

    The conditional delete reports whether it matched; only when it matched
    nothing is a row inserted. The unique constraint on the pair rejects the
    losing insert of two concurrent toggles, and that toggle is retried,
    so the store never holds two rows for one pair.
    """
    for attempt in range(1, MAX_ATTEMPTS + 1):
        result = db.execute(delete(model).filter_by(**match))
        if result.rowcount:
            db.commit()
            logger.info(f"Removed {model.__name__} {match}")
            return ToggleOutcome(added=False)

        record = model(**match)
        db.add(record)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Concurrent toggle on {model.__name__} {match} (attempt {attempt})")
            continue
        db.refresh(record)
        logger.info(f"Added {model.__name__} {match}")
        return ToggleOutcome(added=True, record=record)

    raise ConflictError("Relation changed concurrently, please retry")
