import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from leaguedesk.errors import PersistenceError

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, action: str) -> None:
    """Commit the session, turning store failures into PersistenceError."""
    try:
        db.commit()
    except SQLAlchemyError as exc:
        logger.error(f"Failed to {action}: {exc}", exc_info=True)
        db.rollback()
        raise PersistenceError(f"Could not {action}. Please try again.") from exc


@contextmanager
def reading(db: Session, action: str) -> Iterator[None]:
    """Run store reads, turning failures into PersistenceError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Failed to {action}: {exc}", exc_info=True)
        db.rollback()
        raise PersistenceError(f"Could not {action}. Please try again.") from exc
