import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    pass


@contextmanager
def store_guard(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise any database failure as ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s failed: %s", operation, exc)
        raise StoreError(f"{operation} failed: {exc}") from exc
