from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def prefixed_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:16]}"


def key_prefix_of(object_id: str) -> str:
    prefix, separator, _ = object_id.partition("_")
    return prefix if separator else ""


class Base(DeclarativeBase):
    pass


class TimestampedMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class CreatedByMixin:
    created_by: Mapped[str] = mapped_column(String(120), nullable=False)
