from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from doclink.database import get_db
from doclink.models.core import AuditEvent, Document, DocumentLink, FeedItem
from doclink.schemas import HealthDetailsResponse, HealthResponse
from doclink.services.store import StoreError, store_guard

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(UTC))


@router.get("/health/details", response_model=HealthDetailsResponse)
def health_details(db: Session = Depends(get_db)) -> HealthDetailsResponse:
    try:
        with store_guard(db, "health check"):
            db.execute(select(1))
            counts = {
                name: int(db.scalar(select(func.count()).select_from(model)) or 0)
                for name, model in (("documents", Document), ("links", DocumentLink), ("notifications", FeedItem))
            }
            last_attach = db.scalar(
                select(func.max(AuditEvent.timestamp)).where(AuditEvent.action == "files_attached")
            )
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return HealthDetailsResponse(
        status="ok",
        timestamp=datetime.now(UTC),
        database_ok=True,
        counts=counts,
        last_attach_at=last_attach,
    )
