from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from doclink.database import get_db
from doclink.schemas import AuditResponse
from doclink.services.records import get_audit_events
from doclink.services.store import StoreError

router = APIRouter(prefix="/api/v1/audit", tags=["audit"])


@router.get("/{object_type}/{object_id}", response_model=AuditResponse)
def fetch_audit(object_type: str, object_id: str, db: Session = Depends(get_db)) -> AuditResponse:
    try:
        events = get_audit_events(db, object_type, object_id)
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return AuditResponse(object_type=object_type, object_id=object_id, events=events)
