from sqlalchemy.orm import Session

from doclink.models.core import AuditEvent
from doclink.services.utils import now_utc


def emit_audit_event(
    db: Session,
    *,
    actor: str,
    action: str,
    object_type: str,
    object_id: str,
    correlation_id: str,
    metadata_blob: dict | None = None,
) -> AuditEvent:
    event = AuditEvent(
        actor=actor,
        action=action,
        object_type=object_type,
        object_id=object_id,
        correlation_id=correlation_id,
        timestamp=now_utc(),
        metadata_blob=metadata_blob or {},
    )
    db.add(event)
    return event
