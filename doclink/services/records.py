from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from doclink.models.core import AuditEvent, Document, DocumentLink, RecentView
from doclink.services.store import store_guard
from doclink.services.utils import now_utc
from doclink.services.validation import require


def document_payload(document: Document) -> dict[str, Any]:
    return {
        "document_id": document.document_id,
        "title": document.title,
        "file_extension": document.file_extension,
        "file_type": document.file_type,
        "owner_name": document.owner_name,
        "last_modified_at": document.last_modified_at,
    }


def get_document(db: Session, document_id: str) -> dict[str, Any]:
    with store_guard(db, "document lookup"):
        document = db.get(Document, document_id)
    require(document is not None, f"Document not found: {document_id}")
    return document_payload(document)


def list_linked_documents(db: Session, record_id: str) -> list[dict[str, Any]]:
    stmt = (
        select(Document, DocumentLink)
        .join(DocumentLink, DocumentLink.document_id == Document.document_id)
        .where(DocumentLink.linked_entity_id == record_id)
        .order_by(Document.last_modified_at.desc(), Document.document_id.asc())
    )
    with store_guard(db, "linked document lookup"):
        rows = db.execute(stmt).all()
    items: list[dict[str, Any]] = []
    for document, link in rows:
        payload = document_payload(document)
        payload["link_id"] = link.link_id
        payload["visibility"] = link.visibility.value
        items.append(payload)
    return items


def mark_viewed(db: Session, *, viewer_id: str, document_id: str) -> RecentView:
    with store_guard(db, "view tracking"):
        document = db.get(Document, document_id)
        require(document is not None, f"Document not found: {document_id}")
        view = db.scalar(
            select(RecentView).where(RecentView.viewer_id == viewer_id, RecentView.document_id == document_id)
        )
        if view is None:
            view = RecentView(viewer_id=viewer_id, document_id=document_id, last_viewed_at=now_utc())
            db.add(view)
        else:
            view.last_viewed_at = now_utc()
        db.flush()
    return view


def get_audit_events(db: Session, object_type: str, object_id: str) -> list[dict[str, Any]]:
    stmt = (
        select(AuditEvent)
        .where(AuditEvent.object_type == object_type, AuditEvent.object_id == object_id)
        .order_by(AuditEvent.timestamp.asc())
    )
    with store_guard(db, "audit lookup"):
        rows = list(db.scalars(stmt))
    return [{column.name: getattr(row, column.name) for column in row.__table__.columns} for row in rows]
