from datetime import UTC, datetime, timedelta

from doclink.models.core import Document, DocumentLink, DocumentVersion, RecentView

BASE_TIME = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)


def create_document(
    db,
    *,
    title: str = "quarterly-report",
    file_extension: str | None = "pdf",
    file_type: str | None = "PDF",
    owner_name: str = "Dana Reyes",
    minutes_ago: int = 0,
    published_versions: int = 1,
) -> Document:
    document = Document(
        title=title,
        file_extension=file_extension,
        file_type=file_type,
        owner_name=owner_name,
        last_modified_at=BASE_TIME - timedelta(minutes=minutes_ago),
    )
    db.add(document)
    db.flush()
    for number in range(1, published_versions + 1):
        db.add(DocumentVersion(document_id=document.document_id, version_number=number, is_published=True))
    db.flush()
    return document


def create_documents(db, count: int, *, prefix: str = "file") -> list[Document]:
    # Newest first, matching lookup order.
    documents = [create_document(db, title=f"{prefix}-{index:03d}", minutes_ago=index) for index in range(count)]
    db.commit()
    return documents


def mark_recent(db, viewer_id: str, documents: list[Document]) -> None:
    for document in documents:
        db.add(RecentView(viewer_id=viewer_id, document_id=document.document_id, last_viewed_at=BASE_TIME))
    db.commit()


def link(db, record_id: str, document: Document, actor: str = "test-operator") -> DocumentLink:
    row = DocumentLink(
        linked_entity_id=record_id,
        document_id=document.document_id,
        created_by=actor,
        created_at=BASE_TIME,
    )
    db.add(row)
    db.commit()
    return row
