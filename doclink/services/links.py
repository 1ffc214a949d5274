"""Attach files to business records.

Links are created only for (record, file) pairs that are not linked yet.
Feed notifications are posted for every pair when requested, whether or not
the pair produced a new link, and are never deduplicated.

Links and notifications are written in two separate transactions. If the
notification write fails the links stay committed and the caller gets a
``StoreError``.

Each transaction audits per record: ``files_attached`` for records that got
new links, ``attach_notified`` for records that got notifications.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from doclink.enums import LinkVisibility
from doclink.models.base import prefixed_id
from doclink.models.core import Document, DocumentLink, DocumentVersion, FeedItem
from doclink.services.audit import emit_audit_event
from doclink.services.store import store_guard
from doclink.services.utils import normalize_ids, now_utc
from doclink.services.validation import require

logger = logging.getLogger(__name__)


@dataclass
class AttachOutcome:
    links_created: int = 0
    links_skipped: int = 0
    notifications_created: int = 0
    link_ids: list[str] = field(default_factory=list)
    notification_ids: list[str] = field(default_factory=list)


def existing_link_pairs(db: Session, record_ids: list[str], document_ids: list[str]) -> set[tuple[str, str]]:
    stmt = select(DocumentLink.link_id, DocumentLink.linked_entity_id, DocumentLink.document_id).where(
        DocumentLink.linked_entity_id.in_(record_ids),
        DocumentLink.document_id.in_(document_ids),
    )
    return {(row.linked_entity_id, row.document_id) for row in db.execute(stmt)}


def latest_published_versions(db: Session, document_ids: list[str]) -> dict[str, str]:
    stmt = (
        select(DocumentVersion.document_id, DocumentVersion.version_id)
        .where(DocumentVersion.document_id.in_(document_ids), DocumentVersion.is_published.is_(True))
        .order_by(DocumentVersion.document_id, DocumentVersion.version_number.asc())
    )
    latest: dict[str, str] = {}
    for document_id, version_id in db.execute(stmt):
        latest[document_id] = version_id
    return latest


def _build_link(record_id: str, document_id: str, *, visibility: LinkVisibility, actor: str) -> DocumentLink:
    return DocumentLink(
        link_id=prefixed_id("lnk"),
        linked_entity_id=record_id,
        document_id=document_id,
        visibility=visibility,
        created_by=actor,
        created_at=now_utc(),
    )


def _insert_links(
    db: Session,
    pairs: list[tuple[str, str]],
    *,
    visibility: LinkVisibility,
    actor: str,
) -> list[DocumentLink]:
    if not pairs:
        return []
    links = [_build_link(record_id, document_id, visibility=visibility, actor=actor) for record_id, document_id in pairs]
    try:
        with db.begin_nested():
            db.add_all(links)
        return links
    except IntegrityError:
        logger.warning("Link batch hit the uniqueness constraint; retrying %d pairs individually", len(pairs))

    created: list[DocumentLink] = []
    for record_id, document_id in pairs:
        link = _build_link(record_id, document_id, visibility=visibility, actor=actor)
        try:
            with db.begin_nested():
                db.add(link)
        except IntegrityError:
            logger.info("Pair already linked by a concurrent request: %s -> %s", record_id, document_id)
            continue
        created.append(link)
    return created


def attach_files(
    db: Session,
    *,
    record_ids: Iterable[str],
    file_ids: Iterable[str],
    notify: bool,
    actor: str,
    notification_body: str,
    visibility: LinkVisibility = LinkVisibility.viewer,
    correlation_id: str = "attach",
) -> AttachOutcome:
    records = normalize_ids(record_ids)
    documents = normalize_ids(file_ids)
    outcome = AttachOutcome()
    if not records or not documents:
        return outcome

    with store_guard(db, "existing link lookup"):
        known = set(db.scalars(select(Document.document_id).where(Document.document_id.in_(documents))))
        missing = [document_id for document_id in documents if document_id not in known]
        require(not missing, f"Document not found: {', '.join(missing)}")
        existing = existing_link_pairs(db, records, documents)
        versions = latest_published_versions(db, documents) if notify else {}

    staged_pairs: list[tuple[str, str]] = []
    staged_posts: list[FeedItem] = []
    for record_id in records:
        for document_id in documents:
            if (record_id, document_id) not in existing:
                staged_pairs.append((record_id, document_id))
            if notify:
                staged_posts.append(
                    FeedItem(
                        feed_item_id=prefixed_id("fdi"),
                        parent_id=record_id,
                        body=notification_body,
                        related_record_id=versions.get(document_id),
                        created_by=actor,
                        created_at=now_utc(),
                    )
                )

    with store_guard(db, "link creation"):
        created = _insert_links(db, staged_pairs, visibility=visibility, actor=actor)
        created_by_record: dict[str, list[str]] = {}
        for link in created:
            created_by_record.setdefault(link.linked_entity_id, []).append(link.document_id)
        for record_id, document_ids in created_by_record.items():
            emit_audit_event(
                db,
                actor=actor,
                action="files_attached",
                object_type="record",
                object_id=record_id,
                correlation_id=correlation_id,
                metadata_blob={"document_ids": document_ids, "visibility": visibility.value},
            )
        db.commit()

    outcome.links_created = len(created)
    outcome.links_skipped = len(records) * len(documents) - len(created)
    outcome.link_ids = [link.link_id for link in created]
    logger.info(
        "Attached %d files to %d records: %d links created, %d skipped",
        len(documents),
        len(records),
        outcome.links_created,
        outcome.links_skipped,
    )

    if staged_posts:
        with store_guard(db, "notification creation"):
            db.add_all(staged_posts)
            posts_by_record: dict[str, int] = {}
            for post in staged_posts:
                posts_by_record[post.parent_id] = posts_by_record.get(post.parent_id, 0) + 1
            for record_id, count in posts_by_record.items():
                emit_audit_event(
                    db,
                    actor=actor,
                    action="attach_notified",
                    object_type="record",
                    object_id=record_id,
                    correlation_id=correlation_id,
                    metadata_blob={"document_ids": documents, "notifications": count},
                )
            db.commit()
        outcome.notifications_created = len(staged_posts)
        outcome.notification_ids = [post.feed_item_id for post in staged_posts]
        logger.info("Posted %d attach notifications", outcome.notifications_created)

    return outcome
