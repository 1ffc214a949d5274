from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from doclink.enums import LinkVisibility
from doclink.models.base import Base, CreatedByMixin, TimestampedMixin, prefixed_id


class Document(Base, TimestampedMixin):
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_last_modified_at", "last_modified_at"),
        Index("ix_documents_title", "title"),
    )

    document_id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: prefixed_id("doc"))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_extension: Mapped[str | None] = mapped_column(String(40), nullable=True)
    file_type: Mapped[str | None] = mapped_column(String(40), nullable=True)
    owner_name: Mapped[str] = mapped_column(String(120), nullable=False)
    last_modified_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    versions: Mapped[list["DocumentVersion"]] = relationship(back_populates="document")
    links: Mapped[list["DocumentLink"]] = relationship(back_populates="document")


class DocumentVersion(Base, TimestampedMixin):
    __tablename__ = "document_versions"
    __table_args__ = (
        UniqueConstraint("document_id", "version_number", name="uq_document_versions_number"),
        Index("ix_document_versions_document_id", "document_id"),
    )

    version_id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: prefixed_id("ver"))
    document_id: Mapped[str] = mapped_column(ForeignKey("documents.document_id"), nullable=False)
    version_number: Mapped[int] = mapped_column(Integer, nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    document: Mapped["Document"] = relationship(back_populates="versions")


class RecentView(Base):
    __tablename__ = "recent_views"
    __table_args__ = (
        UniqueConstraint("viewer_id", "document_id", name="uq_recent_views_viewer_document"),
        Index("ix_recent_views_viewer_id", "viewer_id"),
    )

    view_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    viewer_id: Mapped[str] = mapped_column(String(120), nullable=False)
    document_id: Mapped[str] = mapped_column(ForeignKey("documents.document_id"), nullable=False)
    last_viewed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class RecordType(Base):
    __tablename__ = "record_types"

    key_prefix: Mapped[str] = mapped_column(String(16), primary_key=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False, unique=True)
    label: Mapped[str] = mapped_column(String(120), nullable=False)
    plural_label: Mapped[str] = mapped_column(String(120), nullable=False)


class DocumentLink(Base, CreatedByMixin):
    __tablename__ = "document_links"
    __table_args__ = (
        UniqueConstraint("linked_entity_id", "document_id", name="uq_document_links_entity_document"),
        Index("ix_document_links_document_id", "document_id"),
    )

    link_id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: prefixed_id("lnk"))
    linked_entity_id: Mapped[str] = mapped_column(String(64), nullable=False)
    document_id: Mapped[str] = mapped_column(ForeignKey("documents.document_id"), nullable=False)
    visibility: Mapped[LinkVisibility] = mapped_column(Enum(LinkVisibility), default=LinkVisibility.viewer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    document: Mapped["Document"] = relationship(back_populates="links")


class FeedItem(Base, CreatedByMixin):
    __tablename__ = "feed_items"
    __table_args__ = (Index("ix_feed_items_parent_id", "parent_id"),)

    feed_item_id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: prefixed_id("fdi"))
    parent_id: Mapped[str] = mapped_column(String(64), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    related_record_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class AuditEvent(Base):
    __tablename__ = "audit_events"
    __table_args__ = (Index("ix_audit_object", "object_type", "object_id"),)

    audit_id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: prefixed_id("aud"))
    actor: Mapped[str] = mapped_column(String(120), nullable=False)
    action: Mapped[str] = mapped_column(String(80), nullable=False)
    object_type: Mapped[str] = mapped_column(String(30), nullable=False)
    object_id: Mapped[str] = mapped_column(String(64), nullable=False)
    correlation_id: Mapped[str] = mapped_column(String(64), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    metadata_blob: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
