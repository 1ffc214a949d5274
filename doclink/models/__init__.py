from doclink.models.core import (
    AuditEvent,
    Document,
    DocumentLink,
    DocumentVersion,
    FeedItem,
    RecentView,
    RecordType,
)

__all__ = [
    "AuditEvent",
    "Document",
    "DocumentLink",
    "DocumentVersion",
    "FeedItem",
    "RecentView",
    "RecordType",
]
