import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from doclink.constants import LIKE_ESCAPE_CHAR
from doclink.enums import LookupSource
from doclink.models.core import Document, RecentView
from doclink.services.records import document_payload
from doclink.services.store import store_guard
from doclink.services.utils import escape_like
from doclink.services.validation import (
    ValidationError,
    coerce_positive_int,
    require,
    validate_offset,
    validate_page_size,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        # One extra row tells us whether a next page exists.
        return self.page_size + 1


@dataclass
class PageResult:
    page: int
    page_size: int
    has_previous: bool
    has_next: bool
    files: list[dict[str, Any]] = field(default_factory=list)


def build_page_request(page: Any, page_size: Any, *, max_page_size: int) -> PageRequest:
    parsed_page = coerce_positive_int(page, "page")
    parsed_page_size = coerce_positive_int(page_size, "page_size")
    validate_page_size(parsed_page_size, max_page_size)
    validate_offset(parsed_page, parsed_page_size)
    return PageRequest(page=parsed_page, page_size=parsed_page_size)


def _recent_statement(viewer_id: str) -> Select:
    return (
        select(Document)
        .join(RecentView, RecentView.document_id == Document.document_id)
        .where(RecentView.viewer_id == viewer_id)
    )


def _search_statement(term: str | None) -> Select:
    stmt = select(Document)
    normalized = (term or "").strip()
    if not normalized:
        return stmt
    pattern = f"%{escape_like(normalized)}%"
    full_name = Document.title + "." + func.coalesce(Document.file_extension, "")
    return stmt.where(
        or_(
            Document.title.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
            full_name.ilike(pattern, escape=LIKE_ESCAPE_CHAR),
        )
    )


def paginate(db: Session, stmt: Select, request: PageRequest) -> PageResult:
    ordered = (
        stmt.order_by(Document.last_modified_at.desc(), Document.document_id.asc())
        .offset(request.skip)
        .limit(request.limit)
    )
    with store_guard(db, "file lookup"):
        rows = list(db.scalars(ordered))
    has_next = len(rows) > request.page_size
    if has_next:
        rows = rows[: request.page_size]
    return PageResult(
        page=request.page,
        page_size=request.page_size,
        has_previous=request.skip > 0,
        has_next=has_next,
        files=[document_payload(row) for row in rows],
    )


def lookup(
    db: Session,
    source: LookupSource,
    *,
    page: Any,
    page_size: Any,
    max_page_size: int,
    viewer_id: str | None = None,
    term: str | None = None,
) -> PageResult:
    request = build_page_request(page, page_size, max_page_size=max_page_size)
    if source == LookupSource.recent:
        require(bool(viewer_id and viewer_id.strip()), "viewer_id is required for recent files")
        stmt = _recent_statement(viewer_id.strip())
    elif source == LookupSource.search:
        stmt = _search_statement(term)
    else:
        raise ValidationError(f"Unsupported lookup source: {source}")
    logger.debug("lookup source=%s page=%s page_size=%s", source.value, request.page, request.page_size)
    return paginate(db, stmt, request)


def lookup_recent(db: Session, *, viewer_id: str, page: Any, page_size: Any, max_page_size: int) -> PageResult:
    return lookup(
        db,
        LookupSource.recent,
        page=page,
        page_size=page_size,
        max_page_size=max_page_size,
        viewer_id=viewer_id,
    )


def lookup_search(db: Session, *, term: str | None, page: Any, page_size: Any, max_page_size: int) -> PageResult:
    return lookup(
        db,
        LookupSource.search,
        page=page,
        page_size=page_size,
        max_page_size=max_page_size,
        term=term,
    )
