from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from doclink.api.deps import get_viewer_id
from doclink.config import Settings, get_settings
from doclink.database import get_db
from doclink.enums import LookupSource
from doclink.schemas import FilePageResponse, FileSummary, MarkViewedResponse
from doclink.services.lookup import PageResult, lookup_recent, lookup_search
from doclink.services.records import get_document, mark_viewed
from doclink.services.store import StoreError
from doclink.services.validation import ValidationError

router = APIRouter(prefix="/api/v1/files", tags=["files"])


def _page_response(source: LookupSource, result: PageResult) -> FilePageResponse:
    return FilePageResponse(
        source=source.value,
        page=result.page,
        page_size=result.page_size,
        has_previous=result.has_previous,
        has_next=result.has_next,
        files=[FileSummary(**item) for item in result.files],
    )


@router.get("/recent", response_model=FilePageResponse)
def recent_files(
    page: str = Query(default="1"),
    page_size: str | None = Query(default=None),
    viewer_id: str = Depends(get_viewer_id),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> FilePageResponse:
    try:
        result = lookup_recent(
            db,
            viewer_id=viewer_id,
            page=page,
            page_size=page_size if page_size is not None else settings.default_page_size,
            max_page_size=settings.max_page_size,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return _page_response(LookupSource.recent, result)


@router.get("/search", response_model=FilePageResponse)
def search_files(
    q: str = Query(default=""),
    page: str = Query(default="1"),
    page_size: str | None = Query(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> FilePageResponse:
    try:
        result = lookup_search(
            db,
            term=q,
            page=page,
            page_size=page_size if page_size is not None else settings.default_page_size,
            max_page_size=settings.max_page_size,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return _page_response(LookupSource.search, result)


@router.get("/{document_id}", response_model=FileSummary)
def fetch_file(document_id: str, db: Session = Depends(get_db)) -> FileSummary:
    try:
        payload = get_document(db, document_id)
    except ValidationError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return FileSummary(**payload)


@router.post("/{document_id}/views", response_model=MarkViewedResponse)
def record_view(
    document_id: str,
    viewer_id: str = Depends(get_viewer_id),
    db: Session = Depends(get_db),
) -> MarkViewedResponse:
    try:
        view = mark_viewed(db, viewer_id=viewer_id, document_id=document_id)
    except ValidationError as exc:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    db.commit()
    return MarkViewedResponse(document_id=view.document_id, viewer_id=view.viewer_id, last_viewed_at=view.last_viewed_at)
