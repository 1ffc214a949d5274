from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from doclink.config import Settings, get_settings
from doclink.database import get_db
from doclink.schemas import (
    AttachRequest,
    AttachResponse,
    DescribeResponse,
    RecordTypeResponse,
    SelectionRequest,
    SelectionResponse,
)
from doclink.services.describe import RecordTypeDescriptor, describe_records, open_selection
from doclink.services.links import attach_files
from doclink.services.store import StoreError
from doclink.services.validation import ValidationError

router = APIRouter(prefix="/api/v1/links", tags=["links"])


def _record_type(descriptor: RecordTypeDescriptor) -> RecordTypeResponse:
    return RecordTypeResponse(
        name=descriptor.name,
        label=descriptor.label,
        plural_label=descriptor.plural_label,
        key_prefix=descriptor.key_prefix,
    )


@router.post("/selection", response_model=SelectionResponse)
def start_selection(request: SelectionRequest, db: Session = Depends(get_db)) -> SelectionResponse:
    try:
        selection = open_selection(db, request.record_ids)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return SelectionResponse(record_ids=selection.record_ids, record_type=_record_type(selection.descriptor))


@router.get("/describe", response_model=DescribeResponse)
def describe(record_ids: list[str] = Query(default=[]), db: Session = Depends(get_db)) -> DescribeResponse:
    try:
        descriptor = describe_records(db, record_ids)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return DescribeResponse(record_type=_record_type(descriptor) if descriptor else None)


@router.post("/attach", response_model=AttachResponse)
def attach(
    request: AttachRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AttachResponse:
    try:
        outcome = attach_files(
            db,
            record_ids=request.record_ids,
            file_ids=request.file_ids,
            notify=request.notify,
            actor=settings.operator_id,
            notification_body=settings.notification_body,
            visibility=settings.link_visibility,
            correlation_id=f"api-attach:{settings.operator_id}",
        )
    except ValidationError as exc:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return AttachResponse(
        links_created=outcome.links_created,
        links_skipped=outcome.links_skipped,
        notifications_created=outcome.notifications_created,
        link_ids=outcome.link_ids,
        notification_ids=outcome.notification_ids,
    )
