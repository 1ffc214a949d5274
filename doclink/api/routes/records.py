from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from doclink.database import get_db
from doclink.schemas import LinkedFile, LinkedFilesResponse
from doclink.services.records import list_linked_documents
from doclink.services.store import StoreError

router = APIRouter(prefix="/api/v1/records", tags=["records"])


@router.get("/{record_id}/files", response_model=LinkedFilesResponse)
def linked_files(record_id: str, db: Session = Depends(get_db)) -> LinkedFilesResponse:
    try:
        items = list_linked_documents(db, record_id)
    except StoreError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return LinkedFilesResponse(record_id=record_id, total=len(items), files=[LinkedFile(**item) for item in items])
