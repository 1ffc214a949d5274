from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class FileSummary(BaseModel):
    document_id: str
    title: str
    file_extension: str | None = None
    file_type: str | None = None
    owner_name: str
    last_modified_at: datetime


class FilePageResponse(BaseModel):
    source: str
    page: int
    page_size: int
    has_previous: bool
    has_next: bool
    files: list[FileSummary]


class MarkViewedResponse(BaseModel):
    document_id: str
    viewer_id: str
    last_viewed_at: datetime


class LinkedFile(FileSummary):
    link_id: str
    visibility: str


class LinkedFilesResponse(BaseModel):
    record_id: str
    total: int
    files: list[LinkedFile]


class RecordTypeResponse(BaseModel):
    name: str
    label: str
    plural_label: str
    key_prefix: str


class DescribeResponse(BaseModel):
    record_type: RecordTypeResponse | None = None


class SelectionRequest(BaseModel):
    record_ids: list[str] = Field(default_factory=list)


class SelectionResponse(BaseModel):
    record_ids: list[str]
    record_type: RecordTypeResponse


class AttachRequest(BaseModel):
    record_ids: list[str] = Field(default_factory=list)
    file_ids: list[str] = Field(default_factory=list)
    notify: bool = False


class AttachResponse(BaseModel):
    links_created: int
    links_skipped: int
    notifications_created: int
    link_ids: list[str]
    notification_ids: list[str]


class AuditResponse(BaseModel):
    object_type: str
    object_id: str
    events: list[dict[str, Any]]


class HealthResponse(BaseModel):
    status: Literal["ok"]
    timestamp: datetime


class HealthDetailsResponse(BaseModel):
    status: Literal["ok"]
    timestamp: datetime
    database_ok: bool
    counts: dict[str, int]
    last_attach_at: datetime | None = None
