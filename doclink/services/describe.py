from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from doclink.constants import EMPTY_SELECTION_MESSAGE
from doclink.models.base import key_prefix_of
from doclink.models.core import RecordType
from doclink.services.store import store_guard
from doclink.services.utils import normalize_ids
from doclink.services.validation import EmptySelectionError, require


@dataclass(frozen=True)
class RecordTypeDescriptor:
    name: str
    label: str
    plural_label: str
    key_prefix: str


@dataclass
class Selection:
    record_ids: list[str]
    descriptor: RecordTypeDescriptor


def _describe_record(db: Session, record_id: str) -> RecordTypeDescriptor:
    prefix = key_prefix_of(record_id)
    require(bool(prefix), f"Cannot infer object type from id: {record_id}")
    with store_guard(db, "record type lookup"):
        record_type = db.get(RecordType, prefix)
    require(record_type is not None, f"Cannot infer object type from id: {record_id}")
    return RecordTypeDescriptor(
        name=record_type.name,
        label=record_type.label,
        plural_label=record_type.plural_label,
        key_prefix=record_type.key_prefix,
    )


def describe_records(db: Session, record_ids: Iterable[str]) -> RecordTypeDescriptor | None:
    """Describe the object type of the first record id, or ``None`` for no ids."""
    ids = normalize_ids(record_ids)
    if not ids:
        return None
    return _describe_record(db, ids[0])


def open_selection(db: Session, record_ids: Iterable[str]) -> Selection:
    ids = normalize_ids(record_ids)
    if not ids:
        raise EmptySelectionError(EMPTY_SELECTION_MESSAGE)
    return Selection(record_ids=ids, descriptor=_describe_record(db, ids[0]))
