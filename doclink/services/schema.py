from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from doclink.constants import DEFAULT_RECORD_TYPES
from doclink.models.base import Base
from doclink.models.core import RecordType


def _create_tables_if_missing(engine: Engine) -> None:
    existing_tables = set(inspect(engine).get_table_names())
    required_tables = set(Base.metadata.tables)
    if required_tables.issubset(existing_tables):
        return
    Base.metadata.create_all(bind=engine)


def seed_record_types(engine: Engine) -> int:
    with Session(engine) as db:
        known = set(db.scalars(select(RecordType.key_prefix)))
        missing = [RecordType(**item) for item in DEFAULT_RECORD_TYPES if item["key_prefix"] not in known]
        db.add_all(missing)
        db.commit()
    return len(missing)


def ensure_runtime_schema(engine: Engine) -> int:
    _create_tables_if_missing(engine)
    return seed_record_types(engine)
