import os

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_doclink.db")
os.environ.setdefault("OPERATOR_ID", "test-operator")
os.environ.setdefault("NOTIFICATION_BODY", "attached a file")

from doclink.config import get_settings  # noqa: E402
from doclink.database import SessionLocal, engine  # noqa: E402
from doclink.main import create_app  # noqa: E402
from doclink.models.base import Base  # noqa: E402
from doclink.services.schema import ensure_runtime_schema  # noqa: E402


@pytest.fixture(autouse=True)
def reset_db():
    get_settings.cache_clear()
    Base.metadata.drop_all(bind=engine)
    ensure_runtime_schema(engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client():
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    with SessionLocal() as db:
        yield db
        db.rollback()
