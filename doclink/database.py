from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from doclink.config import get_settings


def _enforce_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:  # type: ignore[no-untyped-def]
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """Build the engine for the document store.

    SQLite connections get foreign key enforcement switched on, which the
    link and version tables depend on.
    """
    db_engine = create_engine(database_url, pool_pre_ping=True)
    if db_engine.dialect.name == "sqlite":
        event.listen(db_engine, "connect", _enforce_sqlite_foreign_keys)
    return db_engine


def create_session_factory(db_engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)


engine = create_db_engine(get_settings().database_url)
SessionLocal = create_session_factory(engine)


def get_db() -> Generator[Session]:
    """Request-scoped session for FastAPI dependencies."""
    with SessionLocal() as db:
        yield db
