import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from sqlalchemy import text

from doclink.api.routes import audit, files, health, links, records
from doclink.config import get_settings
from doclink.database import SessionLocal, engine
from doclink.services.schema import ensure_runtime_schema


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    ensure_runtime_schema(engine)
    with SessionLocal() as db:
        db.execute(text("SELECT 1"))
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="doclink",
        version="0.1.0",
        description="Recent and searched file lookup, and file-to-record linking.",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(files.router)
    app.include_router(links.router)
    app.include_router(records.router)
    app.include_router(audit.router)

    @app.get("/meta")
    def meta() -> dict:
        settings = get_settings()
        return {
            "service": "doclink",
            "version": "0.1.0",
            "operator_id": settings.operator_id,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    return app


app = create_app()
