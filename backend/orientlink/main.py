"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from orientlink.config import get_settings
from orientlink.db.base import Base
from orientlink.db.session import SessionLocal, engine
from orientlink.errors import register_exception_handlers
from orientlink.routers import analysis, providers

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _warm_backend_state() -> None:
    """Prime the DB connection at process start, creating tables when configured to."""

    try:
        if get_settings().auto_create_schema:
            Base.metadata.create_all(engine)
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Backend warm-up failed; continuing without startup pre-warm.")


@asynccontextmanager
async def lifespan(_: FastAPI):
    _configure_logging()
    _warm_backend_state()
    yield


settings = get_settings()
app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

# Every /api/v1 route is open; there is no authentication layer in front of it.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(analysis.router, prefix="/api/v1", tags=["analysis"])
app.include_router(providers.router, prefix="/api/v1", tags=["providers"])


@app.get("/health")
def health() -> dict[str, str]:
    """Simple health check endpoint."""

    return {"status": "ok"}
