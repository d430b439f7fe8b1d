"""FastAPI application: wiring of routers, middleware and startup checks."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import documents_router, folders_router, search_router, tags_router, tree_router
from .core.config import settings, ConfigurationError, Environment
from .core.logging_config import setup_logging
from .exceptions import NotekeeperException
from .middleware.exception_handler import notekeeper_exception_handler
from .middleware.request_context import RequestContextMiddleware
from .storage import Storage, get_storage

setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = logging.getLogger(__name__)

API_NAME = "Notekeeper API"


def _check_configuration() -> None:
    """Exit in production on an unsafe config; only warn in development."""
    try:
        settings.validate_production_config()
    except ConfigurationError as e:
        logger.critical(f"STARTUP BLOCKED: {e}")
        raise SystemExit(1) from e

    if settings.environment == Environment.DEVELOPMENT and settings.localhost_origins():
        logger.warning(
            "CORS allows localhost origins %s; set CORS_ALLOWED_ORIGINS before deploying",
            settings.localhost_origins(),
        )


def _prepare_storage(storage: Storage) -> None:
    """Create the record directories and report what is already stored."""
    try:
        storage.ensure_directories()
    except OSError as e:
        logger.critical(
            f"Cannot create data directories under {storage.data_dir}: {e}. "
            "Check DATA_DIR and that its parent is writable."
        )
        raise SystemExit(1) from e

    logger.info(
        "Storage ready",
        extra={
            "data_dir": str(storage.data_dir),
            "documents": storage.documents.count(),
            "folders": storage.folders.count(),
        },
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {API_NAME} {__version__} ({settings.environment.value})")
    _check_configuration()
    # Honour test overrides of the storage dependency.
    _prepare_storage(app.dependency_overrides.get(get_storage, get_storage)())
    yield


app = FastAPI(
    title=API_NAME,
    description=(
        "Personal knowledge base backend: rich-text documents with tags, "
        "folders arranged as a tree, and substring search. "
        "Every document and folder is stored as its own JSON file."
    ),
    version=__version__,
    license_info={"name": "MIT", "url": "https://opensource.org/licenses/MIT"},
    lifespan=lifespan,
)

# Added last = outermost, so CORS headers are also set on 429 responses.
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

app.add_exception_handler(NotekeeperException, notekeeper_exception_handler)

for router in (documents_router, tags_router, folders_router, tree_router, search_router):
    app.include_router(router)


@app.get("/")
def root():
    return {"name": API_NAME, "version": __version__, "status": "running"}


_startup_time = time.monotonic()


@app.get("/health")
def health_check(storage: Storage = Depends(get_storage)):
    """Storage status, uptime and record counts.

    Never raises: an unusable data directory reports ``degraded`` with
    status 200 so probes can still read the body.
    """
    storage_ok = False
    document_count = folder_count = 0
    try:
        if storage.is_available():
            document_count = storage.documents.count()
            folder_count = storage.folders.count()
            storage_ok = True
    except OSError:
        logger.exception("Health check could not read the data directory")

    return {
        "status": "healthy" if storage_ok else "degraded",
        "storage": "ok" if storage_ok else "error",
        "uptime_seconds": round(time.monotonic() - _startup_time),
        "version": __version__,
        "document_count": document_count,
        "folder_count": folder_count,
    }
