"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.api.errors import register_exception_handlers
from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.services.storage import ArchiveStorage
from app.services.users import ensure_bootstrap_admin

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    storage = ArchiveStorage(settings.UPLOAD_DIR)
    storage.ensure_dir()
    logger.info("Upload directory: %s", storage.root)

    if settings.BOOTSTRAP_ADMIN_USERNAME and settings.BOOTSTRAP_ADMIN_PASSWORD:
        db = SessionLocal()
        try:
            ensure_bootstrap_admin(
                db,
                username=settings.BOOTSTRAP_ADMIN_USERNAME,
                password=settings.BOOTSTRAP_ADMIN_PASSWORD.get_secret_value(),
                name=settings.BOOTSTRAP_ADMIN_NAME,
                email=settings.BOOTSTRAP_ADMIN_EMAIL,
            )
        finally:
            db.close()
    yield
    logger.info("Archive API shutting down")


app = FastAPI(
    title="Archive API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(v1_router, prefix=settings.API_PREFIX)

# Stored files are reachable read-only by their generated names.
app.mount(
    settings.UPLOADS_URL_PATH,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Archive API"}
