"""
Race Tracker API

FastAPI application for managing a personal race catalog.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from racetracker import __version__
from racetracker.config import settings
from racetracker.db.session import init_db, AsyncSessionLocal
from racetracker.api.v1.router import api_router
from racetracker.features.users.service import ensure_admin_user
from racetracker.shared.responses import envelope, register_exception_handlers


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


async def _ensure_admin() -> None:
    """Create the configured admin account, if one is configured."""
    if not settings.admin_configured:
        logger.info("Admin bootstrap skipped (ADMIN_EMAIL or ADMIN_PASSWORD not set)")
        return
    async with AsyncSessionLocal() as session:
        await ensure_admin_user(
            session,
            email=settings.admin_email,
            password=settings.admin_password,
            name=settings.admin_name,
        )


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    logger.info("Starting Race Tracker API...")
    await init_db()
    logger.info("Database initialized")
    await _ensure_admin()

    yield

    # Shutdown
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="Race Tracker API",
    description="Personal race catalog with statistics and reports",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Errors ===
register_exception_handlers(app)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return envelope(message="Server is running", version=__version__)
