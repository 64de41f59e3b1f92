"""Billbook API — Main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from billbook import __version__
from billbook.config import settings
from billbook.core.database import async_session_factory, engine
from billbook.core.middleware import RequestLoggingMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting Billbook API", env=settings.app_env)
    yield
    logger.info("Shutting down Billbook API")
    await engine.dispose()


app = FastAPI(
    title="Billbook API",
    description="Personal income and expense tracking",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

# ── Middleware ─────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health Check ──────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check():
    """Liveness check: healthy whenever the process is serving requests."""
    return {"status": "healthy", "version": __version__}


@app.get("/ready", tags=["system"])
async def readiness_check():
    """Readiness check: the database answers a trivial query."""
    checks = {"database": "unknown", "api": "ok"}
    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("Readiness check failed", error=str(e))
        checks["database"] = f"error: {e}"
        return {"status": "degraded", "checks": checks}

    return {"status": "ready", "checks": checks}


# ── API Routes ────────────────────────────────────
from billbook.api.v1 import bills, categories, stats, users  # noqa: E402

app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
app.include_router(bills.router, prefix="/api/v1/bills", tags=["bills"])
app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
app.include_router(stats.router, prefix="/api/v1", tags=["stats"])
