"""Leave Management — FastAPI Application Factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.concurrency import run_in_threadpool

from backend.common.exceptions import register_exception_handlers
from backend.common.rate_limit import limiter
from backend.config import settings
from backend.core_hr.router import employees_router
from backend.leave.router import (
    leave_balances_router,
    leave_requests_router,
    leave_types_router,
)
from backend.persistence import JsonSnapshotBackend, NullSnapshotBackend
from backend.store import DataStore

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_store() -> DataStore:
    """Store backed by the configured snapshot location."""
    if settings.PERSISTENCE_ENABLED:
        return DataStore(snapshot_backend=JsonSnapshotBackend(settings.DATA_DIR))
    return DataStore(snapshot_backend=NullSnapshotBackend())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the snapshot on startup, write a final one on shutdown."""
    store: DataStore = app.state.store
    await run_in_threadpool(store.restore, seed_leave_types=settings.SEED_LEAVE_TYPES)
    yield
    await run_in_threadpool(store.persist)
    logger.info("Shutdown complete")


def create_app(store: Optional[DataStore] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Pass *store* to run against a prepared in-memory store (tests); otherwise
    one is built from settings and restored during startup.
    """
    configure_logging()

    app = FastAPI(
        title="Leave Management",
        description="Employees, leave types, balances and leave requests with approval workflow",
        version="1.0.0",
        docs_url="/api/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url="/api/redoc" if settings.ENVIRONMENT != "production" else None,
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else build_store()

    # Exception handlers (RFC 7807)
    register_exception_handlers(app)

    # Rate limiting (slowapi)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health check
    @app.get("/api/v1/health", tags=["system"])
    async def health_check():
        return {
            "status": "healthy",
            "version": "1.0.0",
            "environment": settings.ENVIRONMENT,
        }

    # Register routers
    app.include_router(employees_router, prefix="/api/v1/employees", tags=["employees"])
    app.include_router(leave_types_router, prefix="/api/v1/leave-types", tags=["leave-types"])
    app.include_router(leave_balances_router, prefix="/api/v1/leave-balances", tags=["leave-balances"])
    app.include_router(leave_requests_router, prefix="/api/v1/leave-requests", tags=["leave-requests"])

    return app


app = create_app()
