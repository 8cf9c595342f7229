"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from journal.config import settings
from journal.database import create_db_and_tables
from journal.errors import NotFoundError, ValidationFailure
from journal.utils.logging import setup_logging
from journal.api import trades, investments, wallets, dashboard, system

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: create tables, then re-derive every trade so reports start consistent."""
    setup_logging()
    create_db_and_tables()
    if settings.resync_positions_on_startup:
        from journal.engine.position_sync import sync_positions_on_startup
        sync_positions_on_startup()
    yield


app = FastAPI(
    title="Futures Journal",
    description="Crypto futures trading journal: trades, investments, exchange wallets and P&L reports",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationFailure)
async def validation_failure_handler(request: Request, exc: ValidationFailure):
    logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.constraint, "field": exc.field},
    )


# Mount routers
app.include_router(trades.router)
app.include_router(investments.router)
app.include_router(wallets.router)
app.include_router(dashboard.router)
app.include_router(system.router)
