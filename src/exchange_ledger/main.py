"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from exchange_ledger.config.settings import get_settings
from exchange_ledger.config.logging_config import setup_logging
from exchange_ledger.repositories.sqlalchemy.database import init_db
from exchange_ledger.api.routers import exchange_router
from exchange_ledger.core.exceptions import AppError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    setup_logging()
    init_db()
    yield


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Currency-exchange reserve and profit/loss ledger",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(exchange_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=400,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "settlementCurrency": settings.settlement_currency,
        "docs": "/docs",
    }
