"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fintrack.config.settings import get_settings
from fintrack.config.logging_config import setup_logging
from fintrack.repositories.sqlalchemy.database import init_db
from fintrack.api.routers import accounts_router, users_router
from fintrack.core.exceptions import AppError, ValidationError

# HTTP status for each error code; anything unlisted is a client error
ERROR_STATUS = {
    "VALIDATION_ERROR": 422,
    "NOT_AUTHENTICATED": 401,
    "UNAUTHORIZED": 403,
    "NOT_FOUND": 404,
    "BALANCE_NOT_ZERO": 409,
    "STORE_UNAVAILABLE": 503,
    "OPERATION_FAILED": 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Personal finance account management",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(users_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    content = {"error": exc.code, "message": exc.message}
    if isinstance(exc, ValidationError):
        content["field_errors"] = exc.field_errors
    return JSONResponse(
        status_code=ERROR_STATUS.get(exc.code, 400),
        content=content,
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
        "docs": "/docs",
    }
