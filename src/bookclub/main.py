# src/bookclub/main.py
"""Main entry point for the book club API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookclub.api.v1 import (
    auth_router,
    availability_router,
    books_router,
    ratings_router,
    search_router,
    suggestions_router,
    users_router,
)
from bookclub.core.errors import BookClubError, StorageError
from bookclub.core.settings import settings
from bookclub.schemas.common import ErrorResponse
from bookclub.services.open_library import close_open_library_client

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await close_open_library_client()


# Initialize FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title=settings.app_name,
    description="Book club scheduling, suggestions, ratings and availability API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409, 500)
}
app.include_router(auth_router, prefix="/api", responses=ERROR_RESPONSES)
app.include_router(books_router, prefix="/api", responses=ERROR_RESPONSES)
app.include_router(suggestions_router, prefix="/api", responses=ERROR_RESPONSES)
app.include_router(ratings_router, prefix="/api", responses=ERROR_RESPONSES)
app.include_router(availability_router, prefix="/api", responses=ERROR_RESPONSES)
app.include_router(users_router, prefix="/api", responses=ERROR_RESPONSES)
app.include_router(search_router, prefix="/api", responses=ERROR_RESPONSES)


def _error(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@app.exception_handler(BookClubError)
async def handle_domain_error(request: Request, exc: BookClubError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return _error(400, message)


@app.exception_handler(SQLAlchemyError)
async def handle_storage_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    error = StorageError("Storage error")
    return _error(error.status_code, error.message)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("bookclub.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
