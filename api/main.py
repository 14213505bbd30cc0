"""
FastAPI main application for the Personal Library Catalog API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

import structlog
from fastapi import Depends, FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import dependencies
from api.config import config as api_config
from api.dependencies import get_catalog_service
from api.models import ErrorResponse, HealthResponse
from catalog.exceptions import (
    BookNotFoundError, BookValidationError, PersistenceError,
    ProviderError, ProviderTimeoutError
)
from catalog.google_books import GoogleBooksClient
from catalog.models import BookEntity
from catalog.service import CatalogService
from catalog.store import BookStore
from utilities.config import config
from utilities.logger import CatalogLogger, setup_logging

logger = structlog.get_logger(__name__)

# Most specific first; ProviderTimeoutError subclasses ProviderError
ERROR_STATUS_CODES = [
    (BookNotFoundError, status.HTTP_404_NOT_FOUND),
    (BookValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ProviderTimeoutError, status.HTTP_504_GATEWAY_TIMEOUT),
    (ProviderError, status.HTTP_502_BAD_GATEWAY),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )
    logger.info("Starting Personal Library Catalog API")

    store = BookStore(
        connection_url=config.mongodb_url,
        database_name=config.mongodb_database,
        collection_name=config.mongodb_collection
    )
    try:
        await store.connect()
        logger.info("Database connection established")
    except Exception as e:
        logger.error("Failed to connect to database", error=str(e))
        raise

    dependencies.book_store = store
    dependencies.google_books_client = GoogleBooksClient()

    yield

    logger.info("Shutting down Personal Library Catalog API")
    await store.disconnect()
    dependencies.book_store = None


app = FastAPI(
    title=api_config.api_title,
    description="""
    Keep a personal list of books, filled from Google Books.

    * **GET /books**: list the books in the library
    * **GET /google**: search Google Books (response passed through unchanged)
    * **POST /books/{externalId}**: add a Google Books volume to the library
    """,
    version=api_config.api_version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)


# Exception handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=str(exc.detail),
            status_code=exc.status_code
        ).model_dump(),
        headers=exc.headers
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if api_config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


def failure_status_code(exc: Exception) -> int:
    """Status code for a failed add-by-id request."""
    if not api_config.error_status_detail:
        return status.HTTP_400_BAD_REQUEST

    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    db_status = "unavailable"
    if dependencies.book_store:
        health_info = await dependencies.book_store.health_check()
        db_status = health_info.get("status", "unknown")

    return HealthResponse(
        status="healthy" if db_status == "healthy" else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=api_config.api_version,
        database_status=db_status
    )


# Books endpoints
@app.get("/books", response_model=List[BookEntity], tags=["Books"])
async def get_all_books(service: CatalogService = Depends(get_catalog_service)):
    """List every book in the library."""
    return await service.list_books()


@app.get("/google", tags=["Google Books"])
async def search_google_books(
    q: str = Query(..., description="Free-text query"),
    max_results: Optional[int] = Query(None, alias="maxResults", description="Page size"),
    start_index: Optional[int] = Query(None, alias="startIndex", description="Result offset"),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Search Google Books.

    - **q**: query forwarded verbatim
    - **maxResults**: optional page size
    - **startIndex**: optional offset
    """
    result = await service.search_external(q, max_results, start_index)
    return JSONResponse(content=result.to_provider_json())


@app.post(
    "/books/{book_id}",
    response_model=BookEntity,
    status_code=status.HTTP_201_CREATED,
    tags=["Books"],
    responses={400: {"description": "The book could not be added"}}
)
async def add_book_from_google(
    book_id: str,
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Add a Google Books volume to the library.

    - **book_id**: Google Books volume id
    """
    try:
        return await service.add_from_external_id(book_id)
    except Exception as e:
        error_kind = getattr(e, "error_kind", type(e).__name__)
        CatalogLogger("api").bind_context(endpoint="add_book").log_rejected(book_id, error_kind, str(e))
        return Response(status_code=failure_status_code(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=True,
        log_level="info"
    )
