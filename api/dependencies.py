"""
FastAPI dependency providers for the catalog components.

The lifespan handler in ``api.main`` fills in the process-wide store and
client; tests replace ``get_catalog_service`` through ``app.dependency_overrides``.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status

from catalog.google_books import GoogleBooksClient
from catalog.service import CatalogService
from catalog.store import BookStore

book_store: Optional[BookStore] = None
google_books_client: Optional[GoogleBooksClient] = None


def get_book_store() -> BookStore:
    if book_store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database service not available"
        )
    return book_store


def get_google_books_client() -> GoogleBooksClient:
    global google_books_client
    if google_books_client is None:
        google_books_client = GoogleBooksClient()
    return google_books_client


def get_catalog_service(
    store: BookStore = Depends(get_book_store),
    client: GoogleBooksClient = Depends(get_google_books_client),
) -> CatalogService:
    """Build the request's catalog service from the shared store and client."""
    return CatalogService(store, client)
