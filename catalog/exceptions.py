"""
Exception hierarchy for catalog operations.
"""

from typing import Optional


class CatalogError(Exception):
    """Base exception for catalog failures."""

    error_kind = "catalog_error"


class BookValidationError(CatalogError):
    """Raised when provider metadata cannot form a valid book."""

    error_kind = "validation"


class BookNotFoundError(CatalogError):
    """Raised when the provider has no volume for the requested id."""

    error_kind = "not_found"

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"Book with Google ID: {book_id} not found")


class ProviderError(CatalogError):
    """Raised when Google Books is unreachable or answers with bad data."""

    error_kind = "upstream"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ProviderTimeoutError(ProviderError):
    """Raised when Google Books does not answer within the timeout."""

    error_kind = "upstream_timeout"


class PersistenceError(CatalogError):
    """Raised when the store rejects a write."""

    error_kind = "persistence"
