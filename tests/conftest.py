"""
Pytest configuration and shared fixtures.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_catalog_service
from api.main import app
from catalog.google_books import GoogleBooksClient
from catalog.models import BookEntity
from catalog.service import CatalogService

RESOURCES = Path(__file__).parent / "resources"
PROVIDER_BASE_URL = "https://books.test/books/v1"


class FakeBookStore:
    """In-memory stand-in for BookStore, keyed by book id."""

    def __init__(self, books=()):
        self.books: Dict[str, BookEntity] = {book.id: book for book in books}

    async def list_all(self) -> List[BookEntity]:
        return list(self.books.values())

    async def get(self, book_id: str) -> Optional[BookEntity]:
        return self.books.get(book_id)

    async def save(self, book: BookEntity) -> BookEntity:
        self.books[book.id] = book
        return book

    async def delete(self, book_id: str) -> bool:
        return self.books.pop(book_id, None) is not None

    async def count(self) -> int:
        return len(self.books)

    async def health_check(self) -> Dict:
        return {"status": "healthy", "books_count": len(self.books)}


class FakeProvider:
    """
    Google Books stand-in served through httpx.MockTransport.
    Each test queues the responses it needs; requests are recorded.
    """

    def __init__(self):
        self.responses = []
        self.requests: List[httpx.Request] = []

    def enqueue(self, payload=None, status_code: int = 200, text: Optional[str] = None) -> None:
        if text is not None:
            self.responses.append(lambda request: httpx.Response(status_code, text=text))
        else:
            self.responses.append(lambda request: httpx.Response(status_code, json=payload))

    def enqueue_error(self, error_class) -> None:
        def raise_error(request):
            raise error_class("provider unreachable", request=request)
        self.responses.append(raise_error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(500, json={"error": "no response queued"})
        return self.responses.pop(0)(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def effective_java_payload():
    """Google Books search response containing Effective Java."""
    with open(RESOURCES / "effectivejava.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def empty_payload():
    return {"kind": "books#volumes", "totalItems": 0, "items": []}


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def google_client(provider):
    """Client wired to the per-test provider stand-in."""
    return GoogleBooksClient(
        base_url=PROVIDER_BASE_URL,
        api_key="",
        timeout=5,
        transport=provider.transport,
    )


@pytest.fixture
def fake_store():
    """Store seeded with two books."""
    return FakeBookStore([
        BookEntity(id="lRtdEAAAQBAJ", title="Spring in Action", author="Craig Walls"),
        BookEntity(id="existing123", title="Existing Book", author="Existing Author"),
    ])


@pytest.fixture
def catalog_service(fake_store, google_client):
    return CatalogService(fake_store, google_client, direct_lookup=False, page_size=10)


@pytest.fixture
def api_client(catalog_service):
    """Test client whose catalog service uses the fake store and provider."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    yield TestClient(app)
    app.dependency_overrides.clear()
