"""
Tests for the library management commands.
"""

import pytest

import manage_books
from catalog.google_books import GoogleBooksClient
from conftest import PROVIDER_BASE_URL, FakeBookStore


@pytest.fixture
def patched_client(monkeypatch, provider):
    """Make the add command talk to the provider stand-in."""
    def make_client():
        return GoogleBooksClient(base_url=PROVIDER_BASE_URL, api_key="", transport=provider.transport)
    monkeypatch.setattr(manage_books, "GoogleBooksClient", make_client)


class TestManageBooks:
    """Test cases for manage_books commands."""

    @pytest.mark.asyncio
    async def test_list(self, fake_store, capsys):
        await manage_books.run_command(fake_store, "list")

        output = capsys.readouterr().out
        assert "Found 2 books" in output
        assert "lRtdEAAAQBAJ  Spring in Action (Craig Walls, page count unknown)" in output

    @pytest.mark.asyncio
    async def test_list_empty(self, capsys):
        await manage_books.run_command(FakeBookStore(), "list")

        assert "No books found" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_show(self, fake_store, capsys):
        await manage_books.run_command(fake_store, "show", "existing123")
        assert "Title: Existing Book" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_remove(self, fake_store, capsys):
        await manage_books.run_command(fake_store, "remove", "existing123")

        assert "existing123" not in fake_store.books
        assert "Removed existing123" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_remove_missing(self, fake_store, capsys):
        await manage_books.run_command(fake_store, "remove", "missing")
        assert "not in the library" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_stats(self, fake_store, capsys):
        await manage_books.run_command(fake_store, "stats")

        output = capsys.readouterr().out
        assert "Total Books: 2" in output
        assert "Books with Page Count: 0" in output

    @pytest.mark.asyncio
    async def test_add(self, fake_store, provider, patched_client, effective_java_payload, capsys):
        provider.enqueue(effective_java_payload)

        await manage_books.run_command(fake_store, "add", "ka2VUBqHiWkC")

        assert fake_store.books["ka2VUBqHiWkC"].title == "Effective Java"
        assert "Added ka2VUBqHiWkC  Effective Java (Joshua Bloch, 375 pages)" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_add_unknown_id(self, fake_store, provider, patched_client, empty_payload, capsys):
        provider.enqueue(empty_payload)

        await manage_books.run_command(fake_store, "add", "nonexistent123")

        assert "nonexistent123" not in fake_store.books
        assert "Could not add nonexistent123 (not_found)" in capsys.readouterr().out
