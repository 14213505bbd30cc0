#!/usr/bin/env python3
"""
Library Management Utility

Administrative commands over the book store:
- List all books
- Show a single book
- Add a Google Books volume
- Remove a book (not exposed by the HTTP API)
- Show library statistics
"""

import asyncio
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from catalog.exceptions import CatalogError
from catalog.google_books import GoogleBooksClient
from catalog.service import CatalogService
from catalog.store import BookStore
from utilities.config import config
from utilities.logger import setup_logging

USAGE = """Usage: python manage_books.py [list|show|add|remove|stats] [id]

Commands:
  list     - List all books
  show     - Show the book with the given Google Books id
  add      - Add the Google Books volume with the given id
  remove   - Remove the book with the given id
  stats    - Show library statistics

Examples:
  python manage_books.py list
  python manage_books.py add ka2VUBqHiWkC
  python manage_books.py remove ka2VUBqHiWkC"""

ID_COMMANDS = {"show", "add", "remove"}


def format_book(book) -> str:
    author = book.author or "unknown author"
    pages = f"{book.page_count} pages" if book.page_count else "page count unknown"
    return f"{book.id}  {book.title} ({author}, {pages})"


async def list_books(store: BookStore) -> None:
    """List all books in the library."""
    print("\n" + "=" * 80)
    print("📋 ALL BOOKS")
    print("=" * 80)

    books = await store.list_all()
    if not books:
        print("❌ No books found in the library")
        return

    print(f"✅ Found {len(books)} books:")
    print()
    for i, book in enumerate(books, 1):
        print(f"{i:3d}. {format_book(book)}")


async def show_book(store: BookStore, book_id: str) -> None:
    print(f"\n🔍 BOOK {book_id}")
    print("=" * 80)

    book = await store.get(book_id)
    if book:
        print(f"   Title: {book.title}")
        print(f"   Author: {book.author}")
        print(f"   Page count: {book.page_count}")
    else:
        print("❌ Book not found in the library")


async def add_book(store: BookStore, book_id: str) -> None:
    """Add a Google Books volume through the catalog service."""
    service = CatalogService(store, GoogleBooksClient())
    try:
        book = await service.add_from_external_id(book_id)
    except CatalogError as e:
        print(f"❌ Could not add {book_id} ({e.error_kind}): {e}")
        return
    print(f"✅ Added {format_book(book)}")


async def remove_book(store: BookStore, book_id: str) -> None:
    if await store.delete(book_id):
        print(f"🗑️  Removed {book_id}")
    else:
        print(f"ℹ️  {book_id} is not in the library")


async def show_statistics(store: BookStore) -> None:
    """Show library statistics."""
    print("\n📊 LIBRARY STATISTICS")
    print("=" * 80)

    books = await store.list_all()
    with_author = sum(1 for book in books if book.author)
    with_pages = [book.page_count for book in books if book.page_count]

    print(f"📚 Total Books: {len(books)}")
    print(f"✍️  Books with Author: {with_author}")
    print(f"📄 Books with Page Count: {len(with_pages)}")
    if with_pages:
        print(f"📈 Total Pages: {sum(with_pages)}")
        print(f"📏 Average Pages: {sum(with_pages) / len(with_pages):.1f}")


async def run_command(store: BookStore, command: str, book_id: str = None) -> None:
    if command == "list":
        await list_books(store)
    elif command == "show":
        await show_book(store, book_id)
    elif command == "add":
        await add_book(store, book_id)
    elif command == "remove":
        await remove_book(store, book_id)
    elif command == "stats":
        await show_statistics(store)


async def main():
    """Main function."""
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    command = sys.argv[1].lower()
    if command not in ID_COMMANDS | {"list", "stats"}:
        print(f"❌ Unknown command: {command}")
        print("Available commands: list, show, add, remove, stats")
        sys.exit(1)

    book_id = sys.argv[2] if len(sys.argv) > 2 else None
    if command in ID_COMMANDS and not book_id:
        print(f"❌ Error: Google Books id required for {command} command")
        print(f"Usage: python manage_books.py {command} <id>")
        sys.exit(1)

    setup_logging(
        log_level=config.log_level,
        log_format=config.log_format,
        log_file=config.get_log_file_path(),
        debug=config.debug
    )

    store = BookStore(
        connection_url=config.mongodb_url,
        database_name=config.mongodb_database,
        collection_name=config.mongodb_collection
    )
    await store.connect()
    try:
        await run_command(store, command, book_id)
    finally:
        await store.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
