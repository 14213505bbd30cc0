"""
MongoDB storage for library books.
Handles connection, indexing, and CRUD operations for owned books.
"""

from typing import Any, Dict, List, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

from .exceptions import PersistenceError
from .models import BookEntity

logger = structlog.get_logger(__name__)


class BookStore:
    """
    Async MongoDB store for ``BookEntity`` records.
    Books are keyed by their Google Books id, stored as ``_id``.
    """

    def __init__(self, connection_url: str, database_name: str, collection_name: str):
        """
        Initialize the store.

        Args:
            connection_url: MongoDB connection URL
            database_name: Name of the database
            collection_name: Name of the collection
        """
        self.connection_url = connection_url
        self.database_name = database_name
        self.collection_name = collection_name
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None
        self.collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(self.connection_url)
            self.database = self.client[self.database_name]
            self.collection = self.database[self.collection_name]

            await self.client.admin.command('ping')
            logger.info("Successfully connected to MongoDB",
                        database=self.database_name,
                        collection=self.collection_name)

            await self._create_indexes()

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB", error=str(e))
            raise

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")

    async def _create_indexes(self) -> None:
        # _id is already unique; title supports admin listing by name
        await self.collection.create_index("title")
        logger.info("Successfully created MongoDB indexes")

    async def list_all(self) -> List[BookEntity]:
        """
        Return every stored book in natural store order.
        """
        books = []
        async for document in self.collection.find({}):
            books.append(BookEntity.from_document(document))

        logger.debug("Listed books", count=len(books))
        return books

    async def get(self, book_id: str) -> Optional[BookEntity]:
        document = await self.collection.find_one({"_id": book_id})
        if document:
            return BookEntity.from_document(document)
        return None

    async def save(self, book: BookEntity) -> BookEntity:
        """
        Insert a book, overwriting any record with the same id.

        Args:
            book: BookEntity to persist

        Returns:
            The stored BookEntity

        Raises:
            PersistenceError: if MongoDB rejects the write
        """
        document = book.to_document()
        try:
            result = await self.collection.replace_one({"_id": book.id}, document, upsert=True)
        except PyMongoError as e:
            logger.error("Failed to save book", book_id=book.id, error=str(e))
            raise PersistenceError(f"Failed to save book {book.id}: {e}") from e

        if result.upserted_id is None:
            logger.info("Overwrote existing book", book_id=book.id)
        else:
            logger.debug("Inserted book", book_id=book.id)
        return book

    async def delete(self, book_id: str) -> bool:
        """
        Delete a book by id.

        Returns:
            bool: True if deleted, False if not found
        """
        result = await self.collection.delete_one({"_id": book_id})
        if result.deleted_count > 0:
            logger.info("Deleted book", book_id=book_id)
            return True

        logger.warning("Book not found for deletion", book_id=book_id)
        return False

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check.

        Returns:
            Dictionary with health status
        """
        try:
            await self.database.command("ping")
            books_count = await self.count()
            return {
                "status": "healthy",
                "books_collection": "accessible",
                "books_count": books_count,
            }
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return {
                "status": "unhealthy",
                "error": str(e)
            }
