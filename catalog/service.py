"""
Catalog service: adds Google Books volumes to the library.
"""

from typing import List, Optional

import structlog

from .exceptions import BookNotFoundError
from .google_books import GoogleBooksClient
from .mapper import BookMapper
from .models import BookEntity, GoogleBooksResult, VolumeInfo
from .store import BookStore
from utilities.config import config
from utilities.logger import CatalogLogger

logger = structlog.get_logger(__name__)


class CatalogService:
    """
    Orchestrates provider lookups, mapping and persistence.

    By default a volume is located by searching for its id as free text and
    picking the exact-id match from the first page of results. Setting
    ``direct_lookup`` fetches ``/volumes/{id}`` instead.
    """

    def __init__(
        self,
        store: BookStore,
        client: GoogleBooksClient,
        mapper: Optional[BookMapper] = None,
        direct_lookup: Optional[bool] = None,
        page_size: Optional[int] = None,
    ):
        self.store = store
        self.client = client
        self.mapper = mapper or BookMapper()
        self.direct_lookup = config.uses_direct_lookup() if direct_lookup is None else direct_lookup
        self.page_size = page_size or config.search_page_size
        self.catalog_logger = CatalogLogger("catalog_service")

    async def list_books(self) -> List[BookEntity]:
        return await self.store.list_all()

    async def search_external(
        self,
        query: str,
        max_results: Optional[int] = None,
        start_index: Optional[int] = None,
    ) -> GoogleBooksResult:
        return await self.client.search(query, max_results, start_index)

    async def add_from_external_id(self, book_id: str) -> BookEntity:
        """
        Add a Google Books volume to the library.

        Args:
            book_id: Google Books volume id

        Returns:
            The persisted BookEntity

        Raises:
            BookNotFoundError: if the provider has no volume with this id
            BookValidationError: if the volume has no usable title
            ProviderError: if Google Books fails
            PersistenceError: if the store rejects the write
        """
        volume_info = await self._fetch_volume_info(book_id)

        if volume_info is None:
            raise BookNotFoundError(book_id)

        book = self.mapper.to_entity(book_id, volume_info)
        saved = await self.store.save(book)
        self.catalog_logger.log_saved(saved.id, saved.title)
        return saved

    async def _fetch_volume_info(self, book_id: str) -> Optional[VolumeInfo]:
        if self.direct_lookup:
            item = await self.client.get_volume(book_id)
            self.catalog_logger.log_lookup(book_id, "direct", items=0 if item is None else 1)
            # the provider may redirect to a canonical volume with another id
            if item is None or item.id != book_id:
                return None
            return item.volume_info

        # Lookup by searching for the id; only the first page is inspected
        result = await self.client.search(book_id, self.page_size, 0)
        self.catalog_logger.log_lookup(book_id, "search", items=len(result.volumes))

        item = result.find_volume(book_id)
        if item is None:
            return None
        return item.volume_info
