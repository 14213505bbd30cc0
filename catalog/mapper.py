"""
Mapping of Google Books volume metadata onto library books.
"""

from typing import Optional

from .exceptions import BookValidationError
from .models import BookEntity, VolumeInfo


class BookMapper:
    """
    Converts provider volume metadata into ``BookEntity`` instances.
    Handles all data transformation and validation; never mutates its input.
    """

    def to_entity(self, book_id: str, volume_info: Optional[VolumeInfo]) -> BookEntity:
        """
        Map a volume's metadata to a book ready to be persisted.

        Args:
            book_id: Google Books volume id
            volume_info: Volume metadata from the search response

        Returns:
            BookEntity instance

        Raises:
            BookValidationError: if volume_info is missing or has no title
        """
        self._validate(volume_info)

        return BookEntity(
            id=book_id,
            title=volume_info.title,
            author=self._first_author(volume_info),
            page_count=self._page_count(volume_info),
        )

    def _validate(self, volume_info: Optional[VolumeInfo]) -> None:
        if volume_info is None:
            raise BookValidationError("VolumeInfo cannot be null")

        if volume_info.title is None or not volume_info.title.strip():
            raise BookValidationError("Book title is required")

    def _first_author(self, volume_info: VolumeInfo) -> Optional[str]:
        """Return the first author, or None when the list is missing or the entry blank."""
        if not volume_info.authors:
            return None

        first_author = volume_info.authors[0]
        if first_author is None or not first_author.strip():
            return None
        return first_author

    def _page_count(self, volume_info: VolumeInfo) -> Optional[int]:
        """Return the page count only when it is a positive integer."""
        page_count = volume_info.page_count
        if page_count is None or page_count <= 0:
            return None
        return page_count
