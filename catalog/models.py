"""
Pydantic models for stored books and Google Books search payloads.

``BookEntity`` is the record kept in the local library. The ``GoogleBooks*``
models describe the provider's volume search response; they accept unknown
fields so a parsed response can be echoed back to clients unchanged.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


class BookEntity(BaseModel):
    """
    A book owned by the library, keyed by its Google Books volume id.
    """
    id: str = Field(..., min_length=1, description="Google Books volume id")
    title: str = Field(..., description="Book title")
    author: Optional[str] = Field(None, description="First listed author")
    page_count: Optional[PositiveInt] = Field(None, alias="pageCount", description="Number of pages")

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "ka2VUBqHiWkC",
                "title": "Effective Java",
                "author": "Joshua Bloch",
                "pageCount": 375,
            }
        },
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        """Ensure title is not blank."""
        if not v or not v.strip():
            raise ValueError("Book title is required")
        return v

    def to_document(self) -> Dict[str, Any]:
        """Convert to a MongoDB document; the volume id becomes ``_id``."""
        return {
            "_id": self.id,
            "title": self.title,
            "author": self.author,
            "page_count": self.page_count,
        }

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "BookEntity":
        return cls(
            id=document["_id"],
            title=document["title"],
            author=document.get("author"),
            page_count=document.get("page_count"),
        )


class VolumeInfo(BaseModel):
    """Descriptive metadata of a single Google Books volume."""
    title: Optional[str] = None
    authors: Optional[List[Optional[str]]] = None
    page_count: Optional[int] = Field(None, alias="pageCount")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class VolumeItem(BaseModel):
    """One entry of the ``items`` array."""
    id: Optional[str] = None
    volume_info: Optional[VolumeInfo] = Field(None, alias="volumeInfo")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class GoogleBooksResult(BaseModel):
    """Response of ``GET /volumes``."""
    kind: Optional[str] = None
    total_items: Optional[int] = Field(None, alias="totalItems")
    items: Optional[List[VolumeItem]] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @property
    def volumes(self) -> List[VolumeItem]:
        return self.items or []

    def find_volume(self, volume_id: str) -> Optional[VolumeItem]:
        """Return the first item whose id equals ``volume_id`` exactly."""
        for item in self.volumes:
            if item.id == volume_id:
                return item
        return None

    def to_provider_json(self) -> Dict[str, Any]:
        """Dump in the provider's own shape, omitting fields it did not send."""
        return self.model_dump(by_alias=True, exclude_unset=True)
