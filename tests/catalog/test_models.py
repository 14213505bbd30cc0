"""
Unit tests for Pydantic models.
"""

import pytest
from pydantic import ValidationError

from catalog.models import BookEntity, GoogleBooksResult


class TestBookEntity:
    """Test cases for BookEntity model."""

    def test_serializes_with_provider_field_names(self):
        book = BookEntity(id="ka2VUBqHiWkC", title="Effective Java", author="Joshua Bloch", page_count=375)

        assert book.model_dump(by_alias=True) == {
            "id": "ka2VUBqHiWkC",
            "title": "Effective Java",
            "author": "Joshua Bloch",
            "pageCount": 375,
        }

    def test_accepts_alias(self):
        book = BookEntity(id="x1", title="Title", pageCount=10)
        assert book.page_count == 10

    def test_optional_fields(self):
        book = BookEntity(id="x1", title="Title")
        assert book.author is None
        assert book.page_count is None

    @pytest.mark.parametrize("title", ["", "   "])
    def test_blank_title_rejected(self, title):
        with pytest.raises(ValidationError) as exc_info:
            BookEntity(id="x1", title=title)
        assert "Book title is required" in str(exc_info.value)

    def test_non_positive_page_count_rejected(self):
        with pytest.raises(ValidationError):
            BookEntity(id="x1", title="Title", page_count=0)

    def test_document_round_trip(self):
        book = BookEntity(id="ka2VUBqHiWkC", title="Effective Java", author="Joshua Bloch", page_count=375)

        document = book.to_document()

        assert document["_id"] == "ka2VUBqHiWkC"
        assert "id" not in document
        assert BookEntity.from_document(document) == book


class TestGoogleBooksResult:
    """Test cases for the search response model."""

    def test_find_volume_exact_match(self, effective_java_payload):
        result = GoogleBooksResult.model_validate(effective_java_payload)

        item = result.find_volume("dEs-DwAAQBAJ")

        assert item.volume_info.page_count == 412

    def test_find_volume_is_case_sensitive(self, effective_java_payload):
        result = GoogleBooksResult.model_validate(effective_java_payload)
        assert result.find_volume("KA2VUBQHIWKC") is None

    def test_missing_items(self):
        result = GoogleBooksResult.model_validate({"kind": "books#volumes", "totalItems": 0})

        assert result.volumes == []
        assert result.find_volume("anything") is None

    def test_provider_json_keeps_unknown_fields(self, effective_java_payload):
        result = GoogleBooksResult.model_validate(effective_java_payload)
        assert result.to_provider_json() == effective_java_payload

    def test_provider_json_omits_fields_not_sent(self):
        result = GoogleBooksResult.model_validate({"items": [{"id": "x1"}]})
        assert result.to_provider_json() == {"items": [{"id": "x1"}]}

    def test_malformed_items_rejected(self):
        with pytest.raises(ValidationError):
            GoogleBooksResult.model_validate({"items": "not a list"})
