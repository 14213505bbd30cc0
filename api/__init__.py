"""
FastAPI RESTful API for the Personal Library Catalog.

This module provides a REST API for:
- Listing the books kept in the library
- Searching Google Books
- Adding a Google Books volume to the library
"""
