"""
Catalog package for the personal library.

This package contains:
- Google Books client
- Volume-to-book mapping
- MongoDB book store
- Catalog service orchestrating lookups and persistence
"""

__version__ = "1.0.0"
