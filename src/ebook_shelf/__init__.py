"""
Ebook Shelf - A local library manager for ebook files.

This package provides a desktop application that:
- Tracks PDF, EPUB, MOBI and AZW/AZW3 files in a JSON library
- Discovers ebooks by scanning directories
- Persists theme, font and colour preferences
"""

__version__ = "0.1.0"

# Make key components available at package level
from ebook_shelf.core import BookRecord, UISettings
from ebook_shelf.io import LibraryRepository, SettingsRepository

__all__ = [
    "BookRecord",
    "UISettings",
    "LibraryRepository",
    "SettingsRepository",
]
