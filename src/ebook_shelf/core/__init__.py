"""Domain layer - Pure entities for books and UI preferences."""

from .book_record import BookRecord
from .errors import (
    BookNotFoundError,
    InvalidPathError,
    LibraryError,
    NotFoundError,
    PathNotFoundError,
    PersistenceError,
    SettingsValidationError,
    ValidationError,
)
from .ui_settings import FontSettings, UISettings, default_color_scheme

__all__ = [
    "BookRecord",
    "FontSettings",
    "UISettings",
    "default_color_scheme",
    "LibraryError",
    "NotFoundError",
    "BookNotFoundError",
    "PathNotFoundError",
    "ValidationError",
    "InvalidPathError",
    "SettingsValidationError",
    "PersistenceError",
]
