"""I/O layer - JSON persistence and file access."""

from .file_content import mime_type_for, read_file_as_data_uri
from .library_repository import EBOOK_EXTENSIONS, LibraryRepository
from .settings_repository import SettingsRepository, deep_merge

__all__ = [
    "LibraryRepository",
    "SettingsRepository",
    "EBOOK_EXTENSIONS",
    "deep_merge",
    "mime_type_for",
    "read_file_as_data_uri",
]
