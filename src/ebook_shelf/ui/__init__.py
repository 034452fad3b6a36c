"""UI layer - PySide6 presentation components."""

from .dialogs import EBOOK_FILE_FILTER, FileDialogService
from .library_screen import LibraryScreen
from .main_window import MainWindow

__all__ = ["MainWindow", "LibraryScreen", "FileDialogService", "EBOOK_FILE_FILTER"]
