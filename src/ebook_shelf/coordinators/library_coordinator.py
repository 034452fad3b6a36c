"""Library Coordinator - The operation surface the front-end calls into."""

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from PySide6.QtCore import QObject, QUrl, Slot
from PySide6.QtGui import QDesktopServices

from ebook_shelf.core import LibraryError
from ebook_shelf.io import LibraryRepository, SettingsRepository, read_file_as_data_uri
from ebook_shelf.services import FontService, book_to_wire, books_to_wire, get_logger
from ebook_shelf.ui import FileDialogService, LibraryScreen, MainWindow

logger = get_logger(__name__)


class LibraryCoordinator(QObject):
    """Owns the stores and exposes every front-end operation.

    Responsibilities:
    - Load both stores on startup and flush them on shutdown
    - Book operations (list, add, remove, open, scan) in wire shape
    - Library path hint, file content, settings and system fonts
    - Native pickers for files and directories
    - Optionally drive the host shell (library screen and main window)

    Failures propagate as LibraryError subclasses after being logged.
    """

    def __init__(
        self,
        library_repository: LibraryRepository,
        settings_repository: SettingsRepository,
        dialog_service: FileDialogService,
        font_service: FontService,
    ):
        super().__init__()

        if library_repository is None:
            raise ValueError("LibraryRepository must not be None")
        if settings_repository is None:
            raise ValueError("SettingsRepository must not be None")
        if dialog_service is None:
            raise ValueError("FileDialogService must not be None")
        if font_service is None:
            raise ValueError("FontService must not be None")

        self.library_repository = library_repository
        self.settings_repository = settings_repository
        self.dialog_service = dialog_service
        self.font_service = font_service
        self.library_screen: Optional[LibraryScreen] = None
        self.main_window: Optional[MainWindow] = None

    def startup(self) -> None:
        """Load the library and settings files.

        Raises:
            PersistenceError: If either file exists but cannot be parsed.
        """
        with self._operation("startup"):
            self.library_repository.load()
            self.settings_repository.load()

    def shutdown(self) -> None:
        """Flush both stores to disk."""
        with self._operation("shutdown"):
            self.library_repository.save()
            self.settings_repository.save()

    # Book operations

    def list_books(self) -> List[Dict[str, Any]]:
        return books_to_wire(self.library_repository.list_books())

    def add_book(
        self,
        title: str,
        author: str,
        file_path: str,
        description: str,
        format: str,
    ) -> Dict[str, Any]:
        with self._operation("add_book"):
            book = self.library_repository.add_book(
                title=title,
                author=author,
                file_path=file_path,
                description=description,
                format=format,
            )
        return book_to_wire(book)

    def remove_book(self, book_id: str) -> None:
        with self._operation("remove_book"):
            self.library_repository.remove_book(book_id)

    def open_book(self, book_id: str) -> str:
        """Mark a book as opened and return its file path."""
        with self._operation("open_book"):
            return self.library_repository.open_book(book_id)

    def set_library_path(self, path: str) -> None:
        with self._operation("set_library_path"):
            self.library_repository.set_root_path(path)

    def get_library_path(self) -> str:
        return self.library_repository.get_root_path()

    def scan_directory(self, path: str) -> List[Dict[str, Any]]:
        """Add every ebook below path; returns only the newly added books."""
        with self._operation("scan_directory"):
            added = self.library_repository.scan_directory(path)
        return books_to_wire(added)

    def read_file_content(self, path: str) -> str:
        with self._operation("read_file_content"):
            return read_file_as_data_uri(path)

    # Settings and system integration

    def get_settings(self) -> Dict[str, Any]:
        return self.settings_repository.get()

    def update_settings(self, partial: Mapping[str, Any]) -> Dict[str, Any]:
        with self._operation("update_settings"):
            return self.settings_repository.update(partial)

    def list_system_fonts(self) -> List[str]:
        return self.font_service.list_families()

    def pick_file(self) -> str:
        return self.dialog_service.pick_file(self.get_library_path())

    def pick_directory(self) -> str:
        return self.dialog_service.pick_directory(self.get_library_path())

    # Host shell

    def attach_view(self, library_screen: LibraryScreen, main_window: MainWindow) -> None:
        """Wire the library screen and main window signals to this coordinator."""
        if library_screen is None:
            raise ValueError("LibraryScreen must not be None")
        if main_window is None:
            raise ValueError("MainWindow must not be None")

        self.library_screen = library_screen
        self.main_window = main_window
        self.dialog_service.set_parent(main_window)

        self.library_screen.book_selected.connect(self.handle_book_selected)
        self.library_screen.book_removed.connect(self.handle_book_removed)
        self.main_window.add_book_requested.connect(self.handle_add_book_requested)
        self.main_window.scan_directory_requested.connect(self.handle_scan_directory_requested)
        self.main_window.set_library_path_requested.connect(
            self.handle_set_library_path_requested
        )

    def show_library(self):
        """Reload books into the library screen."""
        if self.library_screen is not None:
            self.library_screen.display_books(self.list_books())

    @Slot(str)
    def handle_book_selected(self, book_id: str):
        try:
            file_path = self.open_book(book_id)
        except LibraryError as e:
            self._show_error("Open Error", e)
            return

        QDesktopServices.openUrl(QUrl.fromLocalFile(file_path))
        self.show_library()

    @Slot(str)
    def handle_book_removed(self, book_id: str):
        try:
            self.remove_book(book_id)
        except LibraryError as e:
            self._show_error("Remove Error", e)
            return

        self.show_library()

    @Slot()
    def handle_add_book_requested(self):
        file_path = self.pick_file()
        if not file_path:
            return

        path = Path(file_path)
        try:
            self.add_book(
                title=path.stem,
                author="",
                file_path=file_path,
                description="",
                format=path.suffix.lstrip("."),
            )
        except LibraryError as e:
            self._show_error("Add Book Error", e)
            return

        self.show_library()

    @Slot()
    def handle_scan_directory_requested(self):
        folder_path = self.pick_directory()
        if not folder_path:
            return

        try:
            added = self.scan_directory(folder_path)
        except LibraryError as e:
            self._show_error("Scan Error", e)
            return

        self.show_library()
        if self.main_window is not None:
            self.main_window.show_info("Scan Complete", f"Added {len(added)} books from:\n{folder_path}")

    @Slot()
    def handle_set_library_path_requested(self):
        folder_path = self.pick_directory()
        if not folder_path:
            return

        try:
            self.set_library_path(folder_path)
        except LibraryError as e:
            self._show_error("Library Folder Error", e)

    def _show_error(self, title: str, error: Exception):
        if self.main_window is not None:
            self.main_window.show_error(title, str(error))

    @contextmanager
    def _operation(self, name: str):
        try:
            yield
        except LibraryError as e:
            logger.warning("%s failed: %s", name, e)
            raise
