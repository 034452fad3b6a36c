"""Native file and directory pickers."""

from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QWidget

EBOOK_FILE_FILTER = "Ebook files (*.pdf *.epub *.mobi *.azw *.azw3)"


class FileDialogService:
    """Opens Qt dialogs on behalf of the coordinator.

    Both pickers return an empty string when the user cancels.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        self._parent = parent

    def set_parent(self, parent: QWidget) -> None:
        self._parent = parent

    def pick_file(self, start_dir: str = "") -> str:
        """Ask for a single ebook file."""
        file_path, _ = QFileDialog.getOpenFileName(
            self._parent,
            "Select an Ebook File",
            start_dir or str(Path.home()),
            EBOOK_FILE_FILTER,
        )
        return file_path or ""

    def pick_directory(self, start_dir: str = "") -> str:
        """Ask for a directory to scan for ebooks."""
        folder_path = QFileDialog.getExistingDirectory(
            self._parent,
            "Select a Directory to Scan for Ebooks",
            start_dir or str(Path.home()),
            QFileDialog.Option.ShowDirsOnly,
        )
        return folder_path or ""
