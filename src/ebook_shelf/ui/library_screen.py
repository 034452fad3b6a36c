"""Library screen - List view of the books in the collection."""

from typing import Any, Dict, List

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)


class LibraryScreen(QWidget):
    """Shows wire-shaped book dicts and reports user actions.

    Signals:
        book_selected: Emitted with a book id when an entry is activated.
        book_removed: Emitted with a book id when Remove is clicked.
    """

    book_selected = Signal(str)
    book_removed = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._setup_ui()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 10, 10, 10)

        self.empty_label = QLabel("Your library is empty.\nUse File > Add Book or Scan Directory.")
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        self.book_list = QListWidget()
        self.book_list.itemActivated.connect(self._on_item_activated)
        layout.addWidget(self.book_list)

        buttons = QHBoxLayout()
        buttons.addStretch()
        self.open_button = QPushButton("Open")
        self.open_button.clicked.connect(self._on_open_clicked)
        buttons.addWidget(self.open_button)
        self.remove_button = QPushButton("Remove")
        self.remove_button.clicked.connect(self._on_remove_clicked)
        buttons.addWidget(self.remove_button)
        layout.addLayout(buttons)

    def display_books(self, books: List[Dict[str, Any]]):
        """Replace the list contents with the given books."""
        self.book_list.clear()
        for book in books:
            text = book["title"]
            if book.get("author"):
                text += f" - {book['author']}"
            if book.get("format"):
                text += f" [{book['format']}]"
            item = QListWidgetItem(text)
            item.setData(Qt.UserRole, book["id"])
            item.setToolTip(book.get("filePath", ""))
            self.book_list.addItem(item)

        has_books = bool(books)
        self.empty_label.setHidden(has_books)
        self.book_list.setHidden(not has_books)
        self.open_button.setEnabled(has_books)
        self.remove_button.setEnabled(has_books)

    def selected_book_id(self) -> str:
        item = self.book_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else ""

    def _on_item_activated(self, item: QListWidgetItem):
        self.book_selected.emit(item.data(Qt.UserRole))

    def _on_open_clicked(self):
        book_id = self.selected_book_id()
        if book_id:
            self.book_selected.emit(book_id)

    def _on_remove_clicked(self):
        book_id = self.selected_book_id()
        if book_id:
            self.book_removed.emit(book_id)
