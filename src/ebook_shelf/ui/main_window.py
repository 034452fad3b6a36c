"""Main Window - Application shell with menus."""

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QMessageBox, QVBoxLayout, QWidget


class MainWindow(QMainWindow):
    """Provides the application shell and the File menu actions."""

    add_book_requested = Signal()
    scan_directory_requested = Signal()
    set_library_path_requested = Signal()

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Ebook Shelf")
        self.setGeometry(100, 100, 900, 650)

        self._setup_ui()
        self._create_menu_bar()

    def _setup_ui(self):
        """Initialize the main UI layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        self.main_layout = QVBoxLayout(central_widget)
        self.main_layout.setContentsMargins(0, 0, 0, 0)

    def _create_menu_bar(self):
        """Create the application menu bar."""
        file_menu = self.menuBar().addMenu("&File")

        add_action = QAction("&Add Book...", self)
        add_action.setShortcut("Ctrl+O")
        add_action.triggered.connect(self.add_book_requested.emit)
        file_menu.addAction(add_action)

        scan_action = QAction("&Scan Directory...", self)
        scan_action.setShortcut("Ctrl+Shift+O")
        scan_action.triggered.connect(self.scan_directory_requested.emit)
        file_menu.addAction(scan_action)

        path_action = QAction("Set &Library Folder...", self)
        path_action.triggered.connect(self.set_library_path_requested.emit)
        file_menu.addAction(path_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    def set_library_screen(self, library_screen):
        """Place the library screen in the main layout."""
        self.main_layout.addWidget(library_screen)

    def show_error(self, title: str, message: str):
        """Display an error message to the user."""
        QMessageBox.critical(self, title, message)

    def show_info(self, title: str, message: str):
        """Display an information message to the user."""
        QMessageBox.information(self, title, message)
