"""Main entry point for the ebook shelf application."""

import sys

from PySide6.QtWidgets import QApplication

from ebook_shelf.coordinators import LibraryCoordinator
from ebook_shelf.io import LibraryRepository, SettingsRepository
from ebook_shelf.services import AppConfig, FontService, configure_logging
from ebook_shelf.ui import FileDialogService, LibraryScreen, MainWindow


def main():
    """
    Bootstrap the application following the Composition Root pattern.
    This is the only place that knows how to instantiate and wire all components.
    """
    # 1. Initialize Application
    app = QApplication(sys.argv)
    app.setApplicationName("Ebook Shelf")
    app.setOrganizationName("EbookShelf")

    # 2. Initialize Infrastructure
    config = AppConfig()
    configure_logging(config.get_log_level())
    library_repository = LibraryRepository(config.get_library_file())
    settings_repository = SettingsRepository(config.get_settings_file())

    # 3. Construct UI
    main_window = MainWindow()
    library_screen = LibraryScreen()
    main_window.set_library_screen(library_screen)

    # 4. Instantiate Coordinator (Dependency Injection)
    coordinator = LibraryCoordinator(
        library_repository=library_repository,
        settings_repository=settings_repository,
        dialog_service=FileDialogService(),
        font_service=FontService(),
    )
    coordinator.startup()
    coordinator.attach_view(library_screen, main_window)
    app.aboutToQuit.connect(coordinator.shutdown)

    # 5. Show UI and start event loop
    coordinator.show_library()
    main_window.show()

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
