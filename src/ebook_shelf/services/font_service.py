"""Font discovery service backed by the Qt font database."""

from typing import List

from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import QApplication


class FontService:
    """Lists installed font families for the settings font picker."""

    def __init__(self) -> None:
        # QFontDatabase needs a running Qt application
        if QApplication.instance() is None:
            self._app = QApplication([])  # headless-safe; owned by service
        else:
            self._app = QApplication.instance()

    def list_families(self) -> List[str]:
        """Sorted, de-duplicated family names of the installed fonts."""
        families = {name.strip() for name in QFontDatabase.families() if name and name.strip()}
        return sorted(families)
