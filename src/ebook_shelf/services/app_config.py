"""App Config - Resolves data locations and log level from the environment."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

LIBRARY_FILENAME = "library.json"
SETTINGS_FILENAME = "settings.json"


class AppConfig:
    """
    Reads configuration from a .env file and the process environment.

    Recognised variables:
        EBOOK_SHELF_DATA_DIR: Directory holding library.json and settings.json.
        EBOOK_SHELF_LOG_LEVEL: Logging level name (DEBUG, INFO, ...).
    """

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            project_root: Directory containing the .env file.
                         If None, the current working directory is used.
        """
        self._project_root = Path(project_root) if project_root else Path.cwd()
        load_dotenv(dotenv_path=self._project_root / ".env")

    def get_data_dir(self) -> Path:
        """Directory for the JSON data files, created on demand."""
        value = os.getenv("EBOOK_SHELF_DATA_DIR", "").strip()
        data_dir = Path(value).expanduser() if value else Path.home() / ".ebook_shelf"
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_library_file(self) -> Path:
        return self.get_data_dir() / LIBRARY_FILENAME

    def get_settings_file(self) -> Path:
        return self.get_data_dir() / SETTINGS_FILENAME

    def get_log_level(self) -> str:
        """Upper-cased log level name, INFO when unset."""
        value = os.getenv("EBOOK_SHELF_LOG_LEVEL", "").strip()
        return value.upper() if value else "INFO"

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        load_dotenv(dotenv_path=self._project_root / ".env", override=True)
