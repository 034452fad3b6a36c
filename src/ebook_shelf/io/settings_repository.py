"""Data access layer for UI settings persistence."""

import copy
import json
import threading
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Mapping

from ebook_shelf.core import (
    FontSettings,
    PersistenceError,
    SettingsValidationError,
    UISettings,
)
from ebook_shelf.services.logging_setup import get_logger

logger = get_logger(__name__)


def deep_merge(base: Mapping[str, Any], incoming: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``incoming`` into a copy of ``base``.

    When both sides hold a mapping for a key the mappings are merged
    key-wise; any other incoming value replaces the current one outright.
    Keys are only ever added or overwritten, never removed. Neither input
    is modified.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in incoming.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def settings_to_tree(settings: UISettings) -> Dict[str, Any]:
    """Convert settings to the JSON tree used on disk and on the wire."""
    return {
        "theme": settings.theme,
        "font": asdict(settings.font),
        "colorScheme": copy.deepcopy(settings.color_scheme),
    }


def tree_to_settings(tree: Mapping[str, Any]) -> UISettings:
    """Validate a JSON tree against the settings schema.

    Keys outside the schema are ignored.

    Raises:
        SettingsValidationError: If a known key holds a value of the wrong type.
    """
    theme = tree.get("theme", "")
    if not isinstance(theme, str):
        raise SettingsValidationError(f"theme must be a string, got {theme!r}")

    font = tree.get("font", {})
    if not isinstance(font, Mapping):
        raise SettingsValidationError(f"font must be an object, got {font!r}")
    family = font.get("family", "")
    size = font.get("size", "")
    if not isinstance(family, str) or not isinstance(size, str):
        raise SettingsValidationError("font.family and font.size must be strings")

    schemes = tree.get("colorScheme", {})
    if not isinstance(schemes, Mapping):
        raise SettingsValidationError(f"colorScheme must be an object, got {schemes!r}")
    color_scheme = {}
    for name, roles in schemes.items():
        if not isinstance(roles, Mapping):
            raise SettingsValidationError(f"colorScheme.{name} must be an object")
        for role, color in roles.items():
            if not isinstance(color, str):
                raise SettingsValidationError(f"colorScheme.{name}.{role} must be a string")
        color_scheme[name] = dict(roles)

    return UISettings(
        theme=theme,
        font=FontSettings(family=family, size=size),
        color_scheme=color_scheme,
    )


class SettingsRepository:
    """Owns the current UI settings and their JSON file.

    File format:
    {
        "theme": "light",
        "font": {"family": "system-ui", "size": "14px"},
        "colorScheme": {
            "dark": {"background": "#121212", ...},
            "light": {"background": "#ffffff", ...}
        }
    }
    """

    def __init__(self, settings_file: Path) -> None:
        self.settings_file = Path(settings_file)
        self._settings = UISettings()
        self._lock = threading.RLock()

    def load(self) -> None:
        """Load settings, writing the defaults when no file exists yet.

        Values in the file are merged over the defaults, so a file missing
        some keys still yields complete settings.

        Raises:
            PersistenceError: If the file cannot be read or parsed.
            SettingsValidationError: If the file does not fit the schema.
        """
        with self._lock:
            if not self.settings_file.exists():
                self._settings = UISettings()
                self.save()
                logger.info("Wrote default settings to %s", self.settings_file)
                return

            try:
                data = json.loads(self.settings_file.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                raise PersistenceError(
                    f"Failed to read settings file {self.settings_file}: {e}"
                ) from e
            if not isinstance(data, Mapping):
                raise PersistenceError(f"Malformed settings file {self.settings_file}")

            self._settings = tree_to_settings(deep_merge(settings_to_tree(UISettings()), data))
            logger.debug("Loaded settings from %s", self.settings_file)

    def save(self) -> None:
        """Write current settings to disk.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        with self._lock:
            try:
                text = json.dumps(settings_to_tree(self._settings), indent=2)
                self.settings_file.parent.mkdir(parents=True, exist_ok=True)
                self.settings_file.write_text(text, encoding="utf-8")
            except (OSError, UnicodeError) as e:
                raise PersistenceError(
                    f"Failed to write settings file {self.settings_file}: {e}"
                ) from e

    @property
    def settings(self) -> UISettings:
        with self._lock:
            return copy.deepcopy(self._settings)

    def get(self) -> Dict[str, Any]:
        """Full settings as a plain JSON-compatible tree."""
        with self._lock:
            return settings_to_tree(self._settings)

    def update(self, partial: Mapping[str, Any]) -> Dict[str, Any]:
        """Deep-merge a partial tree into the settings and persist.

        Args:
            partial: Any subset of the settings tree, e.g. {"font": {"size": "16px"}}.

        Returns:
            The complete settings tree after the update.

        Raises:
            SettingsValidationError: If partial is not a mapping or the merged
                tree does not fit the schema; settings are left unchanged.
            PersistenceError: If the file cannot be written; settings are
                left unchanged.
        """
        if not isinstance(partial, Mapping):
            raise SettingsValidationError(f"Settings update must be an object, got {partial!r}")

        with self._lock:
            merged = tree_to_settings(deep_merge(settings_to_tree(self._settings), partial))
            previous = self._settings
            self._settings = merged
            try:
                self.save()
            except PersistenceError:
                self._settings = previous
                raise

            logger.info("Updated settings keys: %s", ", ".join(sorted(partial)))
            return settings_to_tree(self._settings)
