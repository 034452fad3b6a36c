"""Domain entities for UI preferences."""

from dataclasses import dataclass, field
from typing import Dict


def default_color_scheme() -> Dict[str, Dict[str, str]]:
    return {
        "dark": {
            "background": "#121212",
            "foreground": "#ffffff",
            "primary": "#bb86fc",
            "secondary": "#03dac6",
        },
        "light": {
            "background": "#ffffff",
            "foreground": "#000000",
            "primary": "#6200ee",
            "secondary": "#03dac6",
        },
    }


@dataclass
class FontSettings:
    """Font descriptor; size is a CSS length such as "14px"."""

    family: str = "system-ui"
    size: str = "14px"


@dataclass
class UISettings:
    """Theme, font and per-scheme colour roles shown by the front-end.

    Attributes:
        theme: Active scheme name ("light" or "dark").
        font: Font family and size.
        color_scheme: Scheme name -> colour role -> hex colour.
    """

    theme: str = "light"
    font: FontSettings = field(default_factory=FontSettings)
    color_scheme: Dict[str, Dict[str, str]] = field(default_factory=default_color_scheme)
