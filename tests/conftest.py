"""Shared test configuration."""

import os

# Qt widgets and the font database must run without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
