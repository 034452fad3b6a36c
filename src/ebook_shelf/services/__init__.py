"""Services layer - configuration, logging, presentation and system integration."""

from ebook_shelf.services.app_config import AppConfig
from ebook_shelf.services.font_service import FontService
from ebook_shelf.services.logging_setup import configure_logging, get_logger
from ebook_shelf.services.presentation import book_to_wire, books_to_wire

__all__ = [
	"AppConfig",
	"FontService",
	"configure_logging",
	"get_logger",
	"book_to_wire",
	"books_to_wire",
]
