"""Presentation Adapter - shapes book records for the front-end."""

from typing import Any, Dict, Iterable, List

from ebook_shelf.core import BookRecord
from ebook_shelf.core.timestamps import format_timestamp


def book_to_wire(book: BookRecord) -> Dict[str, Any]:
    """Flatten a book into stable camelCase keys with textual timestamps."""
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "filePath": book.file_path,
        "coverPath": book.cover_path,
        "description": book.description,
        "format": book.format,
        "addedAt": format_timestamp(book.added_at),
        "lastOpenedAt": format_timestamp(book.last_opened_at),
    }


def books_to_wire(books: Iterable[BookRecord]) -> List[Dict[str, Any]]:
    return [book_to_wire(book) for book in books]
