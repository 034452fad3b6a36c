"""Data access layer for the JSON-backed ebook library."""

import json
import os
import threading
import uuid
from dataclasses import replace
from pathlib import Path
from typing import List

from ebook_shelf.core import (
    BookNotFoundError,
    BookRecord,
    InvalidPathError,
    PathNotFoundError,
    PersistenceError,
)
from ebook_shelf.core.timestamps import format_timestamp, now, parse_timestamp
from ebook_shelf.services.logging_setup import get_logger

# Matched case-sensitively against the file suffix.
EBOOK_EXTENSIONS = (".pdf", ".epub", ".mobi", ".azw", ".azw3")

logger = get_logger(__name__)


def new_book_id() -> str:
    """Collision-resistant identifier for a new book."""
    return uuid.uuid4().hex


class LibraryRepository:
    """Owns the in-memory library and its JSON file.

    The whole library is rewritten on every mutation. All operations raise
    LibraryError subclasses rather than returning None; a mutation whose
    save fails is rolled back so memory matches the file on disk.

    File format:
    {
        "books": [
            {
                "id": "...",
                "title": "...",
                "author": "...",
                "filePath": "/abs/path/book.epub",
                "coverPath": "",
                "description": "",
                "format": "epub",
                "addedAt": "2024-05-01T10:00:00+02:00",
                "lastOpenedAt": "0001-01-01T00:00:00Z"
            }
        ],
        "path": "/home/user/Books"
    }
    """

    def __init__(self, data_file: Path) -> None:
        self.data_file = Path(data_file)
        self._books: List[BookRecord] = []
        self._root_path = ""
        self._lock = threading.RLock()

    def load(self) -> None:
        """Load the library from disk, creating an empty file if absent.

        Raises:
            PersistenceError: If the file cannot be read or is malformed.
        """
        with self._lock:
            if not self.data_file.exists():
                self._books = []
                self._root_path = ""
                self.save()
                logger.info("Created empty library at %s", self.data_file)
                return

            try:
                data = json.loads(self.data_file.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                raise PersistenceError(f"Failed to read library file {self.data_file}: {e}") from e

            try:
                books = [self._dict_to_book(entry) for entry in data.get("books") or []]
                root_path = data.get("path") or ""
                if not isinstance(root_path, str):
                    raise TypeError(f"path must be a string, got {root_path!r}")
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise PersistenceError(f"Malformed library file {self.data_file}: {e}") from e

            self._books = books
            self._root_path = root_path
            logger.debug("Loaded %d books from %s", len(books), self.data_file)

    def save(self) -> None:
        """Write the complete library to disk.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        with self._lock:
            data = {
                "books": [self._book_to_dict(book) for book in self._books],
                "path": self._root_path,
            }
            try:
                # ASCII output keeps undecodable file names as \udcXX escapes.
                text = json.dumps(data, indent=2)
                self.data_file.parent.mkdir(parents=True, exist_ok=True)
                self.data_file.write_text(text, encoding="utf-8")
            except (OSError, UnicodeError) as e:
                raise PersistenceError(f"Failed to write library file {self.data_file}: {e}") from e

    def list_books(self) -> List[BookRecord]:
        """All books in insertion order."""
        with self._lock:
            return list(self._books)

    def get_book(self, book_id: str) -> BookRecord:
        """Retrieve a book by id.

        Raises:
            BookNotFoundError: If no book has that id.
        """
        with self._lock:
            return self._books[self._index_of(book_id)]

    def add_book(
        self,
        title: str,
        author: str,
        file_path: str,
        description: str = "",
        format: str = "",
    ) -> BookRecord:
        """Add a book that refers to an existing file.

        Args:
            title: Display title.
            author: Author name.
            file_path: Path to the ebook file; must exist.
            description: Free-form description.
            format: Extension without the dot; derived from file_path if empty.

        Returns:
            BookRecord: The created record.

        Raises:
            PathNotFoundError: If file_path does not exist.
            PersistenceError: If the library cannot be saved.
        """
        if not file_path or not Path(file_path).exists():
            raise PathNotFoundError(file_path, kind="File")

        book = BookRecord(
            id=new_book_id(),
            title=title,
            author=author,
            file_path=file_path,
            cover_path="",
            description=description,
            format=format or Path(file_path).suffix.lstrip("."),
            added_at=now(),
        )

        with self._lock:
            self._books.append(book)
            try:
                self.save()
            except PersistenceError:
                self._books.pop()
                raise

        logger.info("Added book %s (%s)", book.id, book.file_path)
        return book

    def remove_book(self, book_id: str) -> None:
        """Remove a book from the library (does NOT delete its file).

        Raises:
            BookNotFoundError: If no book has that id.
            PersistenceError: If the library cannot be saved.
        """
        with self._lock:
            index = self._index_of(book_id)
            removed = self._books.pop(index)
            try:
                self.save()
            except PersistenceError:
                self._books.insert(index, removed)
                raise

        logger.info("Removed book %s", book_id)

    def open_book(self, book_id: str) -> str:
        """Stamp last_opened_at and return the book's file path.

        The file itself is not opened here.

        Raises:
            BookNotFoundError: If no book has that id.
            PersistenceError: If the library cannot be saved.
        """
        with self._lock:
            index = self._index_of(book_id)
            previous = self._books[index]
            self._books[index] = replace(previous, last_opened_at=now())
            try:
                self.save()
            except PersistenceError:
                self._books[index] = previous
                raise

        return previous.file_path

    def get_root_path(self) -> str:
        with self._lock:
            return self._root_path

    def set_root_path(self, path: str) -> None:
        """Store the default library directory.

        Raises:
            PathNotFoundError: If the directory does not exist.
            InvalidPathError: If the path is not a directory.
            PersistenceError: If the library cannot be saved.
        """
        self._require_directory(path)

        with self._lock:
            previous = self._root_path
            self._root_path = path
            try:
                self.save()
            except PersistenceError:
                self._root_path = previous
                raise

        logger.info("Library path set to %s", path)

    def scan_directory(self, path: str) -> List[BookRecord]:
        """Recursively add every ebook file found below a directory.

        Each matching file becomes a book titled with its file name. The
        library is saved once at the end. If the walk fails nothing found
        during it is kept.

        Returns:
            List[BookRecord]: Only the books added by this scan.

        Raises:
            PathNotFoundError: If the directory does not exist.
            InvalidPathError: If the path is not a directory.
            PersistenceError: If the walk or the save fails.
        """
        self._require_directory(path)

        found = []
        try:
            for file_path in self._walk_files(path):
                suffix = os.path.splitext(file_path)[1]
                if suffix not in EBOOK_EXTENSIONS:
                    continue
                found.append(
                    BookRecord(
                        id=new_book_id(),
                        title=os.path.basename(file_path),
                        author="",
                        file_path=file_path,
                        cover_path="",
                        description="",
                        format=suffix[1:],
                        added_at=now(),
                    )
                )
        except OSError as e:
            raise PersistenceError(f"Failed to scan directory {path}: {e}") from e

        with self._lock:
            count_before = len(self._books)
            self._books.extend(found)
            try:
                self.save()
            except PersistenceError:
                del self._books[count_before:]
                raise

        logger.info("Scan of %s added %d books", path, len(found))
        return found

    @staticmethod
    def _walk_files(root: str):
        """Yield every non-directory entry below root in lexical order.

        Symbolic links are not followed: a link is yielded as an entry of
        its own, even when it is broken or points at a directory.
        """

        def on_error(error: OSError):
            raise error

        for dir_path, dir_names, file_names in os.walk(root, onerror=on_error):
            dir_names.sort()
            linked_dirs = [name for name in dir_names if os.path.islink(os.path.join(dir_path, name))]
            for name in sorted(file_names + linked_dirs):
                yield os.path.join(dir_path, name)

    @staticmethod
    def _require_directory(path: str) -> None:
        if not path or not os.path.exists(path):
            raise PathNotFoundError(path, kind="Directory")
        if not os.path.isdir(path):
            raise InvalidPathError(path, "Not a directory")

    def _index_of(self, book_id: str) -> int:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        raise BookNotFoundError(book_id)

    @staticmethod
    def _book_to_dict(book: BookRecord) -> dict:
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

    @staticmethod
    def _dict_to_book(entry: dict) -> BookRecord:
        """Convert a JSON entry to a BookRecord entity.

        Missing or null text fields become empty strings; missing
        timestamps become None.
        """

        def text(key: str) -> str:
            value = entry.get(key)
            if value is None:
                return ""
            if not isinstance(value, str):
                raise TypeError(f"{key} must be a string, got {value!r}")
            return value

        return BookRecord(
            id=str(entry["id"]),
            title=text("title"),
            author=text("author"),
            file_path=text("filePath"),
            cover_path=text("coverPath"),
            description=text("description"),
            format=text("format"),
            added_at=parse_timestamp(entry.get("addedAt")),
            last_opened_at=parse_timestamp(entry.get("lastOpenedAt")),
        )
