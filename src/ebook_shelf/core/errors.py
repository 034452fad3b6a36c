"""Error hierarchy for library and settings operations.

Every error derives from RuntimeError so callers that follow the
fail-fast convention (catch RuntimeError at the UI boundary) keep working.
"""


class LibraryError(RuntimeError):
    """Base class for all ebook shelf failures."""


class NotFoundError(LibraryError):
    """A referenced book or filesystem path does not exist."""


class BookNotFoundError(NotFoundError):
    def __init__(self, book_id: str):
        super().__init__(f"Book with id {book_id} not found")
        self.book_id = book_id


class PathNotFoundError(NotFoundError):
    def __init__(self, path, kind: str = "Path"):
        super().__init__(f"{kind} does not exist: {path}")
        self.path = path


class ValidationError(LibraryError):
    """Input was present but not acceptable."""


class InvalidPathError(ValidationError):
    def __init__(self, path, reason: str):
        super().__init__(f"{reason}: {path}")
        self.path = path


class SettingsValidationError(ValidationError):
    """Merged settings do not fit the settings schema."""


class PersistenceError(LibraryError):
    """Reading, writing or parsing a file failed."""
