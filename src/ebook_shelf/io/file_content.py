"""Reads ebook files into data URIs for inline transfer to the front-end."""

import base64
from pathlib import Path

from ebook_shelf.core import PathNotFoundError, PersistenceError

DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES = {
    ".pdf": "application/pdf",
    ".epub": "application/epub+zip",
    ".mobi": "application/x-mobipocket-ebook",
    ".azw": "application/vnd.amazon.ebook",
    ".azw3": "application/vnd.amazon.ebook",
}


def mime_type_for(path) -> str:
    """MIME type for a path, chosen by its lower-cased extension."""
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def read_file_as_data_uri(path) -> str:
    """Read a whole file and return it as ``data:<mime>;base64,<payload>``.

    Raises:
        PathNotFoundError: If the path does not exist.
        PersistenceError: If the file cannot be read.
    """
    file_path = Path(path)
    if not str(path) or not file_path.exists():
        raise PathNotFoundError(path, kind="File")

    try:
        payload = file_path.read_bytes()
    except OSError as e:
        raise PersistenceError(f"Failed to read file: {e}") from e

    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type_for(file_path)};base64,{encoded}"
