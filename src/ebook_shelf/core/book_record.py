"""Domain entity for a tracked ebook."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class BookRecord:
    """Represents one ebook file tracked by the library.

    Attributes:
        id: Unique identifier within the library.
        title: Display title.
        author: Author name (may be empty).
        file_path: Absolute path to the ebook file.
        cover_path: Path to a cover image, empty when the book has none.
        description: Free-form description (may be empty).
        format: File extension without the leading dot, e.g. "epub".
        added_at: When the book was added, None if the stored entry had no time.
        last_opened_at: When the book was last opened, None if never.
    """

    id: str
    title: str
    author: str
    file_path: str
    cover_path: str
    description: str
    format: str
    added_at: Optional[datetime]
    last_opened_at: Optional[datetime] = None
