#!/usr/bin/env python3
"""
Tests for LibraryRepository - validates JSON library persistence.
"""

import json
import os
import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from ebook_shelf.core import (
    BookNotFoundError,
    InvalidPathError,
    NotFoundError,
    PathNotFoundError,
    PersistenceError,
)
from ebook_shelf.io import LibraryRepository


@pytest.fixture
def library_file(tmp_path):
    return tmp_path / "data" / "library.json"


@pytest.fixture
def library_repo(library_file):
    """Create a loaded LibraryRepository backed by a temporary file."""
    repo = LibraryRepository(library_file)
    repo.load()
    return repo


@pytest.fixture
def ebook_file(tmp_path):
    path = tmp_path / "dune.epub"
    path.write_bytes(b"PK\x03\x04 fake epub")
    return path


def test_load_creates_empty_library_file(library_file):
    repo = LibraryRepository(library_file)
    repo.load()

    assert library_file.exists()
    assert json.loads(library_file.read_text()) == {"books": [], "path": ""}
    assert repo.list_books() == []


def test_load_malformed_file_raises(library_file):
    library_file.parent.mkdir(parents=True)
    library_file.write_text("{not json")

    with pytest.raises(PersistenceError, match="Failed to read library file"):
        LibraryRepository(library_file).load()

    # Not repaired
    assert library_file.read_text() == "{not json"


def test_load_wrong_shape_raises(library_file):
    library_file.parent.mkdir(parents=True)
    library_file.write_text(json.dumps({"books": [{"title": "no id"}], "path": ""}))

    with pytest.raises(PersistenceError, match="Malformed library file"):
        LibraryRepository(library_file).load()


def test_add_book_records_supplied_fields(library_repo, ebook_file):
    book = library_repo.add_book(
        title="Dune",
        author="Frank Herbert",
        file_path=str(ebook_file),
        description="Desert planet",
        format="epub",
    )

    assert book.id
    assert book.title == "Dune"
    assert book.author == "Frank Herbert"
    assert book.file_path == str(ebook_file)
    assert book.description == "Desert planet"
    assert book.format == "epub"
    assert book.cover_path == ""
    assert book.last_opened_at is None
    assert isinstance(book.added_at, datetime)
    assert library_repo.list_books() == [book]


def test_add_book_derives_format_when_empty(library_repo, ebook_file):
    book = library_repo.add_book("Dune", "", str(ebook_file), "", "")
    assert book.format == "epub"


def test_add_book_missing_file_leaves_library_unchanged(library_repo, library_file, tmp_path):
    before = library_file.read_text()

    with pytest.raises(NotFoundError):
        library_repo.add_book("Ghost", "", str(tmp_path / "missing.pdf"), "", "pdf")

    assert library_repo.list_books() == []
    assert library_file.read_text() == before


def test_add_book_generates_distinct_ids(library_repo, ebook_file):
    ids = {library_repo.add_book("Dune", "", str(ebook_file), "", "epub").id for _ in range(50)}
    assert len(ids) == 50


def test_remove_book(library_repo, ebook_file):
    kept = library_repo.add_book("Keep", "", str(ebook_file), "", "epub")
    removed = library_repo.add_book("Drop", "", str(ebook_file), "", "epub")

    library_repo.remove_book(removed.id)

    assert [book.id for book in library_repo.list_books()] == [kept.id]


def test_remove_unknown_book_raises(library_repo, ebook_file):
    book = library_repo.add_book("Dune", "", str(ebook_file), "", "epub")

    with pytest.raises(BookNotFoundError, match="not found"):
        library_repo.remove_book("nope")

    assert library_repo.list_books() == [book]


def test_open_book_stamps_only_last_opened(library_repo, ebook_file):
    book = library_repo.add_book("Dune", "Herbert", str(ebook_file), "d", "epub")
    other = library_repo.add_book("Other", "", str(ebook_file), "", "epub")
    before = datetime.now().astimezone().replace(microsecond=0)

    path = library_repo.open_book(book.id)

    assert path == str(ebook_file)
    opened = library_repo.get_book(book.id)
    assert opened.last_opened_at is not None
    assert opened.last_opened_at >= before
    assert opened.title == book.title
    assert opened.author == book.author
    assert opened.added_at == book.added_at
    assert library_repo.get_book(other.id) == other


def test_open_unknown_book_raises(library_repo):
    with pytest.raises(BookNotFoundError):
        library_repo.open_book("nope")


def test_set_root_path(library_repo, library_file, tmp_path):
    library_repo.set_root_path(str(tmp_path))

    assert library_repo.get_root_path() == str(tmp_path)
    assert json.loads(library_file.read_text())["path"] == str(tmp_path)


def test_set_root_path_missing_directory_raises(library_repo, tmp_path):
    with pytest.raises(PathNotFoundError, match="Directory does not exist"):
        library_repo.set_root_path(str(tmp_path / "nowhere"))
    assert library_repo.get_root_path() == ""


def test_set_root_path_rejects_file(library_repo, ebook_file):
    with pytest.raises(InvalidPathError):
        library_repo.set_root_path(str(ebook_file))


def test_scan_directory_adds_only_ebooks(library_repo, ebook_file, tmp_path):
    existing = library_repo.add_book("Dune", "", str(ebook_file), "", "epub")
    shelf = tmp_path / "shelf"
    (shelf / "sub").mkdir(parents=True)
    (shelf / "a.pdf").write_bytes(b"%PDF")
    (shelf / "b.txt").write_text("notes")
    (shelf / "sub" / "c.epub").write_bytes(b"PK")

    added = library_repo.scan_directory(str(shelf))

    assert [book.title for book in added] == ["a.pdf", "c.epub"]
    assert [book.format for book in added] == ["pdf", "epub"]
    assert added[1].file_path == str(shelf / "sub" / "c.epub")
    assert all(book.author == "" and book.description == "" for book in added)
    assert existing not in added
    assert len(library_repo.list_books()) == 3


def test_scan_directory_matches_extensions_case_sensitively(library_repo, tmp_path):
    (tmp_path / "upper.PDF").write_bytes(b"%PDF")
    (tmp_path / "kindle.azw3").write_bytes(b"azw")
    (tmp_path / "old.azw").write_bytes(b"azw")
    (tmp_path / "mobi.mobi").write_bytes(b"mobi")

    added = library_repo.scan_directory(str(tmp_path))

    assert sorted(book.format for book in added) == ["azw", "azw3", "mobi"]


def test_scan_directory_persists_once(library_repo, tmp_path):
    (tmp_path / "a.pdf").write_bytes(b"%PDF")
    (tmp_path / "b.pdf").write_bytes(b"%PDF")

    with patch.object(LibraryRepository, "save", autospec=True) as save:
        library_repo.scan_directory(str(tmp_path))

    assert save.call_count == 1


def test_scan_directory_missing_raises(library_repo, tmp_path):
    with pytest.raises(PathNotFoundError):
        library_repo.scan_directory(str(tmp_path / "nowhere"))


def test_scan_walk_error_rolls_back(library_repo, library_file, tmp_path):
    (tmp_path / "a.pdf").write_bytes(b"%PDF")
    before = library_file.read_text()

    def failing_walk(root):
        yield str(tmp_path / "a.pdf")
        raise PermissionError("denied")

    with patch.object(LibraryRepository, "_walk_files", staticmethod(failing_walk)):
        with pytest.raises(PersistenceError, match="Failed to scan directory"):
            library_repo.scan_directory(str(tmp_path))

    assert library_repo.list_books() == []
    assert library_file.read_text() == before


def test_failed_save_rolls_back_add(library_repo, ebook_file, tmp_path):
    # Writing to a directory path fails
    library_repo.data_file = tmp_path

    with pytest.raises(PersistenceError, match="Failed to write library file"):
        library_repo.add_book("Dune", "", str(ebook_file), "", "epub")

    assert library_repo.list_books() == []


def test_round_trip_preserves_library(library_repo, library_file, ebook_file, tmp_path):
    first = library_repo.add_book("Dune", "Herbert", str(ebook_file), "Desert", "epub")
    library_repo.add_book("Emma", "Austen", str(ebook_file), "", "epub")
    library_repo.open_book(first.id)
    library_repo.set_root_path(str(tmp_path))

    reloaded = LibraryRepository(library_file)
    reloaded.load()

    assert reloaded.list_books() == library_repo.list_books()
    assert reloaded.get_root_path() == str(tmp_path)


def test_round_trip_empty_library(library_repo, library_file):
    library_repo.save()

    reloaded = LibraryRepository(library_file)
    reloaded.load()

    assert reloaded.list_books() == []
    assert reloaded.get_root_path() == ""


def test_load_reads_files_with_zero_last_opened(library_file):
    library_file.parent.mkdir(parents=True)
    library_file.write_text(json.dumps({
        "books": [{
            "id": "1714550400000000000",
            "title": "Dune",
            "author": "",
            "filePath": "/books/dune.epub",
            "coverPath": "",
            "description": "",
            "format": "epub",
            "addedAt": "2024-05-01T10:00:00.123456789+02:00",
            "lastOpenedAt": "0001-01-01T00:00:00Z",
        }],
        "path": "/books",
    }))

    repo = LibraryRepository(library_file)
    repo.load()

    [book] = repo.list_books()
    assert book.id == "1714550400000000000"
    assert book.last_opened_at is None
    assert repo.get_root_path() == "/books"


@pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts raw byte names")
def test_scan_undecodable_file_name_survives_reload(library_repo, library_file, tmp_path):
    shelf = tmp_path / "shelf"
    shelf.mkdir()
    (shelf / "ok.pdf").write_bytes(b"%PDF")
    with open(os.path.join(os.fsencode(shelf), b"caf\xe9.pdf"), "wb") as f:
        f.write(b"%PDF")

    added = library_repo.scan_directory(str(shelf))

    assert len(added) == 2
    reloaded = LibraryRepository(library_file)
    reloaded.load()
    assert reloaded.list_books() == library_repo.list_books()
    assert all(os.path.exists(book.file_path) for book in reloaded.list_books())


def test_failed_serialisation_rolls_back_and_keeps_file(library_repo, library_file, ebook_file):
    before = library_file.read_text()

    encode_error = UnicodeEncodeError("utf-8", "x", 0, 1, "bad")
    with patch("ebook_shelf.io.library_repository.json.dumps", side_effect=encode_error):
        with pytest.raises(PersistenceError):
            library_repo.add_book("Dune", "", str(ebook_file), "", "epub")

    assert library_repo.list_books() == []
    assert library_file.read_text() == before


def test_load_tolerates_null_fields_and_missing_added_at(library_file):
    library_file.parent.mkdir(parents=True)
    library_file.write_text(json.dumps({
        "books": [
            {"id": "1", "title": None, "author": None, "filePath": "/books/a.pdf", "format": "pdf"},
            {"id": "2", "title": "B", "addedAt": "0001-01-01T00:00:00Z"},
        ],
        "path": None,
    }))

    repo = LibraryRepository(library_file)
    repo.load()

    first, second = repo.list_books()
    assert first.title == ""
    assert first.author == ""
    assert first.cover_path == ""
    assert first.added_at is None
    assert second.added_at is None
    assert repo.get_root_path() == ""

    repo.save()
    reloaded = LibraryRepository(library_file)
    reloaded.load()
    assert reloaded.list_books() == repo.list_books()


def test_load_rejects_non_string_fields(library_file):
    library_file.parent.mkdir(parents=True)
    library_file.write_text(json.dumps({"books": [{"id": "1", "title": 7}], "path": ""}))

    with pytest.raises(PersistenceError, match="Malformed library file"):
        LibraryRepository(library_file).load()


def test_load_rejects_non_string_root_path(library_file):
    library_file.parent.mkdir(parents=True)
    library_file.write_text(json.dumps({"books": [], "path": ["/books"]}))

    with pytest.raises(PersistenceError, match="path must be a string"):
        LibraryRepository(library_file).load()


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_scan_keeps_symlinked_entries_without_following(library_repo, tmp_path):
    shelf = tmp_path / "shelf"
    target_dir = tmp_path / "elsewhere"
    target_dir.mkdir()
    (target_dir / "inner.epub").write_bytes(b"PK")
    shelf.mkdir()
    os.symlink(tmp_path / "missing.pdf", shelf / "ghost.pdf")
    os.symlink(target_dir, shelf / "linked")

    added = library_repo.scan_directory(str(shelf))

    assert [book.title for book in added] == ["ghost.pdf"]
