"""Tests for the flag normalizer and the book mapper."""
from datetime import datetime, timezone

import pytest

from booklist.models import Book, Note
from booklist.parse import (
    normalize_flag, from_remote, to_remote, normalize_books,
    note_from_remote, note_to_remote, sort_notes,
)


@pytest.mark.parametrize("value", [True, "true", 1, 1.0, "1"])
def test_normalize_flag_truthy(value):
    """Test the accepted truthy values."""
    assert normalize_flag(value) is True


@pytest.mark.parametrize("value", [False, None, 0, "0", "false", "TRUE", "yes", 0.0, 2, 2.5, [], {}])
def test_normalize_flag_falsy(value):
    """Test that everything else is False."""
    assert normalize_flag(value) is False


@pytest.mark.parametrize("value", [True, False, "true", "1", 1, 0, None, "false", "x"])
def test_normalize_flag_idempotent(value):
    """Test that normalizing twice changes nothing."""
    assert normalize_flag(normalize_flag(value)) == normalize_flag(value)


def test_from_remote_complete():
    """Test mapping a book with all fields present."""
    raw = {
        "id": 7,
        "name": "Dune",
        "author": "Frank Herbert",
        "editor": "Chilton",
        "year": 1965,
        "read": "true",
        "favorite": 1,
        "rating": 4,
        "cover": "http://example.com/dune.jpg",
        "theme": "SF",
    }

    book = from_remote(raw)

    assert book == Book(
        id=7, nom="Dune", auteur="Frank Herbert", editeur="Chilton", annee=1965,
        lu=True, favorite=True, rating=4, cover="http://example.com/dune.jpg", theme="SF",
    )


def test_from_remote_missing_fields():
    """Test defaults for a minimal payload."""
    book = from_remote({"id": "a1", "name": "1984", "author": "Orwell"})

    assert book.lu is False
    assert book.favorite is False
    assert book.rating == 0
    assert book.editeur is None
    assert book.annee is None


@pytest.mark.parametrize("read", ["1", 1, "true", True, "false", 0, None, "oui"])
def test_from_remote_read_is_strict_bool(read):
    """Test that raw read values never leak past the mapper."""
    assert from_remote({"id": 1, "name": "x", "author": "y", "read": read}).lu in (True, False)


def test_from_remote_none_passthrough():
    assert from_remote(None) is None


def test_to_remote_renames_fields(dune):
    """Test the inverse renaming."""
    raw = to_remote(dune)

    assert raw["name"] == "Dune"
    assert raw["author"] == "Herbert"
    assert raw["read"] is True
    assert raw["favorite"] is False
    assert "nom" not in raw


def test_to_remote_partial_dict():
    """Test that partial dicts only produce the fields they carry."""
    assert to_remote({"lu": True, "unknown": 3}) == {"read": True}


def test_to_remote_none_passthrough():
    assert to_remote(None) is None


def test_round_trip(dune, nineteen_eighty_four):
    """Test that mapping out and back in gives the same book."""
    for book in (dune, nineteen_eighty_four):
        assert from_remote(to_remote(book)) == book


def test_normalize_books():
    """Test mapping a full API response."""
    books = normalize_books([
        {"id": 1, "name": "Book 1", "author": "A", "read": "1"},
        {"id": 2, "name": "Book 2", "author": "B"},
    ])

    assert [book.nom for book in books] == ["Book 1", "Book 2"]
    assert books[0].lu is True


def test_normalize_books_non_list():
    """Test that non-list input is returned unchanged."""
    assert normalize_books(None) is None
    payload = {"error": "oops"}
    assert normalize_books(payload) is payload


def test_note_mapping():
    """Test note payloads in both directions."""
    note = note_from_remote({"id": 3, "content": "Superbe", "createdAt": "2024-05-01T10:00:00Z"}, book_id=1)

    assert note.book_id == 1
    assert note.created_at == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
    assert note_to_remote(note) == {"content": "Superbe", "createdAt": "2024-05-01T10:00:00+00:00"}


def test_sort_notes_oldest_first():
    older = Note(book_id=1, content="a", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    newer = Note(book_id=1, content="b", created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))

    assert sort_notes([newer, older]) == [older, newer]


@pytest.mark.parametrize("rating, expected", [
    ("4", 4), (3, 3), (4.0, 4), ("abc", 0), (None, 0), (True, 0), (9, 5), (-2, 0),
])
def test_from_remote_rating_coerced(rating, expected):
    """Test that ratings always come out as ints in [0, 5]."""
    book = from_remote({"id": 1, "name": "x", "author": "y", "rating": rating})

    assert book.rating == expected
    assert isinstance(book.rating, int)


def test_note_with_malformed_timestamp():
    """Test that a bad createdAt falls back to the current time."""
    note = note_from_remote({"content": "ok", "createdAt": "yesterday"}, book_id=1)

    assert note.created_at.tzinfo is not None
    assert note.created_at <= datetime.now(timezone.utc)
