"""Translate between the book API wire format and internal models."""
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional, Union

from booklist.models import Book, Note

logger = logging.getLogger(__name__)

# Wire field -> internal field
FIELD_MAP = {
    "id": "id",
    "name": "nom",
    "author": "auteur",
    "editor": "editeur",
    "year": "annee",
    "read": "lu",
    "favorite": "favorite",
    "rating": "rating",
    "cover": "cover",
    "theme": "theme",
}

REVERSE_FIELD_MAP = {internal: wire for wire, internal in FIELD_MAP.items()}


def normalize_flag(value: Any) -> bool:
    """
    Coerce a loosely-typed boolean from the API into a strict bool.

    Only ``True``, ``"true"``, the number 1 (int or float) and ``"1"`` are
    truthy; every other value (including ``None``, ``0``, ``"false"``) is False.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value == 1
    if isinstance(value, str):
        return value in ("true", "1")
    return False


def _parse_rating(value: Any) -> int:
    """Rating as an int in [0, 5]; numeric strings are accepted, anything else is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or value != value:
        return 0
    return int(min(max(value, 0), 5))


def from_remote(raw: Optional[Dict[str, Any]]) -> Optional[Book]:
    """
    Map a book payload from the API to a Book.

    Args:
        raw: Book as returned by the API (``name``, ``author``, ...)

    Returns:
        Book with internal field names, or the input itself if it is None
    """
    if raw is None:
        return raw

    return Book(
        id=raw.get("id"),
        nom=raw.get("name"),
        auteur=raw.get("author"),
        editeur=raw.get("editor"),
        annee=raw.get("year"),
        lu=normalize_flag(raw.get("read")),
        favorite=normalize_flag(raw.get("favorite")),
        rating=_parse_rating(raw.get("rating")),
        cover=raw.get("cover"),
        theme=raw.get("theme"),
    )


def to_remote(book: Union[Book, Dict[str, Any], None]) -> Optional[Dict[str, Any]]:
    """
    Map a Book (or a partial dict of internal fields) to the API format.

    Partial dicts only produce the fields they carry, which lets callers
    send partial updates.
    """
    if book is None:
        return book

    data = book.to_dict() if isinstance(book, Book) else book
    return {
        REVERSE_FIELD_MAP[key]: value
        for key, value in data.items()
        if key in REVERSE_FIELD_MAP
    }


def normalize_books(items: Any) -> Any:
    """
    Map a list of API payloads to Books.

    Anything that is not a list is returned unchanged.
    """
    if not isinstance(items, list):
        return items
    return [from_remote(item) for item in items]


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, str) and value:
        try:
            # fromisoformat() rejects the trailing Z on older interpreters
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Invalid note timestamp {value!r}, using current time")
    if not isinstance(value, datetime):
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def note_from_remote(raw: Dict[str, Any], book_id: Any) -> Note:
    """Map a note payload (``content``, ``createdAt``) to a Note."""
    return Note(
        book_id=book_id,
        content=raw.get("content", ""),
        created_at=_parse_timestamp(raw.get("createdAt")),
        id=raw.get("id"),
    )


def note_to_remote(note: Note) -> Dict[str, Any]:
    """Map a Note to the API format."""
    return {
        "content": note.content,
        "createdAt": note.created_at.isoformat(),
    }


def sort_notes(notes: List[Note]) -> List[Note]:
    """Order notes by creation time, oldest first."""
    return sorted(notes, key=lambda note: note.created_at)
