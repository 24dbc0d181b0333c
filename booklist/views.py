"""Filtered and sorted projections of a book collection."""
import locale
import unicodedata
from typing import List, Optional, Tuple

from booklist.models import Book

FILTER_TYPES = ("all", "read", "unread", "favorites")
SORT_KEYS = ("titre", "auteur", "theme")


def matches_query(book: Book, query: str) -> bool:
    """Case-insensitive substring match on title or author."""
    needle = query.casefold()
    return needle in (book.nom or "").casefold() or needle in (book.auteur or "").casefold()


def matches_filter(book: Book, filter_type: str) -> bool:
    if filter_type == "read":
        return book.lu is True
    if filter_type == "unread":
        return book.lu is False
    if filter_type == "favorites":
        return book.favorite is True
    # "all" and anything unknown
    return True


def _collation_key(value: Optional[str]) -> Tuple[str, str]:
    """
    Sort key comparing letters first, ignoring case and accents.

    Ties such as "cote" / "côte" are broken by the active LC_COLLATE rules.
    """
    folded = (value or "").casefold()
    base = "".join(c for c in unicodedata.normalize("NFKD", folded) if not unicodedata.combining(c))
    return base, locale.strxfrm(folded)


def derive_view(
    books: List[Book],
    query: str = "",
    filter_type: str = "all",
    sort_by: str = "titre"
) -> List[Book]:
    """
    Build the list shown to the user.

    Args:
        books: Raw collection, left untouched
        query: Free text matched against title and author
        filter_type: One of FILTER_TYPES, unknown values mean "all"
        sort_by: One of SORT_KEYS, unknown values keep input order

    Returns:
        A new list, filtered then sorted
    """
    query = (query or "").strip()

    view = [
        book for book in books
        if (not query or matches_query(book, query)) and matches_filter(book, filter_type)
    ]

    if sort_by == "titre":
        view.sort(key=lambda book: _collation_key(book.nom))
    elif sort_by == "auteur":
        view.sort(key=lambda book: _collation_key(book.auteur))
    elif sort_by == "theme":
        # Plain ordering, no case folding or locale rules
        view.sort(key=lambda book: book.theme or "")

    return view
