"""Summary statistics over a book collection."""
from typing import List

from booklist.models import Book, LibraryStats


def aggregate(books: List[Book]) -> LibraryStats:
    """
    Count read, unread and favorite books and average the ratings.

    Unrated books (rating 0) are left out of the average; with no rated
    book at all the average is "0.0".
    """
    total = len(books)
    read = sum(1 for book in books if book.lu is True)
    favorites = sum(1 for book in books if book.favorite is True)

    ratings = [book.rating for book in books if book.rating > 0]
    avg_rating = sum(ratings) / len(ratings) if ratings else 0

    return LibraryStats(
        total=total,
        read=read,
        unread=total - read,
        favorites=favorites,
        avg_rating=f"{avg_rating:.1f}",
    )
