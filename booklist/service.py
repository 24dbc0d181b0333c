"""Validated book mutations over the remote repository."""
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List

from booklist.errors import MutationError, TransientFetchError
from booklist.models import Book, Note
from booklist.parse import sort_notes
from booklist.validation import validate_book_fields, validate_note_content, validate_rating

logger = logging.getLogger(__name__)


class BookService:
    """
    Create, edit and delete books.

    Fields are validated before any network call. Failed writes are
    reported as MutationError, failed reads as TransientFetchError. Nothing is rolled
    back or retried; callers reload the collection afterwards.
    """

    def __init__(self, repository):
        self.repository = repository

    async def _call(self, operation: str, message: str, coro):
        try:
            return await coro
        except TransientFetchError as e:
            logger.error(f"{operation} failed: {e}")
            raise MutationError(operation, message) from e

    async def get_book(self, book_id: Any) -> Book:
        """Read one book; TransientFetchError propagates."""
        return await self.repository.get_by_id(book_id)

    async def create_book(self, fields: Dict[str, Any]) -> Book:
        cleaned = validate_book_fields(fields)
        book = await self._call("create", "Impossible d'ajouter le livre", self.repository.create(cleaned))
        logger.info(f"Created book {book.id}: {book.nom}")
        return book

    async def update_book(self, book_id: Any, fields: Dict[str, Any], partial: bool = False) -> Book:
        cleaned = validate_book_fields(fields, partial=partial)
        return await self._call(
            "update", "Impossible de modifier le livre", self.repository.update(book_id, cleaned)
        )

    async def delete_book(self, book_id: Any) -> None:
        await self._call("delete", "Impossible de supprimer le livre", self.repository.delete(book_id))
        logger.info(f"Deleted book {book_id}")

    async def toggle_read(self, book: Book) -> Book:
        """Flip the read flag; returns the book as stored by the server."""
        updated = replace(book, lu=not book.lu)
        return await self._call(
            "toggle_read", "Impossible de modifier le statut", self.repository.update(book.id, updated)
        )

    async def toggle_favorite(self, book: Book) -> Book:
        updated = replace(book, favorite=not book.favorite)
        return await self._call(
            "toggle_favorite", "Impossible de modifier les favoris", self.repository.update(book.id, updated)
        )

    async def set_rating(self, book: Book, rating: int) -> Book:
        updated = replace(book, rating=validate_rating(rating))
        return await self._call(
            "set_rating", "Impossible de modifier la note", self.repository.update(book.id, updated)
        )

    async def list_notes(self, book_id: Any) -> List[Note]:
        """Notes of a book, oldest first."""
        notes = await self.repository.get_notes(book_id)
        return sort_notes(notes)

    async def add_note(self, book_id: Any, content: str) -> Note:
        note = Note(
            book_id=book_id,
            content=validate_note_content(content),
            created_at=datetime.now(timezone.utc),
        )
        return await self._call("add_note", "Impossible d'ajouter la note", self.repository.add_note(book_id, note))
