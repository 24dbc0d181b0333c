"""Load the book collection from the API, falling back to the local cache."""
import logging
from typing import Callable, List, Optional

from booklist.cache import LocalCache
from booklist.errors import CollectionUnavailable, TransientFetchError
from booklist.models import Book

logger = logging.getLogger(__name__)

Listener = Callable[[List[Book]], None]


class CollectionLoader:
    """Read-through loader: one remote attempt, cache on failure."""

    def __init__(self, repository, cache: LocalCache):
        """
        Args:
            repository: Object exposing ``async get_all() -> list[Book]``
            cache: Local snapshot used when the repository is unreachable
        """
        self.repository = repository
        self.cache = cache
        self.last_source: Optional[str] = None
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener):
        """Call ``listener(books)`` after every successful load."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def load_collection(self) -> List[Book]:
        """
        Fetch the collection, persisting it locally on success.

        Returns:
            Books from the API, or the cached snapshot if the API failed

        Raises:
            CollectionUnavailable: the API failed and nothing is cached
        """
        try:
            books = await self.repository.get_all()
        except TransientFetchError as e:
            logger.warning(f"Remote fetch failed, falling back to local cache: {e}")
            cached = self.cache.load_books()
            if cached is None:
                logger.error("No cached books available")
                raise CollectionUnavailable("Impossible de charger les livres") from e
            self.last_source = "cache"
            self._notify(cached)
            return cached

        self.cache.save_books(books)
        self.last_source = "remote"
        self._notify(books)
        return books

    def _notify(self, books: List[Book]):
        for listener in list(self._listeners):
            listener(books)
