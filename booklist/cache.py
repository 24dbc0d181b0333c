"""Local snapshot of the book collection, kept in a key-value store."""
import json
import logging
from datetime import datetime, timezone
from typing import List, Optional, Iterable, Protocol

from booklist.models import Book

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Anything that can get, set and remove string values by key."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, keys: Iterable[str]) -> None: ...


class LocalCache:
    """
    Best-effort mirror of the last successfully fetched collection.

    Every store failure is logged and swallowed: the cache must never make
    a user-facing operation fail.
    """

    def __init__(self, store: KeyValueStore, namespace: str = "@booklist_app"):
        """
        Initialize the cache.

        Args:
            store: Backing key-value store
            namespace: Prefix for every key written by this cache
        """
        self.store = store
        self.namespace = namespace
        self.books_key = f"{namespace}:books"
        self.sync_pending_key = f"{namespace}:sync_pending"
        self.last_sync_key = f"{namespace}:last_sync"

    @property
    def keys(self) -> List[str]:
        return [self.books_key, self.sync_pending_key, self.last_sync_key]

    def save_books(self, books: List[Book]):
        """Overwrite the snapshot with the full collection and stamp the sync time."""
        try:
            payload = json.dumps([book.to_dict() for book in books])
            self.store.set(self.books_key, payload)
            self.store.set(self.last_sync_key, datetime.now(timezone.utc).isoformat())
            logger.info(f"Saved {len(books)} books to local cache")
        except Exception as e:
            logger.error(f"Failed to save books to local cache: {e}")

    def load_books(self) -> Optional[List[Book]]:
        """
        Read the snapshot back.

        Returns:
            Cached books, or None if nothing is cached or the snapshot is unreadable
        """
        try:
            payload = self.store.get(self.books_key)
            if payload is None:
                return None
            books = [Book.from_dict(item) for item in json.loads(payload)]
            logger.info(f"Loaded {len(books)} books from local cache")
            return books
        except Exception as e:
            logger.error(f"Failed to load books from local cache: {e}")
            return None

    def has_pending_sync(self) -> bool:
        try:
            return self.store.get(self.sync_pending_key) == "true"
        except Exception as e:
            logger.error(f"Failed to read pending sync flag: {e}")
            return False

    def set_pending_sync(self, pending: bool):
        try:
            self.store.set(self.sync_pending_key, "true" if pending else "false")
        except Exception as e:
            logger.error(f"Failed to write pending sync flag: {e}")

    def get_last_sync(self) -> Optional[datetime]:
        """Time of the last successful save, or None."""
        try:
            value = self.store.get(self.last_sync_key)
            return datetime.fromisoformat(value) if value else None
        except Exception as e:
            logger.error(f"Failed to read last sync time: {e}")
            return None

    def clear_all(self):
        """Remove every key owned by this cache."""
        try:
            self.store.remove(self.keys)
            logger.info("Local cache cleared")
        except Exception as e:
            logger.error(f"Failed to clear local cache: {e}")
