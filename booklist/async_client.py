"""Async HTTP client for the book API."""
import httpx
from typing import List, Optional, Dict, Any, Union
import logging

from booklist.errors import TransientFetchError
from booklist.models import Book, Note
from booklist.parse import from_remote, to_remote, normalize_books, note_from_remote, note_to_remote

logger = logging.getLogger(__name__)


class AsyncBookApiClient:
    """Async client for the remote book repository."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        timeout: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize async client.

        Args:
            base_url: Root URL of the book API
            timeout: Request timeout in seconds
            transport: Optional custom transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url
        self.timeout = timeout

        # Create async HTTP client
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
            transport=transport
        )

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one request and decode the JSON body.

        Raises:
            TransientFetchError: on transport errors, timeouts, non-2xx
                statuses or an undecodable body
        """
        try:
            logger.info(f"{method} {path}")
            response = await self.client.request(method, path, json=json)
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(f"Status {e.response.status_code} for {method} {path}")
            raise TransientFetchError(f"{method} {path} returned {e.response.status_code}") from e

        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise TransientFetchError(f"{method} {path} failed: {e}") from e

        except ValueError as e:
            logger.error(f"Invalid JSON from {method} {path}: {e}")
            raise TransientFetchError(f"{method} {path} returned invalid JSON") from e

    async def get_all(self) -> List[Book]:
        """Fetch the whole collection."""
        data = await self._request("GET", "/books")
        books = normalize_books(data)
        if not isinstance(books, list):
            raise TransientFetchError("GET /books did not return a list")
        logger.info(f"Fetched {len(books)} books")
        return books

    async def get_by_id(self, book_id: Any) -> Book:
        data = await self._request("GET", f"/books/{book_id}")
        return from_remote(data)

    async def create(self, fields: Union[Book, Dict[str, Any]]) -> Book:
        """Create a book; the server assigns its id."""
        data = await self._request("POST", "/books", json=to_remote(fields))
        return from_remote(data)

    async def update(self, book_id: Any, fields: Union[Book, Dict[str, Any]]) -> Book:
        """Replace (or partially update) a book."""
        data = await self._request("PUT", f"/books/{book_id}", json=to_remote(fields))
        return from_remote(data)

    async def delete(self, book_id: Any) -> None:
        await self._request("DELETE", f"/books/{book_id}")

    async def get_notes(self, book_id: Any) -> List[Note]:
        data = await self._request("GET", f"/books/{book_id}/notes")
        return [note_from_remote(item, book_id) for item in data or []]

    async def add_note(self, book_id: Any, note: Note) -> Note:
        data = await self._request("POST", f"/books/{book_id}/notes", json=note_to_remote(note))
        return note_from_remote(data, book_id) if data else note

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
