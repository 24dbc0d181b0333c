"""HTTP client for the OpenLibrary search API."""
import requests
from typing import Optional, Dict, Any
import logging

from booklist.errors import LookupFailure

logger = logging.getLogger(__name__)


class OpenLibraryClient:
    """Client for OpenLibrary edition lookups. Failures never reach the caller."""

    BASE_URL = "https://openlibrary.org"

    def __init__(self, base_url: Optional[str] = None, timeout: int = 5):
        """
        Initialize OpenLibrary client.

        Args:
            base_url: Override for the OpenLibrary root URL
            timeout: Request timeout in seconds
        """
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout

        # Create session for connection pooling
        self.session = requests.Session()

    def _search(self, title: str) -> Dict[str, Any]:
        """
        Run a title search, keeping only the first document.

        Raises:
            LookupFailure: on any network, HTTP or decoding error
        """
        try:
            response = self.session.get(
                f"{self.base_url}/search.json",
                params={"title": title, "limit": 1},
                timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            raise LookupFailure(str(e)) from e

    def search_by_title(self, title: str) -> Optional[Dict[str, Any]]:
        """
        Search books by title.

        Args:
            title: Book title

        Returns:
            ``{"numFound": n, "docs": [...]}`` or None if the lookup failed
        """
        try:
            data = self._search(title)
        except LookupFailure as e:
            logger.error(f"Error searching OpenLibrary: {e}")
            return None

        if data and data.get("numFound"):
            return {"numFound": data["numFound"], "docs": data.get("docs") or []}

        return {"numFound": 0, "docs": []}

    def get_editions_count(self, title: str) -> int:
        """Number of editions OpenLibrary references for a title, 0 when unknown."""
        result = self.search_by_title(title)
        return result["numFound"] if result else 0

    def close(self):
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
