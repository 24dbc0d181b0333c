"""Persisted light/dark theme preference."""
import logging
from typing import Dict, Any

from booklist.cache import KeyValueStore

logger = logging.getLogger(__name__)

THEME_STORAGE_KEY = "@booklist_app:theme"

LIGHT_COLORS = {
    "primary": "#6200ee",
    "secondary": "#03dac5",
    "success": "#4caf50",
    "warning": "#ff9800",
    "danger": "#f44336",
    "background": "#f5f5f5",
    "surface": "#fff",
    "card": "#fff",
    "text": {"primary": "#333", "secondary": "#666", "tertiary": "#999", "inverse": "#fff"},
    "border": "#e0e0e0",
}

DARK_COLORS = {
    "primary": "#7c4dff",
    "secondary": "#03dac5",
    "success": "#4caf50",
    "warning": "#ff9800",
    "danger": "#f44336",
    "background": "#121212",
    "surface": "#1e1e1e",
    "card": "#2d2d2d",
    "text": {"primary": "#fff", "secondary": "#b3b3b3", "tertiary": "#888", "inverse": "#333"},
    "border": "#3d3d3d",
}


class ThemePreference:
    """Current theme mode, loaded from and saved to a key-value store."""

    def __init__(self, store: KeyValueStore, key: str = THEME_STORAGE_KEY):
        self.store = store
        self.key = key
        self.mode = "light"

    @property
    def is_dark(self) -> bool:
        return self.mode == "dark"

    @property
    def colors(self) -> Dict[str, Any]:
        return DARK_COLORS if self.is_dark else LIGHT_COLORS

    def load(self) -> str:
        """Read the saved mode; anything but "dark" means light."""
        try:
            saved = self.store.get(self.key)
        except Exception as e:
            logger.error(f"Error loading theme: {e}")
            saved = None
        self.mode = "dark" if saved == "dark" else "light"
        return self.mode

    def persist(self):
        try:
            self.store.set(self.key, self.mode)
        except Exception as e:
            logger.error(f"Error saving theme: {e}")

    def toggle(self) -> str:
        """Switch between light and dark and save the new mode."""
        self.mode = "light" if self.is_dark else "dark"
        self.persist()
        return self.mode
