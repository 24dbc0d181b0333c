"""Data models for books, notes and library statistics."""
from dataclasses import dataclass, asdict, fields
from datetime import datetime
from typing import Optional, Any, Dict


@dataclass
class Book:
    """Normalized book representation."""
    id: Any
    nom: str
    auteur: str
    editeur: Optional[str] = None
    annee: Optional[int] = None
    lu: bool = False
    favorite: bool = False
    rating: int = 0
    cover: Optional[str] = None
    theme: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Internal (cache) representation."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Book":
        """Build a book from its internal representation, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @property
    def status_label(self) -> str:
        return "Lu" if self.lu else "Non lu"

    @property
    def stars(self) -> str:
        """Rating rendered as five stars."""
        return "★" * self.rating + "☆" * (5 - self.rating)


@dataclass
class Note:
    """A note attached to a single book."""
    book_id: Any
    content: str
    created_at: datetime
    id: Optional[Any] = None


@dataclass
class LibraryStats:
    """Summary counts over a book collection."""
    total: int
    read: int
    unread: int
    favorites: int
    avg_rating: str

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "read": self.read,
            "unread": self.unread,
            "favorites": self.favorites,
            "avgRating": self.avg_rating,
        }
