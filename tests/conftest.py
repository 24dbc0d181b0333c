import pytest

from booklist.errors import TransientFetchError
from booklist.models import Book


class MemoryStore:
    """In-memory key-value store."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value

    def remove(self, keys):
        for key in keys:
            self.data.pop(key, None)


class BrokenStore:
    """Store whose every call fails, like an unavailable database."""

    def get(self, key):
        raise RuntimeError("store unavailable")

    def set(self, key, value):
        raise RuntimeError("store unavailable")

    def remove(self, keys):
        raise RuntimeError("store unavailable")


class FakeRepository:
    """Book repository double recording calls; fails when ``fail`` is set."""

    def __init__(self, books=None, fail=False):
        self.books = list(books or [])
        self.notes = {}
        self.fail = fail
        self.calls = []

    def _check(self, name, *args):
        self.calls.append((name,) + args)
        if self.fail:
            raise TransientFetchError("connection refused")

    async def get_all(self):
        self._check("get_all")
        return list(self.books)

    async def get_by_id(self, book_id):
        self._check("get_by_id", book_id)
        return next(book for book in self.books if book.id == book_id)

    async def create(self, fields):
        self._check("create", fields)
        book = Book.from_dict({"id": len(self.books) + 1, **fields})
        self.books.append(book)
        return book

    async def update(self, book_id, fields):
        self._check("update", book_id, fields)
        return fields if isinstance(fields, Book) else Book.from_dict({"id": book_id, **fields})

    async def delete(self, book_id):
        self._check("delete", book_id)
        self.books = [book for book in self.books if book.id != book_id]

    async def get_notes(self, book_id):
        self._check("get_notes", book_id)
        return list(self.notes.get(book_id, []))

    async def add_note(self, book_id, note):
        self._check("add_note", book_id, note)
        self.notes.setdefault(book_id, []).append(note)
        return note


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def broken_store():
    return BrokenStore()


@pytest.fixture
def dune():
    return Book(id=1, nom="Dune", auteur="Herbert", lu=True, favorite=False, rating=5, theme="SF")


@pytest.fixture
def nineteen_eighty_four():
    return Book(id=2, nom="1984", auteur="Orwell", lu=False, favorite=True, rating=0, theme="dystopie")


@pytest.fixture
def books(dune, nineteen_eighty_four):
    return [dune, nineteen_eighty_four]


@pytest.fixture
def repository_factory():
    return FakeRepository
