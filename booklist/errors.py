"""Exceptions raised by the book list engine."""


class BookListError(Exception):
    """Base class for every error surfaced by this package."""


class TransientFetchError(BookListError):
    """A remote call failed (network, timeout or HTTP error status)."""


class CollectionUnavailable(BookListError):
    """Neither the remote repository nor the local cache could provide books."""


class ValidationError(BookListError):
    """User-supplied book or note fields were rejected before any remote call."""


class MutationError(BookListError):
    """A create/update/delete call failed on the remote repository."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation


class LookupFailure(BookListError):
    """The bibliographic lookup service could not answer."""
