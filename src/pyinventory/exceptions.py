"""Custom exception hierarchy for pyinventory."""

from __future__ import annotations


class InventoryError(Exception):
    """Base exception for all pyinventory errors."""


class InventoryConfigError(InventoryError):
    """Invalid or missing configuration."""


class ValidationError(InventoryError):
    """Client-side input rejected before any store access."""


class ItemBusyError(InventoryError):
    """A mutation for this item is already in flight."""

    def __init__(self, message: str, *, name: str = "") -> None:
        self.name = name
        super().__init__(message)


class StoreError(InventoryError):
    """Any failure reported by (or while talking to) the document store."""


class StoreTransportError(StoreError):
    """HTTP-level failure (network, unexpected status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(message)


class StoreApiError(StoreError):
    """The store returned a structured error body."""

    def __init__(
        self,
        message: str,
        *,
        status: str = "",
        code: int | None = None,
        path: str = "",
    ) -> None:
        self.status = status
        self.code = code
        self.path = path
        super().__init__(message)


class StoreConflictError(StoreApiError):
    """A write precondition failed (document changed, appeared or vanished).

    Raised for Firestore ``FAILED_PRECONDITION``, ``ALREADY_EXISTS`` and
    ``ABORTED`` statuses.  The mutator catches this to re-read and retry.
    """
