"""Inventory mutation protocol.

Maps a user intent (add / remove / delete) plus current store state to a
new store state:

* ``add``: create with the initial quantity, or increment an existing item.
* ``remove``: decrement, deleting the document instead of writing zero.
* ``delete``: drop the document whatever its quantity.

``add`` and ``remove`` read the document and then write it back with a
version precondition.  If another writer got there first the write is
rejected with :class:`StoreConflictError` and the sequence is re-run on
fresh data, up to ``config.max_conflict_retries`` times.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from pyinventory._constants import MAX_NAME_BYTES, MSG_EMPTY_NAME
from pyinventory._inflight import InFlightRegistry
from pyinventory.config import InventoryConfig
from pyinventory.exceptions import StoreConflictError, ValidationError
from pyinventory.models.item import InventoryItem
from pyinventory.models.precondition import Precondition
from pyinventory.models.result import MutationAction, MutationResult
from pyinventory.state import InventorySnapshot
from pyinventory.store import InventoryStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


def normalize_name(name: str) -> str:
    """Return the document key for *name*, or raise :class:`ValidationError`.

    Surrounding whitespace is stripped; the rest must be a valid document
    id (no ``/``, not ``.``/``..``, not ``__reserved__``, at most 1500
    UTF-8 bytes).
    """
    if not isinstance(name, str):
        raise ValidationError("Item name must be a string.")
    key = name.strip()
    if not key:
        raise ValidationError(MSG_EMPTY_NAME)
    if "/" in key:
        raise ValidationError("Item name cannot contain '/'.")
    if key in {".", ".."}:
        raise ValidationError(f"Item name cannot be {key!r}.")
    if len(key) >= 4 and key.startswith("__") and key.endswith("__"):
        raise ValidationError("Item names of the form __name__ are reserved.")
    if len(key.encode("utf-8")) > MAX_NAME_BYTES:
        raise ValidationError(f"Item name cannot exceed {MAX_NAME_BYTES} bytes.")
    return key


def validate_initial_quantity(quantity: int) -> int:
    """Reject non-integer or non-positive initial quantities."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Initial quantity must be a whole number.")
    if quantity < 1:
        raise ValidationError("Initial quantity must be at least 1.")
    return quantity


class InventoryMutator:
    """Read-modify-write orchestration over an :class:`InventoryStore`.

    Usage::

        mutator = InventoryMutator(MemoryStore(), InventoryConfig())
        await mutator.load()
        result = await mutator.add("apple", 3)
    """

    def __init__(self, store: InventoryStore, config: InventoryConfig | None = None) -> None:
        self._store = store
        self._config = config or InventoryConfig()
        self._snapshot = InventorySnapshot()
        self._inflight = InFlightRegistry()

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[InventoryItem]:
        """Last known listing (empty until :meth:`load`)."""
        return self._snapshot.items()

    @property
    def busy_items(self) -> frozenset[str]:
        """Names with a mutation currently in flight."""
        return self._inflight.names

    def is_busy(self, name: str) -> bool:
        return self._inflight.is_busy(name.strip())

    async def load(self) -> list[InventoryItem]:
        """Read the whole collection and replace the local listing."""
        stored = await self._store.list_all()
        self._snapshot.replace_all(item.as_item() for item in stored)
        _logger.debug("Loaded %d inventory items", len(self._snapshot))
        return self._snapshot.items()

    async def refresh(self) -> list[InventoryItem]:
        """Alias of :meth:`load` for explicit reconciliation."""
        return await self.load()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add(self, name: str, initial_quantity: int | None = None) -> MutationResult:
        """Add one unit of *name*, creating it with *initial_quantity* if absent.

        *initial_quantity* (default ``config.default_initial_quantity``) is
        only validated and used when the item is absent; an existing item is
        incremented whatever value was passed.
        """
        key = normalize_name(name)
        requested = self._config.default_initial_quantity if initial_quantity is None else initial_quantity

        async def _attempt() -> int:
            current = await self._store.read(key)
            if current is None:
                quantity = validate_initial_quantity(requested)
                created = await self._store.write(key, quantity, precondition=Precondition.absent())
                _logger.debug("Created %r with quantity=%d", key, created.quantity)
                return created.quantity
            updated = await self._store.write(
                key,
                current.quantity + 1,
                precondition=Precondition.at_version(current.version),
            )
            return updated.quantity

        with self._inflight.claim(key):
            new_quantity = await self._retry_on_conflict(key, _attempt)
            return await self._finish(MutationAction.ADD, key, new_quantity, changed=True)

    async def remove(self, name: str) -> MutationResult:
        """Remove one unit of *name*; the last unit deletes the document.

        Removing an absent item is a silent no-op.
        """
        key = normalize_name(name)

        async def _attempt() -> tuple[int | None, bool]:
            current = await self._store.read(key)
            if current is None:
                return None, False
            precondition = Precondition.at_version(current.version)
            if current.quantity <= 1:
                await self._store.delete(key, precondition=precondition)
                _logger.debug("Removed last unit of %r, document deleted", key)
                return None, True
            updated = await self._store.write(key, current.quantity - 1, precondition=precondition)
            return updated.quantity, True

        with self._inflight.claim(key):
            new_quantity, changed = await self._retry_on_conflict(key, _attempt)
            return await self._finish(MutationAction.REMOVE, key, new_quantity, changed=changed)

    async def delete(self, name: str) -> MutationResult:
        """Delete *name* regardless of its quantity (no-op if absent)."""
        key = normalize_name(name)
        with self._inflight.claim(key):
            await self._store.delete(key)
            return await self._finish(MutationAction.DELETE, key, None, changed=True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _retry_on_conflict(self, name: str, fn: Callable[[], Awaitable[T]]) -> T:
        """Run a read-then-conditional-write sequence, re-running it on conflict."""
        retries = max(0, self._config.max_conflict_retries)
        attempt = 0
        while True:
            try:
                return await fn()
            except StoreConflictError:
                if attempt >= retries:
                    _logger.debug("Conflict on %r, giving up after %d retries", name, retries)
                    raise
                attempt += 1
                _logger.debug("Conflict on %r, retrying (%d/%d)", name, attempt, retries)

    async def _finish(
        self,
        action: MutationAction,
        name: str,
        quantity: int | None,
        *,
        changed: bool,
    ) -> MutationResult:
        # Without an initial listing an incremental patch would produce a
        # partial view, so fall back to a full read.
        if self._config.refresh_after_mutation or not self._snapshot.loaded:
            items = await self.load()
        else:
            self._snapshot.apply(name, quantity)
            items = self._snapshot.items()
        return MutationResult(action=action, name=name, quantity=quantity, changed=changed, items=items)
