"""High-level async client for the inventory document store."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyinventory._transport import HttpTransport
from pyinventory.config import InventoryConfig
from pyinventory.controller import InventoryController
from pyinventory.exceptions import InventoryConfigError, InventoryError
from pyinventory.models.item import InventoryItem
from pyinventory.models.result import MutationResult
from pyinventory.mutator import InventoryMutator
from pyinventory.notifications import NotificationCenter
from pyinventory.store import FirestoreStore, InventoryStore

_logger = logging.getLogger(__name__)


class InventoryClient:
    """Async client for the inventory collection.

    Usage::

        async with InventoryClient(InventoryConfig.from_env()) as client:
            await client.add_item("apple", 3)
            items = await client.list_items()

    Pass *store* to run against another backend (e.g. ``MemoryStore``);
    no HTTP session is opened in that case.
    """

    def __init__(
        self,
        config: InventoryConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        store: InventoryStore | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._custom_store = store
        self._mutator: InventoryMutator | None = None
        self._controller: InventoryController | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> InventoryClient:
        store = self._custom_store
        if store is None:
            if not self._config.project_id:
                raise InventoryConfigError("project_id is required (set INVENTORY_PROJECT_ID)")
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            transport = HttpTransport(self._config, self._http_session)
            store = FirestoreStore(self._config, transport)
        _logger.debug("Inventory client using %s", type(store).__name__)
        self._mutator = InventoryMutator(store, self._config)
        self._controller = InventoryController(
            self._mutator,
            notifications=NotificationCenter(ttl=self._config.notification_ttl),
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._mutator = None
        self._controller = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_mutator(self) -> InventoryMutator:
        if self._mutator is None:
            raise InventoryError("Client not initialized. Use 'async with InventoryClient(...) as client:'")
        return self._mutator

    @property
    def controller(self) -> InventoryController:
        """UI-facing boundary sharing this client's listing and busy markers."""
        if self._controller is None:
            raise InventoryError("Client not initialized. Use 'async with InventoryClient(...) as client:'")
        return self._controller

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def list_items(self) -> list[InventoryItem]:
        """Read the whole collection."""
        return await self._require_mutator().load()

    async def add_item(self, name: str, initial_quantity: int | None = None) -> MutationResult:
        """Add one unit of *name* (creating it with *initial_quantity*)."""
        return await self._require_mutator().add(name, initial_quantity)

    async def remove_item(self, name: str) -> MutationResult:
        """Remove one unit of *name*; the last unit deletes it."""
        return await self._require_mutator().remove(name)

    async def delete_item(self, name: str) -> MutationResult:
        """Delete *name* outright."""
        return await self._require_mutator().delete(name)
