"""Inventory store backends.

A store persists one document per item name, each holding a single
integer ``quantity``.  Every call touches a single document and is atomic
for that document; nothing spans calls.
"""

from __future__ import annotations

import itertools
import logging
from typing import Protocol

from pyinventory._api import documents as _documents_api
from pyinventory._constants import MALFORMED_DOCUMENT
from pyinventory._transport import Transport
from pyinventory.config import InventoryConfig
from pyinventory.exceptions import InventoryConfigError, StoreApiError, StoreConflictError
from pyinventory.models.document import StoreDocument
from pyinventory.models.item import StoredItem
from pyinventory.models.precondition import Precondition

_logger = logging.getLogger(__name__)


class InventoryStore(Protocol):
    """Async key/value document collection keyed by item name."""

    async def list_all(self) -> list[StoredItem]:
        """Every persisted item, in store order."""
        ...

    async def read(self, name: str) -> StoredItem | None:
        """Point lookup; ``None`` when absent."""
        ...

    async def write(self, name: str, quantity: int, *, precondition: Precondition | None = None) -> StoredItem:
        """Create or overwrite the document for *name*."""
        ...

    async def delete(self, name: str, *, precondition: Precondition | None = None) -> None:
        """Remove the document for *name*; no-op when absent."""
        ...


class FirestoreStore:
    """Store backed by the Firestore REST API."""

    def __init__(self, config: InventoryConfig, transport: Transport) -> None:
        if not config.project_id:
            raise InventoryConfigError("project_id is required (set INVENTORY_PROJECT_ID)")
        self._config = config
        self._transport = transport

    async def list_all(self) -> list[StoredItem]:
        documents = await _documents_api.list_documents(self._config, self._transport)
        items: list[StoredItem] = []
        for document in documents:
            item = document.to_stored_item()
            if item is None:
                _logger.warning("Skipping document without a positive integer quantity: %s", document.name)
                continue
            items.append(item)
        return items

    async def read(self, name: str) -> StoredItem | None:
        document = await _documents_api.get_document(self._config, self._transport, name)
        if document is None:
            return None
        return self._require_item(document)

    async def write(self, name: str, quantity: int, *, precondition: Precondition | None = None) -> StoredItem:
        document = await _documents_api.patch_document(
            self._config,
            self._transport,
            name,
            quantity,
            precondition=precondition,
        )
        return self._require_item(document)

    async def delete(self, name: str, *, precondition: Precondition | None = None) -> None:
        await _documents_api.delete_document(self._config, self._transport, name, precondition=precondition)

    def _require_item(self, document: StoreDocument) -> StoredItem:
        item = document.to_stored_item()
        if item is None:
            raise StoreApiError(
                f"Document {document.name} has no positive integer quantity or update time",
                status=MALFORMED_DOCUMENT,
                path=document.name,
            )
        return item


class MemoryStore:
    """In-process store with the same semantics as :class:`FirestoreStore`.

    Versions are taken from a process-wide counter so a deleted and
    re-created item never reuses an old version.
    """

    def __init__(self, items: dict[str, int] | None = None) -> None:
        self._versions = itertools.count(1)
        self._documents: dict[str, tuple[int, str]] = {}
        for name, quantity in (items or {}).items():
            self._documents[name] = (quantity, self._next_version())

    def _next_version(self) -> str:
        return str(next(self._versions))

    def _check(self, name: str, precondition: Precondition | None) -> None:
        if precondition is None:
            return
        current = self._documents.get(name)
        if precondition.exists is False and current is not None:
            raise StoreConflictError(f"{name} already exists", status="ALREADY_EXISTS", path=name)
        if precondition.version is not None and (current is None or current[1] != precondition.version):
            raise StoreConflictError(f"{name} changed since read", status="FAILED_PRECONDITION", path=name)

    async def list_all(self) -> list[StoredItem]:
        return [
            StoredItem(name=name, quantity=quantity, version=version)
            for name, (quantity, version) in self._documents.items()
        ]

    async def read(self, name: str) -> StoredItem | None:
        current = self._documents.get(name)
        if current is None:
            return None
        quantity, version = current
        return StoredItem(name=name, quantity=quantity, version=version)

    async def write(self, name: str, quantity: int, *, precondition: Precondition | None = None) -> StoredItem:
        self._check(name, precondition)
        version = self._next_version()
        self._documents[name] = (quantity, version)
        return StoredItem(name=name, quantity=quantity, version=version)

    async def delete(self, name: str, *, precondition: Precondition | None = None) -> None:
        self._check(name, precondition)
        self._documents.pop(name, None)
