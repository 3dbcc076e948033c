"""pyinventory - Async Python client for a document-store backed inventory."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyinventory")
except PackageNotFoundError:
    __version__ = "0+local"
from pyinventory.client import InventoryClient
from pyinventory.config import InventoryConfig
from pyinventory.controller import InventoryController
from pyinventory.exceptions import (
    InventoryConfigError,
    InventoryError,
    ItemBusyError,
    StoreApiError,
    StoreConflictError,
    StoreError,
    StoreTransportError,
    ValidationError,
)
from pyinventory.models import (
    InventoryItem,
    MutationAction,
    MutationResult,
    Notification,
    NotificationLevel,
    Precondition,
    StoredItem,
)
from pyinventory.mutator import InventoryMutator
from pyinventory.notifications import NotificationCenter
from pyinventory.store import FirestoreStore, InventoryStore, MemoryStore

__all__ = [
    "__version__",
    "FirestoreStore",
    "InventoryClient",
    "InventoryConfig",
    "InventoryConfigError",
    "InventoryController",
    "InventoryError",
    "InventoryItem",
    "InventoryMutator",
    "InventoryStore",
    "ItemBusyError",
    "MemoryStore",
    "MutationAction",
    "MutationResult",
    "Notification",
    "NotificationCenter",
    "NotificationLevel",
    "Precondition",
    "StoreApiError",
    "StoreConflictError",
    "StoreError",
    "StoreTransportError",
    "StoredItem",
    "ValidationError",
]
