"""Data models for inventory items and store payloads."""

from pyinventory.models._base import InventoryBaseModel
from pyinventory.models.document import StoreDocument, decode_integer_value, encode_integer_value
from pyinventory.models.item import InventoryItem, StoredItem
from pyinventory.models.notification import Notification, NotificationLevel
from pyinventory.models.precondition import Precondition
from pyinventory.models.result import MutationAction, MutationResult

__all__ = [
    "InventoryBaseModel",
    "InventoryItem",
    "MutationAction",
    "MutationResult",
    "Notification",
    "NotificationLevel",
    "Precondition",
    "StoreDocument",
    "StoredItem",
    "decode_integer_value",
    "encode_integer_value",
]
