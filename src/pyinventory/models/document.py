"""Firestore REST document model."""

from __future__ import annotations

import math
from typing import Any

from pydantic import Field

from pyinventory._constants import QUANTITY_FIELD
from pyinventory.models._base import InventoryBaseModel
from pyinventory.models.item import StoredItem


def decode_integer_value(value: Any) -> int | None:
    """Decode a Firestore ``Value`` object holding a whole number.

    ``integerValue`` is serialized as a decimal string.  ``doubleValue``
    is accepted when it is integral (``3.0``), since some clients write
    every number as a double.  Anything else yields ``None``.
    """
    if not isinstance(value, dict):
        return None
    if "integerValue" in value:
        try:
            return int(value["integerValue"])
        except (TypeError, ValueError):
            return None
    if "doubleValue" in value:
        raw = value["doubleValue"]
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            number = float(raw)
            if math.isfinite(number) and number.is_integer():
                return int(number)
    return None


def encode_integer_value(value: int) -> dict[str, str]:
    """Encode an int as a Firestore ``Value`` object."""
    return {"integerValue": str(int(value))}


class StoreDocument(InventoryBaseModel):
    """A single document returned by the REST API.

    ``name`` is the full resource path, e.g.
    ``projects/p/databases/(default)/documents/inventory/apple``.
    """

    name: str
    fields: dict[str, Any] = Field(default_factory=dict)
    create_time: str | None = None
    update_time: str | None = None

    @property
    def document_id(self) -> str:
        """Last path segment of the resource name (the item name)."""
        return self.name.rsplit("/", 1)[-1]

    @property
    def quantity(self) -> int | None:
        return decode_integer_value(self.fields.get(QUANTITY_FIELD))

    def to_stored_item(self) -> StoredItem | None:
        """Convert to a :class:`StoredItem`, or ``None`` if the body is unusable.

        Documents without a positive whole-number ``quantity`` violate the
        collection invariant.  Documents without ``updateTime`` cannot be
        written back conditionally.  Neither is representable as an item.
        """
        quantity = self.quantity
        if quantity is None or quantity < 1 or not self.document_id or not self.update_time:
            return None
        return StoredItem(
            name=self.document_id,
            quantity=quantity,
            version=self.update_time,
        )
