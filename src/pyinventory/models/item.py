"""Inventory item models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class InventoryItem(BaseModel):
    """A named, countable inventory entry.

    Persisted items always carry ``quantity >= 1``; an item whose count
    would reach zero is deleted instead.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    """Document key, case-sensitive as stored."""

    quantity: int = Field(ge=1)
    """Current count."""

    @property
    def display_name(self) -> str:
        """Name with its first character upper-cased (``"apple"`` -> ``"Apple"``)."""
        return self.name[:1].upper() + self.name[1:]


class StoredItem(InventoryItem):
    """An item as read from the store, with its revision token."""

    version: str
    """Opaque token identifying this document revision."""

    def as_item(self) -> InventoryItem:
        return InventoryItem(name=self.name, quantity=self.quantity)
