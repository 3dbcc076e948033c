"""Local listing snapshot.

Holds the client-side view of the collection.  A full read replaces it;
each successful mutation patches the one entry it touched.
"""

from __future__ import annotations

from collections.abc import Iterable

from pyinventory.models.item import InventoryItem


class InventorySnapshot:
    """Ordered ``name -> quantity`` view of the inventory.

    Order follows the last full listing; items created afterwards are
    appended.
    """

    def __init__(self) -> None:
        self._quantities: dict[str, int] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        """Whether a full listing has been applied at least once."""
        return self._loaded

    def replace_all(self, items: Iterable[InventoryItem]) -> None:
        self._quantities = {item.name: item.quantity for item in items}
        self._loaded = True

    def apply(self, name: str, quantity: int | None) -> None:
        """Record the post-mutation quantity of *name* (``None``: gone)."""
        if quantity is None or quantity < 1:
            self._quantities.pop(name, None)
            return
        self._quantities[name] = quantity

    def get(self, name: str) -> int | None:
        return self._quantities.get(name)

    def items(self) -> list[InventoryItem]:
        return [InventoryItem(name=name, quantity=quantity) for name, quantity in self._quantities.items()]

    def __len__(self) -> int:
        return len(self._quantities)

    def __contains__(self, name: object) -> bool:
        return name in self._quantities
