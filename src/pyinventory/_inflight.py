"""Per-item in-flight markers.

A mutation claims its item name for its whole read-modify-write sequence.
Claims are keyed by name so unrelated items stay available.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from pyinventory.exceptions import ItemBusyError


class InFlightRegistry:
    """Set of item names with a mutation currently running."""

    def __init__(self) -> None:
        self._names: set[str] = set()

    def is_busy(self, name: str) -> bool:
        return name in self._names

    @property
    def names(self) -> frozenset[str]:
        return frozenset(self._names)

    @contextmanager
    def claim(self, name: str) -> Iterator[None]:
        """Mark *name* busy until the block exits, whatever the outcome.

        Raises :class:`ItemBusyError` if *name* is already claimed.
        """
        if name in self._names:
            raise ItemBusyError(f"A mutation of {name!r} is already in progress", name=name)
        self._names.add(name)
        try:
            yield
        finally:
            self._names.discard(name)
