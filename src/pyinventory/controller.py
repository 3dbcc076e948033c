"""Operation boundary for interactive front ends.

The controller turns every mutator outcome into a fixed, human-readable
notification and a boolean.  Errors stop here: they are logged and shown,
never re-raised, and the item's busy marker is released whatever happens.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from pyinventory._constants import (
    MSG_ADD_FAILED,
    MSG_ADDED,
    MSG_DELETE_FAILED,
    MSG_DELETED,
    MSG_FETCH_FAILED,
    MSG_REMOVE_FAILED,
    MSG_REMOVED,
)
from pyinventory.exceptions import InventoryError, ItemBusyError, ValidationError
from pyinventory.models.item import InventoryItem
from pyinventory.models.result import MutationResult
from pyinventory.mutator import InventoryMutator
from pyinventory.notifications import NotificationCenter

_logger = logging.getLogger(__name__)


class InventoryController:
    """Drive an :class:`InventoryMutator` the way the inventory page does.

    Usage::

        controller = InventoryController(mutator)
        await controller.load()
        if await controller.add_item("apple", 2):
            ...
        print(controller.notifications.current)
    """

    def __init__(
        self,
        mutator: InventoryMutator,
        *,
        notifications: NotificationCenter | None = None,
    ) -> None:
        self._mutator = mutator
        self.notifications = notifications or NotificationCenter()
        self._loading = False
        self.last_result: MutationResult | None = None

    @property
    def items(self) -> list[InventoryItem]:
        return self._mutator.items

    @property
    def loading(self) -> bool:
        """Whether a full listing read is in progress."""
        return self._loading

    def is_busy(self, name: str) -> bool:
        """Whether controls for *name* should be disabled."""
        return self._mutator.is_busy(name)

    async def load(self) -> bool:
        self._loading = True
        try:
            await self._mutator.load()
        except InventoryError:
            _logger.warning("Fetching inventory failed", exc_info=True)
            self.notifications.error(MSG_FETCH_FAILED)
            return False
        finally:
            self._loading = False
        return True

    async def add_item(self, name: str, initial_quantity: int | None = None) -> bool:
        return await self._run(
            name,
            lambda: self._mutator.add(name, initial_quantity),
            success=MSG_ADDED,
            failure=MSG_ADD_FAILED,
        )

    async def remove_item(self, name: str) -> bool:
        return await self._run(
            name,
            lambda: self._mutator.remove(name),
            success=MSG_REMOVED,
            failure=MSG_REMOVE_FAILED,
        )

    async def delete_item(self, name: str) -> bool:
        return await self._run(
            name,
            lambda: self._mutator.delete(name),
            success=MSG_DELETED,
            failure=MSG_DELETE_FAILED,
        )

    async def _run(
        self,
        name: str,
        fn: Callable[[], Awaitable[MutationResult]],
        *,
        success: str,
        failure: str,
    ) -> bool:
        try:
            self.last_result = await fn()
        except ValidationError as exc:
            self.notifications.error(str(exc))
            return False
        except ItemBusyError:
            # Control is disabled while busy; a click that slips through is dropped.
            _logger.debug("Ignoring request for busy item %r", name)
            return False
        except InventoryError:
            _logger.warning("%s (item=%r)", failure, name, exc_info=True)
            self.notifications.error(failure)
            return False
        self.notifications.success(success)
        return True
