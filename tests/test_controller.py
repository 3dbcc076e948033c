from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from pyinventory.controller import InventoryController
from pyinventory.exceptions import StoreTransportError
from pyinventory.models.item import StoredItem
from pyinventory.models.notification import NotificationLevel
from pyinventory.models.precondition import Precondition
from pyinventory.mutator import InventoryMutator
from pyinventory.notifications import NotificationCenter
from pyinventory.store import MemoryStore


class _FlakyStore(MemoryStore):
    def __init__(self, items: dict[str, int] | None = None) -> None:
        super().__init__(items)
        self.broken = False

    async def list_all(self) -> list[StoredItem]:
        if self.broken:
            raise StoreTransportError("offline")
        return await super().list_all()

    async def read(self, name: str) -> StoredItem | None:
        if self.broken:
            raise StoreTransportError("offline")
        return await super().read(name)

    async def delete(self, name: str, *, precondition: Precondition | None = None) -> None:
        if self.broken:
            raise StoreTransportError("offline")
        await super().delete(name, precondition=precondition)


def _controller(store: MemoryStore) -> InventoryController:
    return InventoryController(InventoryMutator(store))


@pytest.mark.asyncio
async def test_load_populates_items() -> None:
    controller = _controller(MemoryStore({"apple": 2}))

    assert await controller.load() is True
    assert [(i.name, i.quantity) for i in controller.items] == [("apple", 2)]
    assert controller.loading is False
    assert controller.notifications.current is None


@pytest.mark.asyncio
async def test_load_failure_shows_fetch_error() -> None:
    store = _FlakyStore()
    store.broken = True
    controller = _controller(store)

    assert await controller.load() is False

    current = controller.notifications.current
    assert current is not None
    assert current.message == "Error fetching inventory."
    assert current.level == NotificationLevel.ERROR
    assert controller.loading is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "args", "message"),
    [
        ("add_item", ("apple",), "Item added successfully."),
        ("remove_item", ("apple",), "Item removed successfully."),
        ("delete_item", ("apple",), "Item deleted successfully."),
    ],
)
async def test_success_messages(method: str, args: tuple[str, ...], message: str) -> None:
    controller = _controller(MemoryStore({"apple": 2}))
    await controller.load()

    assert await getattr(controller, method)(*args) is True

    current = controller.notifications.current
    assert current is not None
    assert current.message == message
    assert current.level == NotificationLevel.SUCCESS


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "message"),
    [
        ("add_item", "Error adding item."),
        ("remove_item", "Error removing item."),
        ("delete_item", "Error deleting item."),
    ],
)
async def test_store_failure_messages_and_busy_cleared(method: str, message: str) -> None:
    store = _FlakyStore({"apple": 2})
    controller = _controller(store)
    await controller.load()
    store.broken = True

    assert await getattr(controller, method)("apple") is False

    current = controller.notifications.current
    assert current is not None
    assert current.message == message
    assert not controller.is_busy("apple")
    assert [(i.name, i.quantity) for i in controller.items] == [("apple", 2)]


@pytest.mark.asyncio
async def test_empty_name_shows_validation_message() -> None:
    controller = _controller(MemoryStore())

    assert await controller.add_item("   ") is False

    current = controller.notifications.current
    assert current is not None
    assert current.message == "Item name cannot be empty."


@pytest.mark.asyncio
async def test_busy_item_request_is_dropped_silently() -> None:
    gate = asyncio.Event()

    class _SlowStore(MemoryStore):
        async def read(self, name: str) -> StoredItem | None:
            await gate.wait()
            return await super().read(name)

    controller = _controller(_SlowStore({"apple": 1}))
    await controller.load()

    first = asyncio.create_task(controller.add_item("apple"))
    await asyncio.sleep(0)
    assert controller.is_busy("apple")

    assert await controller.remove_item("apple") is False
    assert controller.notifications.current is None

    gate.set()
    assert await first is True
    assert controller.last_result is not None
    assert controller.last_result.quantity == 2


@pytest.mark.asyncio
async def test_notification_auto_dismisses() -> None:
    now = datetime(2026, 1, 1, tzinfo=UTC)
    clock_value = [now]
    center = NotificationCenter(ttl=6.0, clock=lambda: clock_value[0])
    controller = InventoryController(InventoryMutator(MemoryStore()), notifications=center)

    await controller.add_item("apple")
    assert center.current is not None

    clock_value[0] = now + timedelta(seconds=5.9)
    assert center.current is not None

    clock_value[0] = now + timedelta(seconds=6)
    assert center.current is None
