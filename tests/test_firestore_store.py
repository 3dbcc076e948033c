from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from pyinventory._constants import MALFORMED_DOCUMENT
from pyinventory._transport import raise_for_status
from pyinventory.config import InventoryConfig
from pyinventory.controller import InventoryController
from pyinventory.exceptions import (
    InventoryConfigError,
    StoreApiError,
    StoreConflictError,
    StoreTransportError,
)
from pyinventory.models.precondition import Precondition
from pyinventory.mutator import InventoryMutator
from pyinventory.store import FirestoreStore

_BASE = "/projects/demo/databases/(default)/documents/inventory"


def _doc(name: str, fields: dict[str, Any], update_time: str = "2026-01-01T00:00:00.000001Z") -> dict[str, Any]:
    return {
        "name": f"projects/demo/databases/(default)/documents/inventory/{name}",
        "fields": fields,
        "createTime": "2026-01-01T00:00:00Z",
        "updateTime": update_time,
    }


class _RecordingTransport:
    def __init__(self, responses: list[Any]) -> None:
        self._responses = list(responses)
        self.requests: list[tuple[str, str, dict[str, str] | None, Any]] = []

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        self.requests.append((method, path, dict(params) if params is not None else None, body))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _store(responses: list[Any]) -> tuple[FirestoreStore, _RecordingTransport]:
    transport = _RecordingTransport(responses)
    return FirestoreStore(InventoryConfig(project_id="demo"), transport), transport


def test_missing_project_id_rejected() -> None:
    with pytest.raises(InventoryConfigError):
        FirestoreStore(InventoryConfig(), _RecordingTransport([]))


@pytest.mark.asyncio
async def test_list_all_follows_page_tokens_and_skips_malformed() -> None:
    store, transport = _store(
        [
            {
                "documents": [
                    _doc("apple", {"quantity": {"integerValue": "3"}}),
                    _doc("broken", {"quantity": {"stringValue": "many"}}),
                ],
                "nextPageToken": "page-2",
            },
            {"documents": [_doc("pear", {"quantity": {"doubleValue": 2.0}})]},
        ]
    )

    items = await store.list_all()

    assert [(i.name, i.quantity) for i in items] == [("apple", 3), ("pear", 2)]
    assert transport.requests[0][2] == {"pageSize": "300"}
    assert transport.requests[1][2] == {"pageSize": "300", "pageToken": "page-2"}
    assert all(r[1] == _BASE for r in transport.requests)


@pytest.mark.asyncio
async def test_list_all_empty_collection() -> None:
    store, _ = _store([{}])

    assert await store.list_all() == []


@pytest.mark.asyncio
async def test_read_returns_item_with_update_time_version() -> None:
    store, transport = _store([_doc("apple", {"quantity": {"integerValue": "7"}}, "2026-02-02T10:00:00Z")])

    item = await store.read("apple")

    assert item is not None
    assert item.quantity == 7
    assert item.version == "2026-02-02T10:00:00Z"
    assert transport.requests[0][:2] == ("GET", f"{_BASE}/apple")


@pytest.mark.asyncio
async def test_read_not_found_is_absent() -> None:
    store, _ = _store([StoreApiError("missing", status="NOT_FOUND", code=404)])

    assert await store.read("ghost") is None


@pytest.mark.asyncio
async def test_read_malformed_document_raises() -> None:
    store, _ = _store([_doc("apple", {"quantity": {"integerValue": "0"}})])

    with pytest.raises(StoreApiError) as exc_info:
        await store.read("apple")
    assert exc_info.value.status == MALFORMED_DOCUMENT


@pytest.mark.asyncio
async def test_list_all_skips_documents_without_name_or_update_time() -> None:
    nameless = {"fields": {"quantity": {"integerValue": "2"}}}
    unversioned = _doc("fig", {"quantity": {"integerValue": "4"}})
    del unversioned["updateTime"]
    store, _ = _store([{"documents": [nameless, unversioned, _doc("apple", {"quantity": {"integerValue": "1"}})]}])

    items = await store.list_all()

    assert [(i.name, i.quantity) for i in items] == [("apple", 1)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"fields": {"quantity": {"integerValue": "2"}}},
        {"name": "projects/demo/databases/(default)/documents/inventory/apple", "fields": "not-a-map"},
    ],
)
async def test_read_unparseable_document_raises_store_error(payload: dict[str, Any]) -> None:
    store, _ = _store([payload])

    with pytest.raises(StoreApiError) as exc_info:
        await store.read("apple")
    assert exc_info.value.status == MALFORMED_DOCUMENT


@pytest.mark.asyncio
async def test_write_response_without_update_time_raises_store_error() -> None:
    unversioned = _doc("apple", {"quantity": {"integerValue": "2"}})
    del unversioned["updateTime"]
    store, _ = _store([unversioned])

    with pytest.raises(StoreApiError) as exc_info:
        await store.write("apple", 2, precondition=Precondition.absent())
    assert exc_info.value.status == MALFORMED_DOCUMENT


@pytest.mark.asyncio
async def test_unparseable_documents_are_reported_at_controller_boundary() -> None:
    nameless = {"fields": {"quantity": {"integerValue": "2"}}}
    store, _ = _store([{"documents": [nameless]}, nameless])
    controller = InventoryController(InventoryMutator(store))

    assert await controller.load() is True
    assert controller.items == []

    assert await controller.add_item("apple") is False
    current = controller.notifications.current
    assert current is not None
    assert current.message == "Error adding item."


@pytest.mark.asyncio
async def test_read_quotes_document_id() -> None:
    store, transport = _store([StoreApiError("missing", status="NOT_FOUND", code=404)])

    await store.read("green tea?")

    assert transport.requests[0][1] == f"{_BASE}/green%20tea%3F"


@pytest.mark.asyncio
async def test_write_sends_integer_value_and_precondition() -> None:
    store, transport = _store([_doc("apple", {"quantity": {"integerValue": "4"}}, "v2")])

    item = await store.write("apple", 4, precondition=Precondition.at_version("v1"))

    method, path, params, body = transport.requests[0]
    assert method == "PATCH"
    assert path == f"{_BASE}/apple"
    assert params == {"currentDocument.updateTime": "v1"}
    assert body == {"fields": {"quantity": {"integerValue": "4"}}}
    assert item.quantity == 4
    assert item.version == "v2"


@pytest.mark.asyncio
async def test_create_only_write_uses_exists_false() -> None:
    store, transport = _store([_doc("apple", {"quantity": {"integerValue": "1"}})])

    await store.write("apple", 1, precondition=Precondition.absent())

    assert transport.requests[0][2] == {"currentDocument.exists": "false"}


@pytest.mark.asyncio
async def test_write_against_vanished_document_is_conflict() -> None:
    store, _ = _store([StoreApiError("gone", status="NOT_FOUND", code=404)])

    with pytest.raises(StoreConflictError):
        await store.write("apple", 2, precondition=Precondition.at_version("v1"))


@pytest.mark.asyncio
async def test_unconditional_delete_of_absent_document_succeeds() -> None:
    store, transport = _store([{}])

    await store.delete("ghost")

    assert transport.requests[0][:3] == ("DELETE", f"{_BASE}/ghost", None)


@pytest.mark.asyncio
async def test_conditional_delete_not_found_is_conflict() -> None:
    store, _ = _store([StoreApiError("gone", status="NOT_FOUND", code=404)])

    with pytest.raises(StoreConflictError):
        await store.delete("apple", precondition=Precondition.at_version("v1"))


@pytest.mark.asyncio
async def test_transport_error_propagates() -> None:
    store, _ = _store([StoreTransportError("boom", status_code=503)])

    with pytest.raises(StoreTransportError):
        await store.list_all()


def test_raise_for_status_maps_failed_precondition_to_conflict() -> None:
    body = '{"error": {"code": 400, "message": "stale", "status": "FAILED_PRECONDITION"}}'

    with pytest.raises(StoreConflictError) as exc_info:
        raise_for_status(status_code=400, path="/x", text=body)

    assert exc_info.value.status == "FAILED_PRECONDITION"
    assert exc_info.value.code == 400


def test_raise_for_status_maps_already_exists_list_body_to_conflict() -> None:
    body = '[{"error": {"code": 409, "message": "exists", "status": "ALREADY_EXISTS"}}]'

    with pytest.raises(StoreConflictError):
        raise_for_status(status_code=409, path="/x", text=body)


def test_raise_for_status_maps_permission_denied_to_api_error() -> None:
    body = '{"error": {"code": 403, "message": "nope", "status": "PERMISSION_DENIED"}}'

    with pytest.raises(StoreApiError) as exc_info:
        raise_for_status(status_code=403, path="/x", text=body)

    assert not isinstance(exc_info.value, StoreConflictError)
    assert exc_info.value.status == "PERMISSION_DENIED"


def test_raise_for_status_non_json_body_is_transport_error() -> None:
    with pytest.raises(StoreTransportError) as exc_info:
        raise_for_status(status_code=502, path="/x", text="<html>bad gateway</html>")

    assert exc_info.value.status_code == 502
