"""Firestore REST document endpoints.

Endpoints (relative to ``config.documents_path``):
  - GET    ``""``        list the collection, following ``nextPageToken``
  - GET    ``/{name}``   read one document
  - PATCH  ``/{name}``   overwrite one document (creates it if absent)
  - DELETE ``/{name}``   delete one document (no-op if absent)

It is internal to pyinventory and may change at any time.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import pydantic

from pyinventory._constants import LIST_PAGE_SIZE, MALFORMED_DOCUMENT, QUANTITY_FIELD
from pyinventory._transport import Transport
from pyinventory.config import InventoryConfig
from pyinventory.exceptions import StoreApiError, StoreConflictError, StoreTransportError
from pyinventory.models.document import StoreDocument, encode_integer_value
from pyinventory.models.precondition import Precondition

_logger = logging.getLogger(__name__)

_NOT_FOUND = "NOT_FOUND"


def _is_not_found(exc: StoreApiError) -> bool:
    return exc.status == _NOT_FOUND or exc.code == 404


def _parse_document(raw: Any, path: str) -> StoreDocument:
    try:
        return StoreDocument.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise StoreApiError(
            f"Unreadable document from {path}: {exc.error_count()} validation error(s)",
            status=MALFORMED_DOCUMENT,
            path=path,
        ) from exc


def document_path(config: InventoryConfig, name: str) -> str:
    """REST path of the document keyed by *name*."""
    return f"{config.documents_path}/{quote(name, safe='')}"


def build_quantity_body(quantity: int) -> dict[str, dict[str, dict[str, str]]]:
    """Document body ``{quantity: <integer>}`` in Firestore wire format."""
    return {"fields": {QUANTITY_FIELD: encode_integer_value(quantity)}}


async def list_documents(config: InventoryConfig, transport: Transport) -> list[StoreDocument]:
    """Fetch every document of the collection."""
    path = config.documents_path
    documents: list[StoreDocument] = []
    page_token: str | None = None
    while True:
        params = {"pageSize": str(LIST_PAGE_SIZE)}
        if page_token:
            params["pageToken"] = page_token
        response = await transport.request("GET", path, params=params)
        for raw in response.get("documents") or []:
            try:
                documents.append(_parse_document(raw, path))
            except StoreApiError:
                _logger.warning("Skipping unreadable document in %s listing", path, exc_info=True)
        next_token = response.get("nextPageToken")
        if not isinstance(next_token, str) or not next_token:
            break
        page_token = next_token
    _logger.debug("Listed %d documents from %s", len(documents), path)
    return documents


async def get_document(config: InventoryConfig, transport: Transport, name: str) -> StoreDocument | None:
    """Read one document, returning ``None`` when it does not exist."""
    path = document_path(config, name)
    try:
        response = await transport.request("GET", path)
    except StoreConflictError:
        raise
    except StoreApiError as exc:
        if _is_not_found(exc):
            return None
        raise
    return _parse_document(response, path)


async def patch_document(
    config: InventoryConfig,
    transport: Transport,
    name: str,
    quantity: int,
    *,
    precondition: Precondition | None = None,
) -> StoreDocument:
    """Overwrite (or create) the document for *name* with ``{quantity}``."""
    path = document_path(config, name)
    params = precondition.to_query_params() if precondition is not None else None
    try:
        response = await transport.request("PATCH", path, params=params, body=build_quantity_body(quantity))
    except StoreConflictError:
        raise
    except StoreApiError as exc:
        # updateTime precondition against a vanished document
        if precondition is not None and _is_not_found(exc):
            raise StoreConflictError(
                f"{path} no longer exists",
                status=exc.status,
                code=exc.code,
                path=path,
            ) from exc
        raise
    if not response:
        raise StoreTransportError(f"Empty document returned from {path}", path=path)
    return _parse_document(response, path)


async def delete_document(
    config: InventoryConfig,
    transport: Transport,
    name: str,
    *,
    precondition: Precondition | None = None,
) -> None:
    """Delete the document for *name*; deleting an absent document succeeds."""
    path = document_path(config, name)
    params = precondition.to_query_params() if precondition is not None else None
    try:
        await transport.request("DELETE", path, params=params)
    except StoreConflictError:
        raise
    except StoreApiError as exc:
        if not _is_not_found(exc):
            raise
        if precondition is not None:
            raise StoreConflictError(
                f"{path} no longer exists",
                status=exc.status,
                code=exc.code,
                path=path,
            ) from exc
