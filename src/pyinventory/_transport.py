"""HTTP transport for the document store REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyinventory._constants import CONFLICT_STATUSES, USER_AGENT
from pyinventory._redact import redact_for_log
from pyinventory.config import InventoryConfig
from pyinventory.exceptions import StoreApiError, StoreConflictError, StoreTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        ...


def _parse_error_body(text: str) -> tuple[str, str]:
    """Extract ``(status, message)`` from a Google API error body."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError:
        return "", text[:200]
    # Some endpoints wrap the error object in a one-element list.
    if isinstance(payload, list) and payload:
        payload = payload[0]
    if not isinstance(payload, dict):
        return "", text[:200]
    error = payload.get("error")
    if not isinstance(error, dict):
        return "", text[:200]
    return str(error.get("status", "")), str(error.get("message", ""))


def raise_for_status(*, status_code: int, path: str, text: str) -> None:
    """Map a non-2xx HTTP response to the matching store exception."""
    status, message = _parse_error_body(text)
    if not status:
        raise StoreTransportError(
            f"HTTP {status_code} from {path}: {message}",
            status_code=status_code,
            path=path,
        )
    if status in CONFLICT_STATUSES or status_code == 409:
        raise StoreConflictError(
            f"{path} precondition failed: status={status} message={message}",
            status=status,
            code=status_code,
            path=path,
        )
    raise StoreApiError(
        f"{path} failed: status={status} message={message}",
        status=status,
        code=status_code,
        path=path,
    )


class HttpTransport:
    """aiohttp-backed transport speaking JSON to the store REST API."""

    def __init__(
        self,
        config: InventoryConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
            "user-agent": USER_AGENT,
        }
        if self._config.access_token:
            headers["authorization"] = f"Bearer {self._config.access_token}"
        return headers

    def _build_params(self, params: Mapping[str, str] | None) -> dict[str, str]:
        merged: dict[str, str] = dict(params or {})
        if self._config.api_key:
            merged["key"] = self._config.api_key
        return merged

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send one request and return the decoded JSON object.

        Empty response bodies (e.g. from DELETE) decode to ``{}``.
        """
        url = f"{self._config.base_url}{path}"
        query = self._build_params(params)
        data = json.dumps(body, separators=(",", ":")) if body is not None else None

        headers = self._build_headers()
        _logger.debug(
            "%s %s params=%s headers=%s",
            method,
            url,
            redact_for_log(query),
            redact_for_log(headers),
        )

        try:
            async with self._http.request(
                method,
                url,
                params=query,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                status_code = resp.status
        except aiohttp.ClientError as exc:
            raise StoreTransportError(
                f"Request to {path} failed: {exc}",
                path=path,
            ) from exc
        except TimeoutError as exc:
            raise StoreTransportError(
                f"Request to {path} timed out after {self._config.request_timeout}s",
                path=path,
            ) from exc

        if not 200 <= status_code < 300:
            raise_for_status(status_code=status_code, path=path, text=text)

        if not text.strip():
            return {}

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StoreTransportError(
                f"Invalid JSON from {path}: {text[:200]}",
                status_code=status_code,
                path=path,
            ) from exc

        if not isinstance(result, dict):
            raise StoreTransportError(
                f"Unexpected JSON payload from {path}: {text[:200]}",
                status_code=status_code,
                path=path,
            )
        return result
