"""Client configuration for pyinventory."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyinventory._constants import BASE_URL, COLLECTION, DATABASE


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class InventoryConfig:
    """Client configuration.

    Parameters
    ----------
    project_id : str
        Cloud project hosting the document database.  Required for the
        Firestore store, ignored by the in-memory store.
    database : str
        Database id inside the project.
    collection : str
        Collection holding one document per item.
    base_url : str
        REST API base URL (override for the local emulator).
    api_key : str or None
        Optional API key sent as the ``key`` query parameter.
    access_token : str or None
        Optional OAuth bearer token sent in the ``Authorization`` header.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    default_initial_quantity : int
        Quantity written when an absent item is added without an explicit
        initial quantity.
    max_conflict_retries : int
        How many times a mutation re-reads and retries after its
        conditional write was rejected.  ``0`` disables retrying.
    refresh_after_mutation : bool
        Re-read the whole collection after every mutation instead of
        updating the local listing from the mutation result.
    notification_ttl : float
        Seconds before a notification is auto-dismissed.
    """

    project_id: str = ""
    database: str = DATABASE
    collection: str = COLLECTION
    base_url: str = BASE_URL
    api_key: str | None = None
    access_token: str | None = None
    request_timeout: float = 10.0
    default_initial_quantity: int = 1
    max_conflict_retries: int = 3
    refresh_after_mutation: bool = False
    notification_ttl: float = 6.0

    @property
    def documents_path(self) -> str:
        """Resource path of the collection, relative to ``base_url``."""
        return f"/projects/{self.project_id}/databases/{self.database}/documents/{self.collection}"

    @classmethod
    def from_env(cls, **overrides: Any) -> InventoryConfig:
        """Create configuration from environment variables.

        Reads ``INVENTORY_PROJECT_ID`` and the optional ``INVENTORY_*``
        variables below.  Explicit keyword arguments override environment
        values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "INVENTORY_PROJECT_ID": "project_id",
            "INVENTORY_DATABASE": "database",
            "INVENTORY_COLLECTION": "collection",
            "INVENTORY_BASE_URL": "base_url",
            "INVENTORY_API_KEY": "api_key",
            "INVENTORY_ACCESS_TOKEN": "access_token",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric values, handle separately
        timeout_env = env.get("INVENTORY_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = float(timeout_env)

        initial_env = env.get("INVENTORY_DEFAULT_INITIAL_QUANTITY")
        if initial_env is not None and "default_initial_quantity" not in overrides:
            config_kwargs["default_initial_quantity"] = int(initial_env)

        retries_env = env.get("INVENTORY_MAX_CONFLICT_RETRIES")
        if retries_env is not None and "max_conflict_retries" not in overrides:
            config_kwargs["max_conflict_retries"] = int(retries_env)

        ttl_env = env.get("INVENTORY_NOTIFICATION_TTL")
        if ttl_env is not None and "notification_ttl" not in overrides:
            config_kwargs["notification_ttl"] = float(ttl_env)

        if "refresh_after_mutation" not in overrides:
            config_kwargs["refresh_after_mutation"] = _env_bool(
                env.get("INVENTORY_REFRESH_AFTER_MUTATION"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
