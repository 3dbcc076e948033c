"""Base model for store payloads.

Every model parsed from a REST payload inherits from
:class:`InventoryBaseModel` which provides:

* ``alias_generator=to_camel`` so camelCase API keys (``updateTime``)
  map automatically to snake_case fields.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class InventoryBaseModel(BaseModel):
    """Base for REST response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        """Keep the untouched payload next to the parsed fields."""
        if not isinstance(values, dict):
            return values
        # Only auto-stash raw when not explicitly provided (i.e. model_validate
        # from an API dict).
        if "raw" in values:
            return values
        return {**values, "raw": dict(values)}
