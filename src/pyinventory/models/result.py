"""Mutation result model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyinventory.models.item import InventoryItem


class MutationAction(StrEnum):
    ADD = "add"
    REMOVE = "remove"
    DELETE = "delete"


class MutationResult(BaseModel):
    """Outcome of one add/remove/delete call."""

    model_config = ConfigDict(frozen=True)

    action: MutationAction
    name: str
    quantity: int | None
    """Quantity after the mutation; ``None`` when the item no longer exists."""
    changed: bool
    """``False`` only when ``remove`` found the item absent and did nothing."""
    items: list[InventoryItem] = Field(default_factory=list)
    """Listing after the mutation."""
