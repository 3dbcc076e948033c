"""Command-line front end: list, add, remove and delete inventory items."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any, TextIO

from pyinventory.client import InventoryClient
from pyinventory.config import InventoryConfig
from pyinventory.exceptions import InventoryConfigError
from pyinventory.models.item import InventoryItem
from pyinventory.store import InventoryStore


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a whole number: {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("quantity must be at least 1")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyinventory",
        description="Track named items and their quantities in a Firestore collection.",
    )
    parser.add_argument("--project", help="Cloud project id (default: $INVENTORY_PROJECT_ID)")
    parser.add_argument("--collection", help="Collection name (default: inventory)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="List all items")
    add = sub.add_parser("add", help="Add one unit (creates the item if missing)")
    add.add_argument("name")
    add.add_argument("--quantity", "-q", type=_positive_int, default=None, help="Initial quantity for a new item")
    remove = sub.add_parser("remove", help="Remove one unit (deletes the item at zero)")
    remove.add_argument("name")
    delete = sub.add_parser("delete", help="Delete an item regardless of quantity")
    delete.add_argument("name")
    return parser


def render_items(items: Sequence[InventoryItem]) -> str:
    """Human-readable listing, one ``Name: quantity`` line per item."""
    if not items:
        return "Inventory is empty."
    width = max(len(item.display_name) for item in items)
    return "\n".join(f"{item.display_name:<{width}}  Quantity: {item.quantity}" for item in items)


def _config_from_args(args: argparse.Namespace) -> InventoryConfig:
    overrides: dict[str, Any] = {}
    if args.project:
        overrides["project_id"] = args.project
    if args.collection:
        overrides["collection"] = args.collection
    return InventoryConfig.from_env(**overrides)


async def run(
    args: argparse.Namespace,
    *,
    store: InventoryStore | None = None,
    out: TextIO | None = None,
) -> int:
    """Execute the parsed command; returns the process exit code."""
    stream = out or sys.stdout
    config = _config_from_args(args)

    async with InventoryClient(config, store=store) as client:
        controller = client.controller
        if args.command == "list":
            ok = await controller.load()
        elif args.command == "add":
            ok = await controller.add_item(args.name, args.quantity)
        elif args.command == "remove":
            ok = await controller.remove_item(args.name)
        else:
            ok = await controller.delete_item(args.name)

        notification = controller.notifications.current
        items = controller.items

    if args.json_mode:
        payload = {
            "ok": ok,
            "message": notification.message if notification is not None else None,
            "items": [item.model_dump() for item in items],
        }
        print(json.dumps(payload, indent=2), file=stream)
    else:
        if notification is not None:
            print(notification.message, file=stream)
        if ok:
            print(render_items(items), file=stream)
    return 0 if ok else 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.ERROR)

    try:
        return asyncio.run(run(args))
    except InventoryConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
