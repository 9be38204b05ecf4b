"""Item inventory helpers.

An inventory is a plain ``dict`` from item type to count; a missing key
counts as zero. Every helper returns a new mapping instead of mutating.
"""

from __future__ import annotations

from typing import Dict, Mapping, Union

from .config import SOLID_RED


Inventory = Dict[str, int]


class _Unavailable:
    """Returned by ``remove_item`` when there is nothing to remove."""

    _instance = None

    def __new__(cls) -> "_Unavailable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_AVAILABLE"


NOT_AVAILABLE = _Unavailable()


def item_count(inventory: Mapping[str, int], item_type: str) -> int:
    return inventory.get(item_type, 0)


def add_item(inventory: Mapping[str, int], item_type: str, count: int) -> Inventory:
    return {**inventory, item_type: item_count(inventory, item_type) + count}


def remove_item(inventory: Mapping[str, int], item_type: str) -> Union[Inventory, _Unavailable]:
    """Take one item out. The count may drop to zero but the key is kept."""
    current = item_count(inventory, item_type)
    if current <= 0:
        return NOT_AVAILABLE
    return {**inventory, item_type: current - 1}


def has_item(inventory: Mapping[str, int], item_type: str) -> bool:
    return item_count(inventory, item_type) > 0


def is_red_piece(piece: object) -> bool:
    svg_refs = getattr(piece, "svg_refs", None)
    if svg_refs is None and isinstance(piece, Mapping):
        svg_refs = piece.get("svg_refs")
    if not svg_refs:
        return False
    return any(ref == SOLID_RED for ref in svg_refs)
