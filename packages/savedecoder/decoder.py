"""
Typed Decoder - builds a Save from the tree returned by ``tomllib``.

The inventory is stored as a table keyed by slot index:

    [Inventory.0]
    Type="obj_material"
    MaterialQuantity="12"
    ...
    [Inventory.3]
    Type="obj_dust"

and comes back as a dense list with MissingInventory in the gaps
(here slots 1 and 2). Decoding is all-or-nothing: the first bad field
raises a DecodeError naming its path.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping

from .errors import InvalidTypeError, MalformedKeyError
from .registry import decode_variant
from .scalars import join_path, require
from .state.inventory import InventoryRecord, MISSING, Save


logger = logging.getLogger("TypedDecoder")

INVENTORY_FIELD = "Inventory"

_INDEX_RE = re.compile(r"\+?[0-9]+")


def parse_index(key: Any, path: str) -> int:
    """Parse a sparse-collection key as a non-negative integer."""
    if not isinstance(key, str) or not _INDEX_RE.fullmatch(key):
        raise MalformedKeyError(path, key)
    return int(key)


def decode_inventory(node: Any, path: str = INVENTORY_FIELD) -> List[InventoryRecord]:
    """
    Rebuild the dense inventory list from its index-keyed table.

    The list grows to ``index + 1`` whenever an index lands past the end,
    padding with MISSING, and is never shrunk. Table order does not matter.
    """
    if not isinstance(node, Mapping):
        raise InvalidTypeError(path, "a table of inventory slots", node)

    slots: List[InventoryRecord] = []
    for key, value in node.items():
        index = parse_index(key, join_path(path, key))
        record = decode_variant(value, join_path(path, key))
        if index >= len(slots):
            slots.extend([MISSING] * (index + 1 - len(slots)))
        slots[index] = record

    logger.debug(f"{path}: {len(node)} entries over {len(slots)} slots")
    return slots


def decode_save(tree: Mapping[str, Any]) -> Save:
    """
    Decode the parsed save document.

    Args:
        tree: Root table from ``tomllib.loads``

    Returns:
        Save with a fully populated inventory

    Raises:
        DecodeError: any field does not match the save layout
    """
    if not isinstance(tree, Mapping):
        raise InvalidTypeError("", "a table", tree)

    inventory = decode_inventory(require(tree, INVENTORY_FIELD, ""), INVENTORY_FIELD)
    return Save(inventory=inventory)
