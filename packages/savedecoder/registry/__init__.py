"""
Inventory Variant Registry.

Maps each ``Type`` tag found in an inventory table to the function that
builds its record. Handlers are registered with a decorator and receive a
RecordContext that reads typed fields out of the table:

    from packages.savedecoder.registry import inventory_variant, RecordContext

    @inventory_variant("obj_material")
    def material(ctx: RecordContext) -> MaterialInventory:
        return MaterialInventory(
            material_quantity=ctx.u32("MaterialQuantity"),
            material_id=ctx.u32("MaterialID"),
            looked=ctx.boolean("Looked"),
        )

Tags are matched exactly (case-sensitive).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional
import functools
import logging

from ..errors import InvalidTypeError, UnknownTagError
from ..scalars import (
    decode_bool,
    decode_optional_u32,
    decode_str,
    decode_u32,
    join_path,
    require,
)
from ..state.inventory import InventoryRecord


logger = logging.getLogger("VariantRegistry")

TAG_FIELD = "Type"


# =============================================================================
# Context - Passed to variant handlers
# =============================================================================

@dataclass
class RecordContext:
    """One inventory table being decoded."""
    table: Mapping[str, Any]
    path: str
    tag: str

    def field_path(self, name: str) -> str:
        return join_path(self.path, name)

    def raw(self, name: str) -> Any:
        return require(self.table, name, self.path)

    def u32(self, name: str) -> int:
        return decode_u32(self.raw(name), self.field_path(name))

    def boolean(self, name: str) -> bool:
        return decode_bool(self.raw(name), self.field_path(name))

    def optional_u32(self, name: str) -> Optional[int]:
        return decode_optional_u32(self.raw(name), self.field_path(name))

    def string(self, name: str) -> str:
        return decode_str(self.raw(name), self.field_path(name))


# =============================================================================
# Registry
# =============================================================================

class VariantRegistry:
    """Tag -> handler lookup table."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: Dict[str, Callable[[RecordContext], InventoryRecord]] = {}

    def register(self, tag: str, handler: Callable[[RecordContext], InventoryRecord]):
        """Register a handler for a tag."""
        if tag in self._handlers:
            raise ValueError(f"{self.name}: tag {tag!r} already registered")
        self._handlers[tag] = handler

    def get_handler(self, tag: str) -> Optional[Callable[[RecordContext], InventoryRecord]]:
        return self._handlers.get(tag)

    def has_handler(self, tag: str) -> bool:
        return tag in self._handlers

    def list_tags(self) -> List[str]:
        """All registered tags, in registration order."""
        return list(self._handlers.keys())


INVENTORY_REGISTRY = VariantRegistry("inventory")


def inventory_variant(tag: str):
    """
    Decorator to register an inventory variant handler.

    Args:
        tag: Value of the ``Type`` field selecting this variant
    """
    def decorator(func: Callable[[RecordContext], InventoryRecord]) -> Callable:
        INVENTORY_REGISTRY.register(tag, func)

        @functools.wraps(func)
        def wrapper(ctx: RecordContext) -> InventoryRecord:
            return func(ctx)

        return wrapper
    return decorator


# =============================================================================
# Execution
# =============================================================================

def decode_variant(table: Any, path: str) -> InventoryRecord:
    """
    Decode one inventory table by its ``Type`` tag.

    Raises:
        InvalidTypeError: the node is not a table, or the tag is not a string
        MissingFieldError: the table has no ``Type`` field
        UnknownTagError: no handler is registered for the tag
    """
    if not isinstance(table, Mapping):
        raise InvalidTypeError(path, "an inventory table", table)

    tag = decode_str(require(table, TAG_FIELD, path), join_path(path, TAG_FIELD))
    handler = INVENTORY_REGISTRY.get_handler(tag)
    if handler is None:
        raise UnknownTagError(join_path(path, TAG_FIELD), tag, INVENTORY_REGISTRY.list_tags())

    record = handler(RecordContext(table=table, path=path, tag=tag))
    logger.debug(f"{path}: {tag} -> {record!r}")
    return record


__all__ = [
    "TAG_FIELD",
    "RecordContext",
    "VariantRegistry",
    "INVENTORY_REGISTRY",
    "inventory_variant",
    "decode_variant",
]

# Import handlers to register them (decorators populate the registry)
from . import variants as _variants  # noqa: F401, E402
