"""
State module - the decoded save model.

Contains:
- Save container with the sparse inventory
- Inventory record variants and their kinds
"""

from .inventory import (
    Save,
    InventoryKind,
    InventoryRecord,
    MaterialInventory,
    ArtifactInventory,
    SpellgemInventory,
    NetherstoneInventory,
    DustInventory,
    ConsumableInventory,
    MissingInventory,
    MISSING,
    ArtifactType,
    ArtifactStatSlot,
    ArtifactTrickSlot,
)
