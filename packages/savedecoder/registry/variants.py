"""
Inventory variant handlers.

One handler per ``Type`` tag. Fields not read here are ignored, so extra
keys in a table never fail a decode.
"""

from __future__ import annotations

from . import inventory_variant, RecordContext
from ..state.inventory import (
    ArtifactInventory,
    ConsumableInventory,
    DustInventory,
    InventoryKind,
    MaterialInventory,
    MISSING,
    MissingInventory,
    NetherstoneInventory,
    SpellgemInventory,
)


@inventory_variant(InventoryKind.MATERIAL.value)
def material(ctx: RecordContext) -> MaterialInventory:
    return MaterialInventory(
        material_quantity=ctx.u32("MaterialQuantity"),
        material_id=ctx.u32("MaterialID"),
        looked=ctx.boolean("Looked"),
    )


@inventory_variant(InventoryKind.ARTIFACT.value)
def artifact(ctx: RecordContext) -> ArtifactInventory:
    """Artifact: slot fields use -1 for an empty slot."""
    return ArtifactInventory(
        nether_ptr=ctx.optional_u32("NetherPtr"),
        artifact_awakened=ctx.string("ArtifactAwakened"),
        artifact_spell=ctx.string("ArtifactSpell"),
        artifact_trait=ctx.string("ArtifactTrait"),
        artifact_stat_slot1=ctx.optional_u32("ArtifactStatSlot1"),
        artifact_stat_slot2=ctx.optional_u32("ArtifactStatSlot2"),
        artifact_stat_slot3=ctx.optional_u32("ArtifactStatSlot3"),
        artifact_stat_slot4=ctx.optional_u32("ArtifactStatSlot4"),
        artifact_trick_slot1=ctx.optional_u32("ArtifactTrickSlot1"),
        artifact_trick_slot2=ctx.optional_u32("ArtifactTrickSlot2"),
        artifact_tier=ctx.u32("ArtifactTier"),
        artifact_guid=ctx.u32("ArtifactGUID"),
        artifact_locked=ctx.boolean("ArtifactLocked"),
        artifact_nickname=ctx.string("ArtifactNickname"),
        artifact_type=ctx.u32("ArtifactType"),
        looked=ctx.boolean("Looked"),
    )


@inventory_variant(InventoryKind.SPELLGEM.value)
def spellgem(ctx: RecordContext) -> SpellgemInventory:
    return SpellgemInventory()


@inventory_variant(InventoryKind.NETHERSTONE.value)
def netherstone(ctx: RecordContext) -> NetherstoneInventory:
    return NetherstoneInventory()


@inventory_variant(InventoryKind.DUST.value)
def dust(ctx: RecordContext) -> DustInventory:
    return DustInventory()


@inventory_variant(InventoryKind.CONSUMABLE.value)
def consumable(ctx: RecordContext) -> ConsumableInventory:
    return ConsumableInventory()


@inventory_variant(InventoryKind.MISSING.value)
def missing(ctx: RecordContext) -> MissingInventory:
    """An explicit ``Type = "Missing"`` table decodes to the placeholder."""
    return MISSING
