"""
Save Model - typed representation of the decoded save.

The save holds a single sparse inventory. Each slot is one of the record
variants below, chosen by the ``Type`` field of its table. Slots that have
no table in the file hold ``MissingInventory``.

Field names are snake_case; ``WIRE_FIELDS`` on each class maps them back to
the names used in the save file.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Tuple


# Aliases kept distinct so signatures say what the number means
ArtifactType = int
ArtifactStatSlot = int
ArtifactTrickSlot = int


class InventoryKind(Enum):
    """Inventory record variants, valued by their ``Type`` tag."""
    MATERIAL = "obj_material"
    ARTIFACT = "obj_artifact"
    SPELLGEM = "obj_spellgem"
    NETHERSTONE = "obj_netherstone"
    DUST = "obj_dust"
    CONSUMABLE = "obj_consumable"
    MISSING = "Missing"


@dataclass(frozen=True)
class InventoryRecord:
    """Base for all inventory slot variants."""

    kind: ClassVar[InventoryKind]
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    def is_missing(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Wire-named dict, ``Type`` first."""
        data: Dict[str, Any] = {"Type": self.kind.value}
        for attr, wire in self.WIRE_FIELDS:
            data[wire] = getattr(self, attr)
        return data


@dataclass(frozen=True)
class MaterialInventory(InventoryRecord):
    """A stack of crafting material."""
    material_quantity: int
    material_id: int
    looked: bool

    kind: ClassVar[InventoryKind] = InventoryKind.MATERIAL
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("material_quantity", "MaterialQuantity"),
        ("material_id", "MaterialID"),
        ("looked", "Looked"),
    )


@dataclass(frozen=True)
class ArtifactInventory(InventoryRecord):
    """
    An artifact with its slots.

    Slot fields are None when the save stores the ``-1`` sentinel.
    """
    nether_ptr: Optional[int]
    artifact_awakened: str
    artifact_spell: str
    artifact_trait: str
    artifact_stat_slot1: Optional[ArtifactStatSlot]
    artifact_stat_slot2: Optional[ArtifactStatSlot]
    artifact_stat_slot3: Optional[ArtifactStatSlot]
    artifact_stat_slot4: Optional[ArtifactStatSlot]
    artifact_trick_slot1: Optional[ArtifactTrickSlot]
    artifact_trick_slot2: Optional[ArtifactTrickSlot]
    artifact_tier: int
    artifact_guid: int
    artifact_locked: bool
    artifact_nickname: str
    artifact_type: ArtifactType
    looked: bool

    kind: ClassVar[InventoryKind] = InventoryKind.ARTIFACT
    WIRE_FIELDS: ClassVar[Tuple[Tuple[str, str], ...]] = (
        ("nether_ptr", "NetherPtr"),
        ("artifact_awakened", "ArtifactAwakened"),
        ("artifact_spell", "ArtifactSpell"),
        ("artifact_trait", "ArtifactTrait"),
        ("artifact_stat_slot1", "ArtifactStatSlot1"),
        ("artifact_stat_slot2", "ArtifactStatSlot2"),
        ("artifact_stat_slot3", "ArtifactStatSlot3"),
        ("artifact_stat_slot4", "ArtifactStatSlot4"),
        ("artifact_trick_slot1", "ArtifactTrickSlot1"),
        ("artifact_trick_slot2", "ArtifactTrickSlot2"),
        ("artifact_tier", "ArtifactTier"),
        ("artifact_guid", "ArtifactGUID"),
        ("artifact_locked", "ArtifactLocked"),
        ("artifact_nickname", "ArtifactNickname"),
        ("artifact_type", "ArtifactType"),
        ("looked", "Looked"),
    )

    @property
    def stat_slots(self) -> List[Optional[ArtifactStatSlot]]:
        return [
            self.artifact_stat_slot1,
            self.artifact_stat_slot2,
            self.artifact_stat_slot3,
            self.artifact_stat_slot4,
        ]

    @property
    def trick_slots(self) -> List[Optional[ArtifactTrickSlot]]:
        return [self.artifact_trick_slot1, self.artifact_trick_slot2]


# The remaining kinds carry no modeled fields yet.

@dataclass(frozen=True)
class SpellgemInventory(InventoryRecord):
    kind: ClassVar[InventoryKind] = InventoryKind.SPELLGEM


@dataclass(frozen=True)
class NetherstoneInventory(InventoryRecord):
    kind: ClassVar[InventoryKind] = InventoryKind.NETHERSTONE


@dataclass(frozen=True)
class DustInventory(InventoryRecord):
    kind: ClassVar[InventoryKind] = InventoryKind.DUST


@dataclass(frozen=True)
class ConsumableInventory(InventoryRecord):
    kind: ClassVar[InventoryKind] = InventoryKind.CONSUMABLE


@dataclass(frozen=True)
class MissingInventory(InventoryRecord):
    """Placeholder for an index with no table in the save."""

    kind: ClassVar[InventoryKind] = InventoryKind.MISSING

    def is_missing(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "Missing"


MISSING = MissingInventory()


@dataclass
class Save:
    """Decoded save file."""
    inventory: List[InventoryRecord] = field(default_factory=list)

    def occupied(self) -> List[Tuple[int, InventoryRecord]]:
        """(index, record) for every slot that is not a placeholder."""
        return [(i, rec) for i, rec in enumerate(self.inventory) if not rec.is_missing()]

    def count_by_kind(self) -> Dict[InventoryKind, int]:
        counts: Dict[InventoryKind, int] = {}
        for rec in self.inventory:
            counts[rec.kind] = counts.get(rec.kind, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {"Inventory": [rec.to_dict() for rec in self.inventory]}
