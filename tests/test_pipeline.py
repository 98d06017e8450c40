"""
End-to-end tests: obfuscated file -> Save.
"""

import json
import tomllib

import pytest

from packages.savedecoder import load_save
from packages.savedecoder.api import decrypt_file, decrypted_path, parse_save, read_raw
from packages.savedecoder.errors import InvalidCharacterError, UnknownTagError
from packages.savedecoder.state.inventory import InventoryKind, MaterialInventory
from tests.conftest import MATERIAL_AT_5, obfuscate


class TestLoadSave:
    """Full pipeline on files."""

    def test_single_material_at_index_5(self, save_file):
        """Slots 0-4 are Missing and slot 5 holds the decoded material."""
        save = load_save(save_file)
        assert len(save.inventory) == 6
        assert all(r.kind is InventoryKind.MISSING for r in save.inventory[:5])
        assert save.inventory[5] == MaterialInventory(
            material_quantity=12, material_id=7, looked=True,
        )

    def test_sidecar_not_written_by_default(self, save_file):
        load_save(save_file)
        assert not decrypted_path(save_file).exists()

    def test_sidecar_written_on_request(self, save_file):
        text = decrypt_file(save_file, write_decrypted=True)
        sidecar = decrypted_path(save_file)
        assert sidecar.name == "slot0.sav.decrypt"
        assert sidecar.read_text(encoding="utf-8") == text
        assert text.startswith("[Inventory.5]\n")

    def test_crlf_line_endings_preserved(self, tmp_path):
        """CR is a delimiter too and must reach the parser intact."""
        plain = MATERIAL_AT_5.replace("\n", "\r\n")
        path = tmp_path / "crlf.sav"
        path.write_text(obfuscate(plain), encoding="utf-8", newline="")
        assert "\r\n" in read_raw(path)
        save = load_save(path)
        assert save.inventory[5].kind is InventoryKind.MATERIAL

    def test_nul_padded_file(self, tmp_path):
        path = tmp_path / "padded.sav"
        path.write_text(obfuscate(MATERIAL_AT_5) + "\0" * 16, encoding="utf-8", newline="")
        assert len(load_save(path).inventory) == 6

    def test_wrong_key_fails(self, save_file):
        """A key larger than the stored characters underflows."""
        with pytest.raises(InvalidCharacterError):
            load_save(save_file, key=b"\xff")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_save(tmp_path / "nope.sav")


class TestParseSave:
    """Decrypted text -> Save."""

    def test_quoted_nickname(self):
        """An escaped quote from the cipher survives TOML parsing."""
        text = (
            "[Inventory.0]\n"
            "Type=\"obj_artifact\"\n"
            "NetherPtr=\"7\"\n"
            "ArtifactAwakened=\"1\"\n"
            "ArtifactSpell=\"\"\n"
            "ArtifactTrait=\"\"\n"
            "ArtifactStatSlot1=\"-1\"\n"
            "ArtifactStatSlot2=\"-1\"\n"
            "ArtifactStatSlot3=\"-1\"\n"
            "ArtifactStatSlot4=\"-1\"\n"
            "ArtifactTrickSlot1=\"-1\"\n"
            "ArtifactTrickSlot2=\"-1\"\n"
            "ArtifactTier=\"1\"\n"
            "ArtifactGUID=\"5\"\n"
            "ArtifactLocked=\"1\"\n"
            "ArtifactNickname=\"The \\\"Best\\\"\"\n"
            "ArtifactType=\"2\"\n"
            "Looked=\"0\"\n"
        )
        record = parse_save(text).inventory[0]
        assert record.artifact_nickname == 'The "Best"'
        assert record.nether_ptr == 7
        assert record.artifact_locked is True
        assert record.stat_slots == [None, None, None, None]

    def test_parse_error_propagates_unchanged(self):
        with pytest.raises(tomllib.TOMLDecodeError):
            parse_save("[Inventory.0\nType=\"obj_dust\"\n")

    def test_decode_error_propagates(self):
        with pytest.raises(UnknownTagError):
            parse_save("[Inventory.0]\nType=\"obj_unknown\"\n")


class TestSaveModel:
    """Convenience views on the decoded model."""

    def test_to_dict_is_json_serializable(self, save_file):
        data = load_save(save_file).to_dict()
        dumped = json.loads(json.dumps(data))
        assert len(dumped["Inventory"]) == 6
        assert dumped["Inventory"][0] == {"Type": "Missing"}
        assert dumped["Inventory"][5] == {
            "Type": "obj_material",
            "MaterialQuantity": 12,
            "MaterialID": 7,
            "Looked": True,
        }

    def test_occupied_and_counts(self, save_file):
        save = load_save(save_file)
        assert [i for i, _ in save.occupied()] == [5]
        assert save.count_by_kind() == {
            InventoryKind.MISSING: 5,
            InventoryKind.MATERIAL: 1,
        }
