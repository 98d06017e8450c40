"""
Shared pytest fixtures for the save decoder test suite.

This module provides reusable fixtures for:
- Obfuscating plaintext the way the game writes saves
- Parsed save trees and record tables
- Save files written to a temporary directory
"""

import pytest
import sys

# Ensure project root is in path
import os
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from packages.savedecoder.cipher import DELIMITERS, ENCRYPTION_KEY


# =============================================================================
# Obfuscation helpers
# =============================================================================


def obfuscate_token(plain: str, key: bytes = ENCRYPTION_KEY) -> str:
    """Shift each character of one token up by the cycled key."""
    return "".join(chr(ord(c) + key[i % len(key)]) for i, c in enumerate(plain))


def obfuscate(plain: str, key: bytes = ENCRYPTION_KEY) -> str:
    """
    Obfuscate a whole document: delimiters stay, every run between them is
    shifted as one token. Section headers are written without their dot
    (``[Inventory5]``); the decoder puts it back.
    """
    out = []
    token = []
    for c in plain:
        if c in DELIMITERS:
            out.append(obfuscate_token("".join(token), key))
            token = []
            out.append(c)
        else:
            token.append(c)
    out.append(obfuscate_token("".join(token), key))
    return "".join(out)


MATERIAL_AT_5 = (
    "[Inventory5]\n"
    "Type=\"obj_material\"\n"
    "MaterialQuantity=\"12\"\n"
    "MaterialID=\"7\"\n"
    "Looked=\"1\"\n"
)


def material_table(quantity="12", material_id="7", looked="1"):
    return {
        "Type": "obj_material",
        "MaterialQuantity": quantity,
        "MaterialID": material_id,
        "Looked": looked,
    }


def artifact_table(**overrides):
    table = {
        "Type": "obj_artifact",
        "NetherPtr": "-1",
        "ArtifactAwakened": "0",
        "ArtifactSpell": "spell_fireball",
        "ArtifactTrait": "trait_swift",
        "ArtifactStatSlot1": "3",
        "ArtifactStatSlot2": "-1",
        "ArtifactStatSlot3": "11",
        "ArtifactStatSlot4": "-1",
        "ArtifactTrickSlot1": "-1",
        "ArtifactTrickSlot2": "2",
        "ArtifactTier": "4",
        "ArtifactGUID": "90210",
        "ArtifactLocked": "0",
        "ArtifactNickname": "Old Faithful",
        "ArtifactType": "6",
        "Looked": "1",
    }
    table.update(overrides)
    return table


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def material_tree():
    """Parsed save with a single material at index 5."""
    return {"Inventory": {"5": material_table()}}


@pytest.fixture
def mixed_tree():
    """Parsed save with several kinds, keys out of order."""
    return {
        "Inventory": {
            "4": {"Type": "obj_dust"},
            "0": material_table(quantity="3", material_id="1", looked="0"),
            "2": artifact_table(),
            "6": {"Type": "obj_spellgem"},
        }
    }


@pytest.fixture
def save_file(tmp_path):
    """Obfuscated save on disk holding MATERIAL_AT_5."""
    path = tmp_path / "slot0.sav"
    path.write_text(obfuscate(MATERIAL_AT_5), encoding="utf-8", newline="")
    return path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove decoder variables so tests don't see the developer's setup."""
    for name in ("SAV", "SAVE_DECRYPT_KEY", "SAVE_WRITE_DECRYPTED", "SAVE_LOG_LEVEL"):
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
