"""
Save Decoder

Recovers the inventory from an obfuscated game save.

Pipeline:
- cipher: per-token key subtraction, quote escaping, header-dot repair
- tomllib: parses the repaired text into a tree of tables and strings
- decoder: rebuilds the sparse inventory and picks record variants by tag
- state: the typed Save model handed back to the caller

Usage:
    from packages.savedecoder import load_save, InventoryKind

    save = load_save("slot0.sav")
    materials = [r for r in save.inventory if r.kind is InventoryKind.MATERIAL]

    from packages.savedecoder import decrypt, decode_save
    import tomllib
    save = decode_save(tomllib.loads(decrypt(raw)))
"""

__version__ = "0.1.0"

# Token Decoder
from .cipher import decrypt, decrypt_char, ENCRYPTION_KEY, DELIMITERS

# Typed Decoder
from .decoder import decode_save, decode_inventory, parse_index
from .scalars import decode_u32, decode_bool, decode_optional_u32, decode_str
from .registry import (
    INVENTORY_REGISTRY, RecordContext, VariantRegistry,
    inventory_variant, decode_variant,
)

# Save Model
from .state.inventory import (
    Save, InventoryKind, InventoryRecord,
    MaterialInventory, ArtifactInventory, SpellgemInventory,
    NetherstoneInventory, DustInventory, ConsumableInventory,
    MissingInventory, MISSING,
)

# Errors
from .errors import (
    SaveDecoderError, InvalidCharacterError, DecodeError,
    MalformedKeyError, InvalidTypeError, InvalidValueError,
    UnknownTagError, MissingFieldError,
)

# File I/O and configuration
from .api import load_save, decrypt_file, parse_save, read_raw, decrypted_path
from .config import DecoderConfig
