#!/usr/bin/env python3
"""
Save Decoder - Command Line Interface

Decrypts an obfuscated save and prints what it holds.

Usage:
    python cli.py decrypt slot0.sav
    python cli.py decrypt slot0.sav --out slot0.toml
    python cli.py dump slot0.sav --json
    python cli.py inventory slot0.sav --kind obj_artifact

PATH may be omitted when the SAV environment variable (or .env) names the save.
"""

import argparse
import json
import logging
import sys
import os
import tomllib
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from packages.savedecoder.api import decrypt_file, parse_save
from packages.savedecoder.config import DecoderConfig
from packages.savedecoder.errors import SaveDecoderError
from packages.savedecoder.state.inventory import (
    ArtifactInventory, InventoryKind, InventoryRecord, MaterialInventory, Save,
)


logger = logging.getLogger("SaveDecoderCLI")


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def _opt(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


def format_record(index: int, record: InventoryRecord) -> str:
    """Format a single inventory slot."""
    head = f"[{index:>3}] {record.kind.value}"
    if isinstance(record, MaterialInventory):
        seen = "" if record.looked else " (new)"
        return f"{head}  id={record.material_id} x{record.material_quantity}{seen}"
    if isinstance(record, ArtifactInventory):
        stats = ",".join(_opt(s) for s in record.stat_slots)
        tricks = ",".join(_opt(t) for t in record.trick_slots)
        lock = " locked" if record.artifact_locked else ""
        name = f" \"{record.artifact_nickname}\"" if record.artifact_nickname else ""
        return (f"{head}  guid={record.artifact_guid} type={record.artifact_type} "
                f"tier={record.artifact_tier} stats=[{stats}] tricks=[{tricks}]{lock}{name}")
    return head


def format_summary(save: Save) -> str:
    """Format slot counts per kind."""
    lines = [f"Inventory: {len(save.inventory)} slots, {len(save.occupied())} occupied"]
    counts = save.count_by_kind()
    for kind in InventoryKind:
        if counts.get(kind):
            lines.append(f"  {kind.value:<16} {counts[kind]}")
    return "\n".join(lines)


# =============================================================================
# COMMAND HANDLERS
# =============================================================================

def _resolve_path(args, config: DecoderConfig) -> Path:
    path = Path(args.path) if args.path else config.save_path
    if path is None:
        raise ValueError("no save file given (pass PATH or set SAV)")
    return path


def _load(args, config: DecoderConfig) -> Save:
    path = _resolve_path(args, config)
    text = decrypt_file(path, config.key, args.write_sidecar or config.write_decrypted)
    return parse_save(text)


def cmd_decrypt(args, config: DecoderConfig) -> int:
    """Print or write the decrypted text."""
    path = _resolve_path(args, config)
    text = decrypt_file(path, config.key, args.write_sidecar or config.write_decrypted)
    if args.out:
        with open(args.out, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.info(f"Wrote {len(text)} chars to {args.out}")
    else:
        sys.stdout.write(text)
    return 0


def cmd_dump(args, config: DecoderConfig) -> int:
    """Decode the save and print the model."""
    save = _load(args, config)
    if args.json:
        print(json.dumps(save.to_dict(), indent=2))
        return 0

    print(format_summary(save))
    print()
    for index, record in save.occupied():
        print(format_record(index, record))
    return 0


def cmd_inventory(args, config: DecoderConfig) -> int:
    """List inventory slots, optionally filtered by kind."""
    save = _load(args, config)
    kind = InventoryKind(args.kind) if args.kind else None
    for index, record in enumerate(save.inventory):
        if record.is_missing() and not args.include_missing:
            continue
        if kind is not None and record.kind is not kind:
            continue
        print(format_record(index, record))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Save Decoder - decrypt and inspect save files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s decrypt slot0.sav
  %(prog)s decrypt slot0.sav --out slot0.toml
  %(prog)s dump slot0.sav --json
  %(prog)s inventory slot0.sav --kind obj_material
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Decrypt command
    decrypt_parser = subparsers.add_parser("decrypt", help="Print the decrypted save text")
    decrypt_parser.add_argument("path", nargs="?", help="Save file (default: $SAV)")
    decrypt_parser.add_argument("--out", "-o", help="Write the text to this file instead of stdout")
    decrypt_parser.add_argument("--write-sidecar", action="store_true",
                                help="Also write <save>.decrypt next to the save")

    # Dump command
    dump_parser = subparsers.add_parser("dump", help="Decode the save and print the model")
    dump_parser.add_argument("path", nargs="?", help="Save file (default: $SAV)")
    dump_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")
    dump_parser.add_argument("--write-sidecar", action="store_true",
                             help="Also write <save>.decrypt next to the save")

    # Inventory command
    inventory_parser = subparsers.add_parser("inventory", help="List inventory slots")
    inventory_parser.add_argument("path", nargs="?", help="Save file (default: $SAV)")
    inventory_parser.add_argument("--kind", "-k", choices=[k.value for k in InventoryKind],
                                  help="Only show this record type")
    inventory_parser.add_argument("--include-missing", action="store_true",
                                  help="Also list empty slots")
    inventory_parser.add_argument("--write-sidecar", action="store_true",
                                  help="Also write <save>.decrypt next to the save")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = DecoderConfig.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Dispatch to command handler
    commands = {
        "decrypt": cmd_decrypt,
        "dump": cmd_dump,
        "inventory": cmd_inventory,
    }

    handler = commands[args.command]
    try:
        return handler(args, config)
    except tomllib.TOMLDecodeError as e:
        logger.error(f"Decrypted text is not valid TOML: {e}")
    except SaveDecoderError as e:
        logger.error(f"Decode failed: {e}")
    except (OSError, ValueError) as e:
        logger.error(f"{e}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
