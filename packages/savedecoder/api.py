"""
Save Decoder - File-level entry points.

Quick Start Examples:

1. Decode a save into the typed model:
    ```python
    from packages.savedecoder.api import load_save

    save = load_save("slot0.sav")
    for index, record in save.occupied():
        print(index, record.kind.value)
    ```

2. Only recover the text, keeping a copy next to the save:
    ```python
    from packages.savedecoder.api import decrypt_file

    text = decrypt_file("slot0.sav", write_decrypted=True)  # slot0.sav.decrypt
    ```

3. Decode text that was already decrypted:
    ```python
    from packages.savedecoder.api import parse_save

    save = parse_save(open("slot0.sav.decrypt").read())
    ```
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Union

from .cipher import ENCRYPTION_KEY, decrypt
from .decoder import decode_save
from .state.inventory import Save


logger = logging.getLogger("SaveDecoder")

PathLike = Union[str, Path]

DECRYPTED_SUFFIX = ".decrypt"


def decrypted_path(path: PathLike) -> Path:
    """Sidecar path for the decrypted text: ``<save>.decrypt``."""
    path = Path(path)
    return path.with_name(path.name + DECRYPTED_SUFFIX)


def read_raw(path: PathLike) -> str:
    """Read a save file as text."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def decrypt_file(path: PathLike, key: bytes = ENCRYPTION_KEY,
                 write_decrypted: bool = False) -> str:
    """
    Read and de-obfuscate a save file.

    Args:
        path: Save file
        key: Cipher key
        write_decrypted: Also write the text to ``<path>.decrypt``

    Returns:
        The decrypted TOML text
    """
    raw = read_raw(path)
    text = decrypt(raw, key)
    logger.info(f"Decrypted {path} ({len(raw)} -> {len(text)} chars)")

    if write_decrypted:
        out = decrypted_path(path)
        with open(out, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.info(f"Wrote decrypted text to {out}")

    return text


def parse_save(text: str) -> Save:
    """
    Parse decrypted text into a Save.

    ``tomllib.TOMLDecodeError`` propagates unchanged.
    """
    return decode_save(tomllib.loads(text))


def load_save(path: PathLike, key: bytes = ENCRYPTION_KEY,
              write_decrypted: bool = False) -> Save:
    """Full pipeline: read, decrypt, parse, decode."""
    save = parse_save(decrypt_file(path, key, write_decrypted))
    logger.info(f"Decoded {len(save.inventory)} inventory slots ({len(save.occupied())} occupied)")
    return save
