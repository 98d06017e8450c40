"""
Token Decoder - reverses the save file's character obfuscation.

Every character between structural delimiters is shifted up by a byte of a
fixed key, restarting the key at the first character of each token:

    plain[i] = chr(ord(raw[i]) - KEY[i % len(KEY)])

Delimiters ``[ ] = " \\n \\r`` are written in the clear, and NUL padding is
dropped. Two repairs make the output valid TOML:

- A decoded ``"`` inside a token is emitted as ``\\"``.
- The first digit of the token right after ``[`` gets a ``.`` in front of
  it, turning a section header like ``Inventory5`` into ``Inventory.5``.

A token still open at end of input has no closing delimiter and is dropped.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from .errors import InvalidCharacterError


logger = logging.getLogger("SaveDecoder")


ENCRYPTION_KEY = b"QWERTY"

DELIMITERS = frozenset("[]=\"\n\r")
HEADER_OPEN = "["
NUL = "\0"

_SURROGATES = range(0xD800, 0xE000)


def decrypt_char(c: str, token_pos: int, key: bytes, offset: int = 0) -> str:
    """Decode a single token character at position ``token_pos``."""
    key_byte = key[token_pos % len(key)]
    code = ord(c) - key_byte
    if code < 0 or code in _SURROGATES:
        raise InvalidCharacterError(c, offset, token_pos, key_byte)
    return chr(code)


def decrypt(raw: str, key: bytes = ENCRYPTION_KEY) -> str:
    """
    Decode an obfuscated save into TOML text.

    Args:
        raw: Contents of the save file
        key: Cipher key, cycled per token

    Returns:
        Repaired text ready for ``tomllib.loads``

    Raises:
        InvalidCharacterError: a token character decodes below U+0000 or
            into the surrogate range
    """
    if not key:
        raise ValueError("cipher key must not be empty")

    out: List[str] = []
    # (char, input offset) pairs for the token being accumulated
    buf: List[Tuple[str, int]] = []
    is_header = False
    tokens = 0

    for offset, c in enumerate(raw):
        if c == NUL:
            continue
        if c not in DELIMITERS:
            buf.append((c, offset))
            continue

        if buf:
            for pos, (bc, boff) in enumerate(buf):
                plain = decrypt_char(bc, pos, key, boff)
                if is_header and "0" <= plain <= "9":
                    out.append(".")
                    is_header = False
                elif plain == '"':
                    out.append("\\")
                out.append(plain)
            buf.clear()
            is_header = False
            tokens += 1

        out.append(c)
        if c == HEADER_OPEN:
            is_header = True

    if buf:
        logger.debug(f"Dropping {len(buf)} trailing characters with no closing delimiter")

    logger.debug(f"Decrypted {tokens} tokens from {len(raw)} characters")
    return "".join(out)
