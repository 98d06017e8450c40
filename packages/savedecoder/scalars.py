"""
Scalar field decoders.

The save stores every scalar as a TOML string. Each helper takes the node
and the dotted path used in error messages, checks that the node is a
string, then parses it:

- u32:          decimal text in [0, 2**32)
- bool:         "0" or "1"
- optional u32: signed 64-bit text, "-1" means absent, anything else is
                truncated to 32 bits (so "-2" reads as 4294967294)
"""

import re
from typing import Any, Mapping, Optional

from .errors import InvalidTypeError, InvalidValueError, MissingFieldError


U32_MAX = 0xFFFFFFFF
U64_MAX = 0xFFFFFFFFFFFFFFFF
I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1

ABSENT_SENTINEL = -1

# Optional sign plus ASCII digits; int() alone would also take spaces and "_"
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")


def _parse_unsigned(text: str, limit: int) -> Optional[int]:
    if not _UNSIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    return value if value <= limit else None


def _parse_i64(text: str) -> Optional[int]:
    if not _SIGNED_RE.fullmatch(text):
        return None
    value = int(text)
    return value if I64_MIN <= value <= I64_MAX else None


def decode_str(node: Any, path: str) -> str:
    if not isinstance(node, str):
        raise InvalidTypeError(path, "a string", node)
    return node


def decode_u32(node: Any, path: str) -> int:
    """String containing an unsigned 32-bit number."""
    text = decode_str(node, path)
    value = _parse_unsigned(text, U32_MAX)
    if value is None:
        raise InvalidTypeError(path, "a string containing a number", text)
    return value


def decode_bool(node: Any, path: str) -> bool:
    """String containing 0 or 1."""
    text = decode_str(node, path)
    value = _parse_unsigned(text, U64_MAX)
    if value is None:
        raise InvalidTypeError(path, "a string containing a number representing a boolean", text)
    if value == 0:
        return False
    if value == 1:
        return True
    raise InvalidValueError(path, "0 or 1", value)


def decode_optional_u32(node: Any, path: str) -> Optional[int]:
    """String containing a number, -1 for absent."""
    text = decode_str(node, path)
    value = _parse_i64(text)
    if value is None:
        raise InvalidTypeError(path, "a string containing an Option of a number", text)
    if value == ABSENT_SENTINEL:
        return None
    return value & U32_MAX


def require(table: Mapping[str, Any], name: str, path: str) -> Any:
    """Fetch a required field from a table."""
    if name not in table:
        raise MissingFieldError(path, name)
    return table[name]


def join_path(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name
