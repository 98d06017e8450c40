"""
Exception hierarchy for the save decoder.

Token-level failures come from the cipher pass; everything else comes from
the typed decoder and carries the dotted path of the offending field
(e.g. ``Inventory.5.MaterialQuantity``).

Parse errors raised by ``tomllib`` are never wrapped: they reach the caller
as ``tomllib.TOMLDecodeError``.
"""

from __future__ import annotations

from typing import Any, Optional


class SaveDecoderError(Exception):
    """Base exception for save decoder errors."""
    pass


class InvalidCharacterError(SaveDecoderError):
    """De-obfuscation produced a code point that is not a valid character."""

    def __init__(self, char: str, offset: int, token_pos: int, key_byte: int):
        self.char = char
        self.offset = offset
        self.token_pos = token_pos
        self.key_byte = key_byte
        super().__init__(
            f"Cannot decode {char!r} at offset {offset} "
            f"(token position {token_pos}, key byte {key_byte}): "
            f"code point {ord(char) - key_byte} is not a valid character"
        )


# =============================================================================
# Typed decoder errors
# =============================================================================

class DecodeError(SaveDecoderError):
    """A node of the parsed tree does not match the save layout."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path or '<root>'}: {message}")


class MalformedKeyError(DecodeError):
    """A sparse-collection key is not a non-negative integer."""

    def __init__(self, path: str, key: Any):
        self.key = key
        super().__init__(path, f"malformed index key {key!r}, expected a non-negative integer")


class InvalidTypeError(DecodeError):
    """A node has the wrong kind, or its text does not parse."""

    def __init__(self, path: str, expected: str, found: Any):
        self.expected = expected
        self.found = found
        super().__init__(path, f"invalid type: {_describe(found)}, expected {expected}")


class InvalidValueError(DecodeError):
    """A node parses but violates a value constraint."""

    def __init__(self, path: str, expected: str, value: Any):
        self.expected = expected
        self.value = value
        super().__init__(path, f"invalid value: {value!r}, expected {expected}")


class UnknownTagError(InvalidValueError):
    """The discriminator names no registered inventory variant."""

    def __init__(self, path: str, tag: str, known: Optional[list] = None):
        self.tag = tag
        self.known = list(known or [])
        expected = "one of " + ", ".join(repr(t) for t in self.known) if self.known else "a known tag"
        super().__init__(path, expected, tag)


class MissingFieldError(DecodeError):
    """A required field is absent from a table."""

    def __init__(self, path: str, field_name: str):
        self.field_name = field_name
        super().__init__(path, f"missing field {field_name!r}")


def _describe(node: Any) -> str:
    """Short description of a parsed node for error messages."""
    if isinstance(node, str):
        return f"string {node!r}"
    if isinstance(node, bool):
        return f"boolean {node}"
    if isinstance(node, int):
        return f"integer {node}"
    if isinstance(node, float):
        return f"float {node}"
    if isinstance(node, dict):
        return "table"
    if isinstance(node, list):
        return "array"
    return type(node).__name__
