"""
Escaping of UTF-8 byte strings into JSON string bodies.

Both escapers work on raw UTF-8 bytes and return the body without the
surrounding quotes. escape_utf8 passes multi-byte sequences through untouched;
escape_ascii folds them into \\uXXXX escapes, using UTF-16 surrogate pairs for
codepoints above the Basic Multilingual Plane.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final
from typing import TypeAlias

from ._errors import EncodingError
from ._profile import ProfileContext

Utf8Data: TypeAlias = bytes | bytearray | memoryview

_SHORT_ESCAPES: Final = {
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0C: "\\f",
    0x0D: "\\r",
    0x22: '\\"',
    0x5C: "\\\\",
}

# Byte value -> escape sequence for every byte that must not appear raw
ESCAPE_TABLE: Final = MappingProxyType(
    {
        byte: _SHORT_ESCAPES.get(byte, f"\\u{byte:04x}")
        for byte in (*range(0x20), 0x22, 0x5C)
    }
)

_BYTE_ESCAPES: Final = {
    bytes([byte]): escape.encode("ascii")
    for byte, escape in ESCAPE_TABLE.items()
}

_CONTROL_RE: Final = re.compile(rb'["\\\x00-\x1f]')

# Runs of well-formed 2, 3 and 4 byte sequences, or any other high byte
_MULTIBYTE_RE: Final = re.compile(
    rb"(?:[\xc2-\xdf][\x80-\xbf]"
    rb"|[\xe0-\xef][\x80-\xbf]{2}"
    rb"|[\xf0-\xf4][\x80-\xbf]{3})+"
    rb"|[\x80-\xff]"
)


def _as_bytes(data: Utf8Data) -> bytes:
    if isinstance(data, str):
        msg = "escaper input must be UTF-8 bytes, not str"
        raise TypeError(msg)
    return bytes(data)


def _replace_control(match: re.Match[bytes]) -> bytes:
    return _BYTE_ESCAPES[match.group()]


def _invalid_byte(byte: int, doc: bytes) -> EncodingError:
    return EncodingError(f"invalid utf8 byte: '\\x{byte:02x}'", doc, byte)


def escape_utf8(data: Utf8Data) -> str:
    """
    Escapes quote, backslash and control bytes, passing everything else through.

    Raises:
        EncodingError: If the input is not well-formed UTF-8
    """
    raw = _as_bytes(data)
    with ProfileContext("escape_utf8", len(raw)):
        escaped = _CONTROL_RE.sub(_replace_control, raw)
        try:
            return escaped.decode("utf-8")
        except UnicodeDecodeError as e:
            raise _invalid_byte(e.object[e.start], raw) from e


def escape_ascii(data: Utf8Data) -> str:
    """
    Escapes like escape_utf8 and folds every non-ASCII character to \\u form.

    Codepoints above U+FFFF become a surrogate pair, e.g. U+1D11E is
    emitted as \\ud834\\udd1e.

    Raises:
        EncodingError: On a byte that cannot start or continue a UTF-8 sequence
    """
    raw = _as_bytes(data)

    def fold(match: re.Match[bytes]) -> bytes:
        chunk = match.group()
        if len(chunk) == 1:
            raise _invalid_byte(chunk[0], raw)
        try:
            units = chunk.decode("utf-8").encode("utf-16-be").hex()
        except UnicodeDecodeError as e:
            # Overlong forms, encoded surrogates and codepoints past U+10FFFF
            raise _invalid_byte(chunk[e.start], raw) from e
        return b"".join(
            b"\\u" + units[i : i + 4].encode("ascii")
            for i in range(0, len(units), 4)
        )

    with ProfileContext("escape_ascii", len(raw)):
        escaped = _CONTROL_RE.sub(_replace_control, raw)
        return _MULTIBYTE_RE.sub(fold, escaped).decode("ascii")


__all__ = [
    "ESCAPE_TABLE",
    "escape_ascii",
    "escape_utf8",
]
