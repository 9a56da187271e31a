"""
Raw binary payloads wrapped as tagged JSON objects.

Bytes that are not text are carried through JSON as
{"json_class": "bytes", "raw": [b0, b1, ...]} and rebuilt from that form.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any
from typing import Final

from ._errors import EncodingError

CREATE_ID: Final = "json_class"
RAW_KEY: Final = "raw"

_RAW_TYPES: Final = MappingProxyType({"bytes": bytes, "bytearray": bytearray})


def raw_object(data: bytes | bytearray) -> dict[str, Any]:
    """Wraps a byte sequence as a tagged object holding one integer per byte."""
    if isinstance(data, bytearray):
        tag = "bytearray"
    elif isinstance(data, bytes):
        tag = "bytes"
    else:
        msg = f"raw objects wrap bytes or bytearray, not {type(data).__name__}"
        raise TypeError(msg)
    return {CREATE_ID: tag, RAW_KEY: list(data)}


def from_raw_object(
    obj: Mapping[str, Any], expected: str | None = None
) -> bytes | bytearray:
    """
    Rebuilds the byte sequence held by a raw object.

    Args:
        obj: Mapping produced by raw_object, typically after a JSON round trip
        expected: Binary type name the tag must carry, any known type if None

    Returns:
        bytes or bytearray, matching the object's tag

    Raises:
        EncodingError: If the tag is wrong or an element is not a byte value
    """
    if not isinstance(obj, Mapping):
        msg = f"raw object must be a mapping, not {type(obj).__name__}"
        raise EncodingError(msg)

    tag = obj.get(CREATE_ID)
    raw_type = _RAW_TYPES.get(tag) if isinstance(tag, str) else None
    if raw_type is None:
        raise EncodingError(f"unknown raw object type: {tag!r}")
    if expected is not None and tag != expected:
        raise EncodingError(
            f"expected raw object of type {expected!r}, got {tag!r}"
        )

    values = obj.get(RAW_KEY)
    if not isinstance(values, list | tuple):
        raise EncodingError(f"raw object {RAW_KEY!r} must be an array")

    for index, item in enumerate(values):
        if isinstance(item, bool) or not isinstance(item, int):
            raise EncodingError(
                f"raw element {index} is not an integer: {item!r}"
            )
        if not 0 <= item <= 0xFF:
            raise EncodingError(f"raw element {index} out of range: {item}")

    return raw_type(values)


__all__ = [
    "CREATE_ID",
    "RAW_KEY",
    "from_raw_object",
    "raw_object",
]
