"""
Rendering of value trees into JSON text.

The renderer walks the tree depth-first with an explicit stack of open
containers rather than Python recursion, so unlimited nesting never hits the
interpreter recursion limit. Nesting depth lives in the stack frames; the
GeneratorState passed in is only read.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any
from typing import Final
from typing import Protocol
from typing import runtime_checkable

from ._errors import EncodingError
from ._errors import JSONGeneratorError
from ._escape import escape_ascii
from ._escape import escape_utf8
from ._profile import ProfileContext
from ._raw import raw_object

if TYPE_CHECKING:
    from ._state import GeneratorState

logger = logging.getLogger(__name__)

_NOTHING: Final = object()


@runtime_checkable
class JsonRenderable(Protocol):
    """
    Values that render themselves as JSON text.

    to_json receives a state whose depth is the nesting depth the value sits
    at, and must return complete, already quoted and escaped JSON text.
    """

    def to_json(self, state: GeneratorState) -> str: ...


@dataclass(slots=True)
class _Frame:
    """An open container on the render stack."""

    items: Iterator[Any]
    depth: int
    newline: str
    close: str
    is_mapping: bool
    first: bool = True


def _render_text(text: str, state: GeneratorState) -> str:
    """Encode a str as a quoted JSON string."""
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        msg = f"source sequence {text!r} is illegal/malformed utf-8"
        raise EncodingError(msg, text) from e
    body = escape_ascii(data) if state.ascii_only else escape_utf8(data)
    return f'"{body}"'


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is True:
        return "true"
    if key is False:
        return "false"
    if key is None:
        return "null"
    return str(key)


def _render_int(value: int) -> str:
    try:
        return int.__repr__(value)
    except ValueError as e:
        # Beyond sys.get_int_max_str_digits()
        raise EncodingError(f"integer too large to convert: {e}") from e


def _render_float(value: float, state: GeneratorState) -> str:
    """Encode numeric values with JSON compliance."""
    if math.isnan(value):
        token = "NaN"
    elif math.isinf(value):
        token = "Infinity" if value > 0 else "-Infinity"
    else:
        return float.__repr__(value)

    if not state.allow_nan:
        raise EncodingError(f"{token} not allowed in JSON", token)
    return token


def _render_extension(
    value: JsonRenderable, state: GeneratorState, depth: int
) -> str:
    nested = state.copy()
    nested.depth = depth
    text = value.to_json(nested)
    if not isinstance(text, str):
        msg = (
            f"{type(value).__name__}.to_json returned "
            f"{type(text).__name__}, not str"
        )
        raise EncodingError(msg)
    return text


def _open_container(
    value: Any, state: GeneratorState, depth: int, parts: list[str]
) -> _Frame | None:
    """
    Write a scalar to parts, or open a container and return its frame.

    depth is the nesting depth of the container holding value.
    """
    if isinstance(value, bytes | bytearray):
        value = raw_object(value)

    if value is None:
        parts.append("null")
    elif value is True:
        parts.append("true")
    elif value is False:
        parts.append("false")
    elif isinstance(value, str):
        parts.append(_render_text(value, state))
    elif isinstance(value, int):
        parts.append(_render_int(value))
    elif isinstance(value, float):
        parts.append(_render_float(value, state))
    elif isinstance(value, Mapping):
        state.check_nesting(depth)
        parts.append("{" + state.object_nl)
        return _Frame(
            iter(value.items()), depth + 1, state.object_nl, "}", True
        )
    elif isinstance(value, list | tuple):
        state.check_nesting(depth)
        parts.append("[" + state.array_nl)
        return _Frame(iter(value), depth + 1, state.array_nl, "]", False)
    elif isinstance(value, JsonRenderable) and not isinstance(value, type):
        # A class only exposes its instances' unbound to_json
        parts.append(_render_extension(value, state, depth))
    else:
        parts.append(_render_text(str(value), state))
    return None


def render(value: Any, state: GeneratorState, depth: int | None = None) -> str:
    """
    Render a value tree as JSON text.

    Args:
        value: Root of the tree to render
        state: Formatting options and nesting limit
        depth: Nesting depth the root sits at, defaults to state.depth

    Raises:
        EncodingError: If a value cannot be expressed as JSON
        NestingLimitExceeded: If containers nest deeper than state.max_nesting
    """
    parts: list[str] = []
    stack: list[_Frame] = []
    pending = value
    level = state.depth if depth is None else depth

    with ProfileContext("render"):
        while True:
            if pending is not _NOTHING:
                frame = _open_container(pending, state, level, parts)
                if frame is not None:
                    stack.append(frame)
                pending = _NOTHING

            if not stack:
                break

            frame = stack[-1]
            entry = next(frame.items, _NOTHING)
            if entry is _NOTHING:
                stack.pop()
                parts.append(frame.newline)
                if frame.newline:
                    parts.append(state.indent * (frame.depth - 1))
                parts.append(frame.close)
                continue

            if not frame.first:
                parts.append("," + frame.newline)
            frame.first = False
            if frame.newline:
                parts.append(state.indent * frame.depth)

            if frame.is_mapping:
                key, pending = entry
                parts.append(_render_text(_key_text(key), state))
                parts.append(state.space_before + ":" + state.space)
            else:
                pending = entry
            level = frame.depth

    return "".join(parts)


def _validate_output(text: str, state: GeneratorState) -> None:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        msg = f"source sequence {text!r} is illegal/malformed utf-8"
        raise EncodingError(msg, text) from e
    if state.ascii_only and not text.isascii():
        msg = f"source sequence {text!r} is not ASCII"
        raise EncodingError(msg, text)


def generate_text(value: Any, state: GeneratorState) -> str:
    """Render value and check the result is well-formed before returning it."""
    try:
        with ProfileContext("generate"):
            text = render(value, state)
            _validate_output(text, state)
    except JSONGeneratorError as e:
        logger.debug("JSON generation failed: %s: %s", type(e).__name__, e)
        raise
    return text


__all__ = [
    "JsonRenderable",
    "generate_text",
    "render",
]
