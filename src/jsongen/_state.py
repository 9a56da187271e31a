"""
Generator configuration and nesting limits.

A GeneratorState holds the formatting options used while rendering a value
tree, the nesting limit, and the depth a render starts at. States can be
built from a plain option mapping, partially reconfigured, and read or
written by option name through the closed Option set.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum
from typing import Any
from typing import Final
from typing import TypeAlias

from ._encoder import generate_text
from ._errors import ConfigurationTypeError
from ._errors import NestingLimitExceeded

logger = logging.getLogger(__name__)

DEFAULT_MAX_NESTING: Final = 100
DEFAULT_BUFFER_INITIAL_LENGTH: Final = 1024

OptionKey: TypeAlias = "str | Option"
OptionMapping: TypeAlias = "Mapping[OptionKey, Any]"


class Option(StrEnum):
    """Names of every recognized generator option."""

    INDENT = "indent"
    SPACE = "space"
    SPACE_BEFORE = "space_before"
    OBJECT_NL = "object_nl"
    ARRAY_NL = "array_nl"
    MAX_NESTING = "max_nesting"
    ALLOW_NAN = "allow_nan"
    ASCII_ONLY = "ascii_only"
    BUFFER_INITIAL_LENGTH = "buffer_initial_length"
    DEPTH = "depth"


_TEXT_OPTIONS: Final = frozenset(
    {
        Option.INDENT,
        Option.SPACE,
        Option.SPACE_BEFORE,
        Option.OBJECT_NL,
        Option.ARRAY_NL,
    }
)


def _lookup(name: OptionKey) -> Option:
    try:
        return Option(name)
    except ValueError:
        raise KeyError(name) from None


def _non_negative_int(option: Option, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"{option} must be an integer, not {type(value).__name__}"
        raise TypeError(msg)
    if value < 0:
        msg = f"{option} must be non-negative"
        raise ValueError(msg)
    return value


def _coerce(option: Option, value: Any) -> Any:
    match option:
        case Option.ALLOW_NAN | Option.ASCII_ONLY:
            return bool(value)
        case Option.MAX_NESTING | Option.DEPTH:
            return _non_negative_int(option, value)
        case Option.BUFFER_INITIAL_LENGTH:
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{option} must be an integer"
                raise TypeError(msg)
        case _ if option in _TEXT_OPTIONS and not isinstance(value, str):
            msg = f"{option} must be a string, not {type(value).__name__}"
            raise TypeError(msg)
    return value


class GeneratorState:
    """
    Mutable configuration governing one JSON generation.

    Attributes:
        indent: Unit inserted once per nesting level when pretty-printing
        space: Inserted after every ':' pair delimiter
        space_before: Inserted before every ':' pair delimiter
        object_nl: Line terminator for objects; empty disables indentation
        array_nl: Line terminator for arrays; empty disables indentation
        max_nesting: Deepest container nesting allowed, 0 for unlimited
        allow_nan: Whether NaN, Infinity and -Infinity may be generated
        ascii_only: Whether every non-ASCII character is \\u escaped
        depth: Nesting depth rendering starts from

    Rendering never writes to depth, so a state can be reused right after a
    failed generation. A state must not be reconfigured while another thread
    renders with it.
    """

    __slots__ = (
        "_buffer_initial_length",
        "_extra",
        "allow_nan",
        "array_nl",
        "ascii_only",
        "depth",
        "indent",
        "max_nesting",
        "object_nl",
        "space",
        "space_before",
    )

    def __init__(self, options: OptionMapping | None = None) -> None:
        self.indent = ""
        self.space = ""
        self.space_before = ""
        self.object_nl = ""
        self.array_nl = ""
        self.max_nesting = DEFAULT_MAX_NESTING
        self.allow_nan = False
        self.ascii_only = False
        self.depth = 0
        self._buffer_initial_length = DEFAULT_BUFFER_INITIAL_LENGTH
        self._extra: dict[Any, Any] = {}
        self.configure({} if options is None else options)

    @classmethod
    def from_configuration(cls, source: Any = None) -> GeneratorState:
        """
        Resolves any accepted configuration source into a state.

        A GeneratorState is returned as-is (not copied), a mapping builds a
        new configured state, and anything else yields library defaults.
        """
        if isinstance(source, GeneratorState):
            return source
        if isinstance(source, Mapping):
            return cls(source)
        return default_state()

    def configure(self, options: OptionMapping) -> GeneratorState:
        """
        Applies the options present in the mapping and returns self.

        Fields whose keys are absent keep their values, except max_nesting:
        an absent key resets it to 100, while an explicit falsy value
        (0, False, None) disables the limit.

        Raises:
            ConfigurationTypeError: If options is not a mapping
            TypeError: If an option value has the wrong type; the state
                is left unchanged
            ValueError: If max_nesting or depth is negative; the state
                is left unchanged
        """
        if not isinstance(options, Mapping):
            raise ConfigurationTypeError(type(options))

        # Nothing is assigned until every known option has been validated
        updates: dict[Option, Any] = {Option.MAX_NESTING: DEFAULT_MAX_NESTING}
        unknown: dict[Any, Any] = {}
        for key, value in options.items():
            try:
                option = Option(key)
            except ValueError:
                unknown[key] = value
                continue

            if option is Option.MAX_NESTING and not value:
                updates[option] = 0
            else:
                updates[option] = _coerce(option, value)

        for key in unknown:
            logger.debug("Ignoring unknown generator option %r", key)
        self._extra.update(unknown)
        for option, value in updates.items():
            setattr(self, option.value, value)
        return self

    merge = configure

    @property
    def buffer_initial_length(self) -> int:
        """Advisory output buffer size; non-positive assignments are ignored."""
        return self._buffer_initial_length

    @buffer_initial_length.setter
    def buffer_initial_length(self, length: int) -> None:
        if length > 0:
            self._buffer_initial_length = length

    @property
    def check_circular(self) -> bool:
        """Whether container nesting is limited at all."""
        return self.max_nesting != 0

    def check_nesting(self, depth: int | None = None) -> None:
        """
        Verifies one more container may open at the given depth.

        Args:
            depth: Depth of the enclosing container, defaults to self.depth

        Raises:
            NestingLimitExceeded: If depth + 1 exceeds max_nesting
        """
        if self.max_nesting == 0:
            return

        current = (self.depth if depth is None else depth) + 1
        if current > self.max_nesting:
            raise NestingLimitExceeded(current, self.max_nesting)

    def __getitem__(self, name: OptionKey) -> Any:
        return getattr(self, _lookup(name).value)

    def __setitem__(self, name: OptionKey, value: Any) -> None:
        option = _lookup(name)
        setattr(self, option.value, _coerce(option, value))

    def to_dict(self) -> dict[Any, Any]:
        """Returns every option, plus ignored unknown keys, as a plain dict."""
        result: dict[Any, Any] = {
            option.value: self[option] for option in Option
        }
        for key, value in self._extra.items():
            result.setdefault(key, value)
        return result

    def copy(self) -> GeneratorState:
        """Returns an independent state with the same options and depth."""
        return GeneratorState(self.to_dict())

    def generate(self, value: Any) -> str:
        """
        Generates JSON text for value using this state.

        Raises:
            EncodingError: If value holds data that cannot be expressed as JSON
            NestingLimitExceeded: If containers nest deeper than max_nesting
        """
        return generate_text(value, self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GeneratorState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{option.value}={self[option]!r}" for option in Option
        )
        return f"GeneratorState({fields})"


def default_state() -> GeneratorState:
    """Returns a fresh state holding library defaults."""
    return GeneratorState()


def pretty_state() -> GeneratorState:
    """Returns a fresh state configured for human-readable output."""
    return GeneratorState(
        {
            Option.INDENT: "  ",
            Option.SPACE: " ",
            Option.OBJECT_NL: "\n",
            Option.ARRAY_NL: "\n",
        }
    )


__all__ = [
    "DEFAULT_BUFFER_INITIAL_LENGTH",
    "DEFAULT_MAX_NESTING",
    "GeneratorState",
    "Option",
    "default_state",
    "pretty_state",
]
