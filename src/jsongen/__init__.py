"""
Pure Python JSON text generator.

Converts trees of None, bool, int, float, str, list/tuple, mappings, bytes and
self-rendering objects into JSON text, under a reusable GeneratorState that
controls formatting, ASCII escaping, non-finite floats and nesting limits.
"""

from collections.abc import Mapping
from typing import Any
from typing import TypeAlias

from ._encoder import JsonRenderable
from ._encoder import render
from ._errors import ConfigurationTypeError
from ._errors import EncodingError
from ._errors import JSONGeneratorError
from ._errors import NestingLimitExceeded
from ._escape import ESCAPE_TABLE
from ._escape import escape_ascii
from ._escape import escape_utf8
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._raw import CREATE_ID
from ._raw import from_raw_object
from ._raw import raw_object
from ._state import GeneratorState
from ._state import Option
from ._state import default_state
from ._state import pretty_state

__version__ = "0.1.0"

# Anything GeneratorState.from_configuration accepts
Configuration: TypeAlias = GeneratorState | Mapping[str, Any] | None


def generate(obj: Any, config: Configuration = None) -> str:
    """
    Generates JSON text for obj.

    config may be a GeneratorState (used as-is), an option mapping, or None
    for defaults. The text is re-validated as UTF-8 (ASCII when ascii_only is
    set) before it is returned.

    Raises:
        EncodingError: If obj holds data that cannot be expressed as JSON
        NestingLimitExceeded: If containers nest deeper than max_nesting
    """
    return GeneratorState.from_configuration(config).generate(obj)


def _merged(base: GeneratorState, config: Configuration) -> GeneratorState:
    if isinstance(config, GeneratorState):
        return base.configure(config.to_dict())
    if config is not None:
        return base.configure(config)
    return base


def pretty_generate(obj: Any, config: Configuration = None) -> str:
    """
    Generates indented, one-entry-per-line JSON text for obj.

    Options in config override the two-space pretty defaults.

    Raises:
        ConfigurationTypeError: If config is neither a state nor a mapping
    """
    return _merged(pretty_state(), config).generate(obj)


def fast_generate(obj: Any, config: Configuration = None) -> str:
    """
    Generates JSON text for obj without any nesting limit.

    The caller is responsible for bounding the depth of obj.

    Raises:
        ConfigurationTypeError: If config is neither a state nor a mapping
    """
    state = _merged(default_state(), config)
    state.max_nesting = 0
    return state.generate(obj)


def to_json_raw(data: bytes | bytearray, config: Configuration = None) -> str:
    """Generates the raw-object JSON text carrying a byte sequence."""
    return generate(raw_object(data), config)


__all__ = [
    "CREATE_ID",
    "ESCAPE_TABLE",
    "Configuration",
    "ConfigurationTypeError",
    "EncodingError",
    "GeneratorState",
    "HotPathStats",
    "JSONGeneratorError",
    "JsonRenderable",
    "NestingLimitExceeded",
    "Option",
    "clear_hot_path_stats",
    "default_state",
    "escape_ascii",
    "escape_utf8",
    "fast_generate",
    "from_raw_object",
    "generate",
    "get_hot_path_stats",
    "pretty_generate",
    "pretty_state",
    "raw_object",
    "render",
    "to_json_raw",
]
