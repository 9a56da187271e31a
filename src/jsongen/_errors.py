"""
Exception hierarchy for JSON generation failures.

Every failure aborts the whole generate call; errors carry the offending
byte, depth, or configuration type so callers can report precisely.
"""

from __future__ import annotations


class JSONGeneratorError(ValueError):
    """Base class for every error raised while generating JSON text."""


class EncodingError(JSONGeneratorError):
    """
    Handles values that cannot be expressed as JSON text.

    Raised for invalid UTF-8 input, non-finite floats without allow_nan,
    malformed raw binary objects, and output that fails re-validation.
    """

    def __init__(
        self, msg: str, doc: str | bytes = "", byte: int | None = None
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if byte is not None and not 0 <= byte <= 0xFF:
            raise ValueError("byte must be in range 0-255")

        self.msg = msg
        self.doc = doc
        self.byte = byte
        super().__init__(msg)


class NestingLimitExceeded(JSONGeneratorError):
    """Raised when a container would open past the configured max_nesting."""

    def __init__(self, depth: int, max_nesting: int) -> None:
        self.depth = depth
        self.max_nesting = max_nesting
        super().__init__(f"nesting of {depth} is too deep")


class ConfigurationTypeError(TypeError):
    """Raised when a configuration source cannot be read as an option mapping."""

    def __init__(self, source_type: type) -> None:
        self.source_type = source_type
        super().__init__(
            f"can't convert {source_type.__name__} into a mapping"
        )


__all__ = [
    "ConfigurationTypeError",
    "EncodingError",
    "JSONGeneratorError",
    "NestingLimitExceeded",
]
