"""
String escaping tests.

Validates the exact escape table for control, quote and backslash bytes,
UTF-8 passthrough, and ASCII folding with surrogate pairs.
"""

import pytest

from jsongen import ESCAPE_TABLE
from jsongen import EncodingError
from jsongen import escape_ascii
from jsongen import escape_utf8

SHORT_FORMS = {
    0x08: "\\b",
    0x09: "\\t",
    0x0A: "\\n",
    0x0C: "\\f",
    0x0D: "\\r",
}


@pytest.mark.parametrize("byte", range(0x20))
def test_control_bytes(byte: int) -> None:
    """
    Validates every control byte maps to its short or \\u00XX form.
    """
    expected = SHORT_FORMS.get(byte, "\\u%04x" % byte)
    assert escape_utf8(bytes([byte])) == expected
    assert escape_ascii(bytes([byte])) == expected
    assert ESCAPE_TABLE[byte] == expected


def test_quote_and_backslash() -> None:
    """
    Validates the two printable characters that need escaping.
    """
    assert escape_utf8(b'"') == '\\"'
    assert escape_utf8(b"\\") == "\\\\"
    assert escape_utf8(b'a"b\\c') == 'a\\"b\\\\c'


def test_escape_table_spot_checks() -> None:
    """
    Validates the irregular entries of the table literally.
    """
    assert escape_utf8(b"\x00\x07") == "\\u0000\\u0007"
    assert escape_utf8(b"\x0b") == "\\u000b"
    assert escape_utf8(b"\x0e\x1f") == "\\u000e\\u001f"
    assert len(ESCAPE_TABLE) == 34


def test_escape_table_is_read_only() -> None:
    with pytest.raises(TypeError):
        ESCAPE_TABLE[0x41] = "A"  # type: ignore[index]


def test_printable_ascii_untouched() -> None:
    """
    Validates ordinary characters, including '/', pass through.
    """
    text = bytes(range(0x20, 0x7F)).replace(b'"', b"").replace(b"\\", b"")
    assert escape_utf8(text) == text.decode("ascii")
    assert escape_ascii(text) == text.decode("ascii")


def test_utf8_passthrough() -> None:
    """
    Validates multi-byte sequences are left alone in passthrough mode.
    """
    assert escape_utf8("café 日本 𝄞".encode()) == "café 日本 𝄞"


def test_utf8_passthrough_rejects_malformed_bytes() -> None:
    """
    Validates passthrough output must still decode as UTF-8.
    """
    with pytest.raises(EncodingError) as exc_info:
        escape_utf8(b"ab\xffcd")
    assert exc_info.value.byte == 0xFF
    assert exc_info.value.doc == b"ab\xffcd"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("café", "caf\\u00e9"),
        ("日本", "\\u65e5\\u672c"),
        ("𝄞", "\\ud834\\udd1e"),
        ("\U0010ffff", "\\udbff\\udfff"),
        ('é\n"', '\\u00e9\\n\\"'),
    ],
)
def test_ascii_folding(text: str, expected: str) -> None:
    """
    Validates non-ASCII characters fold to \\u escapes, lowercase hex.
    """
    assert escape_ascii(text.encode("utf-8")) == expected


@pytest.mark.parametrize(
    ("data", "bad_byte"),
    [
        (b"\x80", 0x80),  # stray continuation byte
        (b"\xc0\x80", 0xC0),  # overlong lead byte
        (b"\xc1\xbf", 0xC1),
        (b"a\xc3", 0xC3),  # truncated two-byte sequence
        (b"\xe2\x82", 0xE2),  # truncated three-byte sequence
        (b"\xed\xa0\x80", 0xED),  # encoded surrogate
        (b"\xf4\x90\x80\x80", 0xF4),  # past U+10FFFF
        (b"\xf5\x80\x80\x80", 0xF5),
        (b"\xff", 0xFF),
    ],
)
def test_ascii_rejects_invalid_bytes(data: bytes, bad_byte: int) -> None:
    """
    Validates bytes that cannot begin or continue UTF-8 abort escaping.
    """
    with pytest.raises(EncodingError, match="invalid utf8 byte") as exc_info:
        escape_ascii(data)
    assert exc_info.value.byte == bad_byte


def test_accepts_bytes_like_input() -> None:
    data = "é".encode()
    assert escape_ascii(bytearray(data)) == "\\u00e9"
    assert escape_utf8(memoryview(data)) == "é"


def test_rejects_str_input() -> None:
    """
    Validates escapers only take encoded bytes.
    """
    with pytest.raises(TypeError, match="UTF-8 bytes"):
        escape_utf8("text")  # type: ignore[arg-type]
