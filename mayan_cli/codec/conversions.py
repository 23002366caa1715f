"""
Byte conversions behind the base58 and bytes32 subcommands.

Input formats:
  hex    hex string, optional leading "0x"
  bytes  comma-separated decimal byte values, e.g. "1, 2, 255"
  utf8   the text itself, UTF-8 encoded

The fixed-width helpers raise Bytes32LengthError on a length mismatch. That
error is an abort, not a MayanCliError, and the CLI lets it propagate.
"""

from __future__ import annotations

import binascii
from typing import Sequence

import base58

from mayan_cli.core.exceptions import Bytes32LengthError, InputFormatError

BYTES32_LEN = 32
HEX_PREFIX = "0x"

FORMAT_HEX = "hex"
FORMAT_BYTES = "bytes"
FORMAT_UTF8 = "utf8"

ALL_FORMATS = (FORMAT_HEX, FORMAT_BYTES, FORMAT_UTF8)
BINARY_FORMATS = (FORMAT_HEX, FORMAT_BYTES)


def parse_hex(text: str) -> bytes:
    """Decode a hex string, stripping a leading 0x."""
    if text.startswith(HEX_PREFIX):
        text = text[len(HEX_PREFIX):]
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as e:
        raise InputFormatError(f"Failed to decode hex string: {e}") from e


def parse_byte_list(text: str) -> bytes:
    """Parse "1,2,3" into bytes; each token must be an integer in 0..255."""
    out = bytearray()
    for token in text.split(","):
        token = token.strip()
        # ASCII digits only, with an optional "+"; no "_" separators or other scripts
        digits = token[1:] if token.startswith("+") else token
        if not (digits.isascii() and digits.isdigit()):
            raise InputFormatError(f"Failed to parse byte value: {token!r}")
        value = int(digits, 10)
        if not 0 <= value <= 255:
            raise InputFormatError(f"Failed to parse byte value: {token!r} is out of range")
        out.append(value)
    return bytes(out)


def check_format(fmt: str, allowed: Sequence[str], label: str = "format") -> str:
    """Normalize a format selector; raise InputFormatError if not allowed."""
    normalized = fmt.lower()
    if normalized not in allowed:
        raise InputFormatError(
            f"Invalid {label} '{fmt}'. Valid formats are: {', '.join(allowed)}"
        )
    return normalized


def parse_input(
    text: str,
    fmt: str,
    allowed: Sequence[str] = ALL_FORMATS,
    label: str = "format",
) -> bytes:
    """Turn CLI input into bytes according to a format selector."""
    normalized = check_format(fmt, allowed, label)
    if normalized == FORMAT_HEX:
        return parse_hex(text)
    if normalized == FORMAT_BYTES:
        return parse_byte_list(text)
    return text.encode("utf-8")


def base58_decode(text: str) -> bytes:
    try:
        return base58.b58decode(text)
    except ValueError as e:
        raise InputFormatError(f"Failed to decode base58 string: {e}") from e


def base58_encode(data: bytes) -> str:
    return base58.b58encode(data).decode("ascii")


def to_bytes32(text: str, fmt: str = FORMAT_HEX) -> bytes:
    """Parse input that must be exactly 32 bytes long."""
    data = parse_input(text, fmt, BINARY_FORMATS)
    if len(data) != BYTES32_LEN:
        raise Bytes32LengthError(
            f"Input must be exactly {BYTES32_LEN} bytes, got {len(data)} bytes. Input: {text}"
        )
    return data


def from_bytes32(text: str, input_format: str = FORMAT_HEX) -> bytes:
    """Parse input of at most 32 bytes and left-pad it with zeros to 32."""
    data = parse_input(text, input_format, BINARY_FORMATS, label="input format")
    if len(data) > BYTES32_LEN:
        raise Bytes32LengthError(
            f"Input is too long: {len(data)} bytes. Maximum is {BYTES32_LEN} bytes. Input: {text}"
        )
    return data.rjust(BYTES32_LEN, b"\x00")


def format_byte_list(data: bytes) -> str:
    """Render bytes as "[1, 2, 3]"."""
    return "[" + ", ".join(str(b) for b in data) + "]"
