"""
- File:     sigkey/encoding/byte_utils.py
- Desc:     Canonical byte encoding of signature, chain id and timelock inputs.
            Strict hex decoding, numeric id parsing and fixed-width big-endian
            integer encoding, so every input maps to exactly one byte string
- Author:   Vasu Makadia
- License:  Apache License 2.0
"""


# Import required modules
import math
import re
from functools import singledispatch

# Import custom modules
from sigkey.crypto.errors import (
    EmptyHexError,
    EmptyInputError,
    InvalidHexError,
    InvalidOptionError,
    NegativeValueError,
    NonIntegerError,
    NonNumericError,
    OddLengthError,
    RangeExceededError,
    WidthOverflowError,
)

# Define global variables
HEX_PREFIXES = ("0x", "0X")
# largest integer a double holds exactly (2**53 - 1)
MAX_SAFE_FLOAT_INT = 9007199254740991
# CPython's default int-string limit, applied on every interpreter version
MAX_DECIMAL_DIGITS = 4300

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
_DECIMAL_DIGITS = re.compile(r"[0-9]+")


def strip_hex_prefix (text: str) -> str:
    """Drop a single leading 0x / 0X if present."""
    if text.startswith(HEX_PREFIXES):
        return text[2:]
    return text


def hex_to_bytes (text: str, field: str = "value") -> bytes:
    """
    Brief:
        Strictly decode hex text into bytes. No whitespace trimming, no padding,
        no truncation: exactly two digits per output byte
    Parameters:
        text (str):     hex digits with optional 0x / 0X prefix
        field (str):    name of the input, used in error messages
    Returns:
        bytes:          decoded bytes, len(text without prefix) // 2 long
    """
    digits = strip_hex_prefix(text)
    if not digits:
        raise EmptyInputError(f"{field}: hex string is empty", field=field)
    if len(digits) % 2 != 0:
        raise OddLengthError(
            f"{field}: hex string must have even length, got {len(digits)} digits", field=field
        )
    if _HEX_DIGITS.fullmatch(digits) is None:
        raise InvalidHexError(f"{field}: hex string contains invalid characters", field=field)
    return bytes.fromhex(digits)


@singledispatch
def to_bytes (value, field: str = "value") -> bytes:
    """
    Brief:
        Coerce hex text or a binary buffer into bytes. One handler per accepted
        input type is registered below
    Parameters:
        value (str | bytes | bytearray | memoryview):   input to coerce
        field (str):                                    name of the input, used in error messages
    Returns:
        bytes:  the byte sequence the input denotes
    """
    raise TypeError(f"{field}: expected hex string or bytes, got {type(value).__name__}")


@to_bytes.register(str)
def _str_to_bytes (value: str, field: str = "value") -> bytes:
    return hex_to_bytes(value, field=field)


@to_bytes.register(bytes)
@to_bytes.register(bytearray)
@to_bytes.register(memoryview)
def _buffer_to_bytes (value, field: str = "value") -> bytes:
    return bytes(value)


@singledispatch
def parse_numeric_id (value, field: str = "value") -> int:
    """
    Brief:
        Parse a chain id or timelock into a non-negative integer. Accepts python
        ints (any size), integral floats inside the exact double range, and text
        that is either pure decimal digits or 0x-prefixed hex
    Parameters:
        value (int | float | str):  the id to parse
        field (str):                name of the input, used in error messages
    Returns:
        int:    the numeric value, >= 0
    """
    raise NonNumericError(
        f"{field}: must be an integer, decimal string or 0x-hex string, got {type(value).__name__}",
        field=field,
    )


@parse_numeric_id.register(bool)
def _parse_bool (value: bool, field: str = "value") -> int:
    # bool is an int subclass but never a meaningful id
    raise NonNumericError(f"{field}: must be numeric, got a boolean", field=field)


@parse_numeric_id.register(int)
def _parse_int (value: int, field: str = "value") -> int:
    if value < 0:
        raise NegativeValueError(f"{field}: must not be negative, got {value}", field=field)
    return value


@parse_numeric_id.register(float)
def _parse_float (value: float, field: str = "value") -> int:
    if not math.isfinite(value) or not value.is_integer():
        raise NonIntegerError(f"{field}: must be an integer, got {value!r}", field=field)
    if value < 0:
        raise NegativeValueError(f"{field}: must not be negative, got {value!r}", field=field)
    if value > MAX_SAFE_FLOAT_INT:
        raise RangeExceededError(
            f"{field}: float {value!r} exceeds the exact integer range (max {MAX_SAFE_FLOAT_INT}); "
            "pass an int or a string instead",
            field=field,
        )
    return int(value)


@parse_numeric_id.register(str)
def _parse_text (value: str, field: str = "value") -> int:
    text = value.strip()
    if text.startswith(HEX_PREFIXES):
        digits = text[2:]
        if not digits:
            raise EmptyHexError(f"{field}: hex number is empty after 0x prefix", field=field)
        if _HEX_DIGITS.fullmatch(digits) is None:
            raise InvalidHexError(f"{field}: invalid hex number {value!r}", field=field)
        return int(digits, 16)

    if _DECIMAL_DIGITS.fullmatch(text) is None:
        raise NonNumericError(
            f"{field}: must be numeric (decimal digits or 0x-hex), got {value!r}", field=field
        )
    if len(text) > MAX_DECIMAL_DIGITS:
        raise RangeExceededError(
            f"{field}: decimal number is too long ({len(text)} digits, max {MAX_DECIMAL_DIGITS})", field=field
        )
    try:
        return int(text, 10)
    except ValueError as e:
        # a lower sys.set_int_max_str_digits() limit set by the host application
        raise RangeExceededError(f"{field}: decimal number is too long ({len(text)} digits)", field=field) from e


def int_to_fixed_width (value: int, width: int, field: str = "value") -> bytes:
    """
    Brief:
        Encode a non-negative integer as exactly `width` big-endian bytes,
        zero padded on the left
    Parameters:
        value (int):    integer to encode
        width (int):    output length in bytes
        field (str):    name of the input, used in error messages
    Returns:
        bytes:          `width` bytes, most significant first
    """
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise InvalidOptionError(f"{field}: width must be a positive integer, got {width!r}", field=field)
    if value < 0:
        raise NegativeValueError(f"{field}: must not be negative, got {value}", field=field)
    if value.bit_length() > 8 * width:
        raise WidthOverflowError(
            f"{field}: value {value} does not fit in {width} bytes", field=field
        )
    return value.to_bytes(width, "big")


def bytes_to_hex (data: bytes) -> str:
    """Render bytes as 0x-prefixed lowercase hex."""
    return "0x" + data.hex()
