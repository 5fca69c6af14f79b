"""
- File:     sigkey/__init__.py
- Desc:     Deterministic key derivation from a signature, a chain id and a timelock
- Author:   Vasu Makadia
- License:  Apache License 2.0
"""


from sigkey.crypto.errors import (
    EmptyHexError,
    EmptyInputError,
    InvalidHexError,
    InvalidOptionError,
    KeyDerivationError,
    NegativeValueError,
    NonIntegerError,
    NonNumericError,
    OddLengthError,
    RangeExceededError,
    SignatureTooShortError,
    WidthOverflowError,
    WrongKeyLengthError,
)
from sigkey.crypto.key_utils import create_initial_key_from_signature, derive_key_from_initial_key_and_timelock
from sigkey.crypto.options import DerivationOptions

__all__ = [
    "create_initial_key_from_signature",
    "derive_key_from_initial_key_and_timelock",
    "DerivationOptions",
    "KeyDerivationError",
    "EmptyInputError",
    "EmptyHexError",
    "OddLengthError",
    "InvalidHexError",
    "NonNumericError",
    "NegativeValueError",
    "NonIntegerError",
    "WidthOverflowError",
    "RangeExceededError",
    "SignatureTooShortError",
    "WrongKeyLengthError",
    "InvalidOptionError",
]
