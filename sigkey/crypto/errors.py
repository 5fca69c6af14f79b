"""
- File:     sigkey/crypto/errors.py
- Desc:     Error taxonomy for input encoding and key derivation failures.
            One exception class per validation condition, all rooted at KeyDerivationError
- Author:   Vasu Makadia
- License:  Apache License 2.0
"""


# Import required modules
from typing import Optional


class KeyDerivationError(ValueError):
    """
    Brief:
        Base class for every local validation failure raised by sigkey
    Parameters:
        message (str):  human readable description, already naming the field
        field (str):    name of the offending input (e.g. "signature", "chainId")
    """
    def __init__ (self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class EmptyInputError(KeyDerivationError):
    """Hex text is empty once the 0x prefix is removed."""


class EmptyHexError(EmptyInputError):
    """A numeric id string is just the 0x prefix with no digits."""


class OddLengthError(KeyDerivationError):
    """Hex text has an odd number of digits."""


class InvalidHexError(KeyDerivationError):
    """Hex text contains a character outside [0-9a-fA-F]."""


class NonNumericError(KeyDerivationError):
    """Value is neither decimal digits, 0x-hex, nor an integer."""


class NegativeValueError(KeyDerivationError):
    """Integer or numeric text denotes a value below zero."""


class NonIntegerError(KeyDerivationError):
    """Float value is fractional, NaN or infinite."""


class WidthOverflowError(KeyDerivationError, OverflowError):
    """Integer does not fit in the requested number of bytes."""


class RangeExceededError(KeyDerivationError):
    """Value is outside a supported numeric range (safe float range, uint64 ceiling)."""


class _LengthError(KeyDerivationError):
    # carries expected vs actual byte length
    def __init__ (self, message: str, field: Optional[str] = None, expected: int = 0, actual: int = 0):
        super().__init__(message, field=field)
        self.expected = expected
        self.actual = actual


class SignatureTooShortError(_LengthError):
    """Signature is shorter than the minimum accepted length."""


class WrongKeyLengthError(_LengthError):
    """Initial key length differs from the configured output length."""


class InvalidOptionError(KeyDerivationError):
    """A DerivationOptions field is not usable (wrong type, non-positive, clashing labels)."""
