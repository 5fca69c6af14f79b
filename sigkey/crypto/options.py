"""
- File:     sigkey/crypto/options.py
- Desc:     Derivation parameters: default constants and the DerivationOptions record
            that callers use to override output length, HKDF info labels and encoding widths
- Author:   Vasu Makadia
- License:  Apache License 2.0
"""


# Import required modules
from dataclasses import dataclass, replace as dataclass_replace

# Import custom modules
from sigkey.crypto.errors import InvalidOptionError


# Define global variables
DEFAULT_OUTPUT_LENGTH = 32      # 256-bit keys
DEFAULT_CHAIN_ID_WIDTH = 32     # chain id as uint256 big-endian
DEFAULT_TIMELOCK_WIDTH = 8      # timelock as uint64 big-endian
MIN_SIGNATURE_LENGTH = 32
# HKDF-SHA256 can expand at most 255 hash blocks
MAX_OUTPUT_LENGTH = 255 * 32
UINT64_MAX = 2**64 - 1

# Versioned domain separation labels, one per derivation stage
INFO_INITIAL_LABEL = b"sigkey/initial-key/v1"
INFO_TIMELOCK_LABEL = b"sigkey/timelock-key/v1"


def _check_positive_int (name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidOptionError(f"{name}: must be a positive integer, got {value!r}", field=name)


def _coerce_label (name: str, value) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise InvalidOptionError(f"{name}: must be a byte sequence, got {type(value).__name__}", field=name)
    return bytes(value)


@dataclass(frozen=True)
class DerivationOptions:
    """
    Brief:
        Immutable set of derivation parameters. Every field is validated on
        construction, so an instance that exists is always usable
    Parameters:
        output_length (int):        derived key length in bytes
        info_initial_label (bytes): HKDF info for the signature -> initial key stage
        info_timelock_label (bytes):HKDF info for the initial key -> timelock key stage
        chain_id_width (int):       byte width of the encoded chain id (HKDF salt)
        timelock_width (int):       byte width of the encoded timelock (HKDF salt)
    """
    output_length: int = DEFAULT_OUTPUT_LENGTH
    info_initial_label: bytes = INFO_INITIAL_LABEL
    info_timelock_label: bytes = INFO_TIMELOCK_LABEL
    chain_id_width: int = DEFAULT_CHAIN_ID_WIDTH
    timelock_width: int = DEFAULT_TIMELOCK_WIDTH

    def __post_init__ (self) -> None:
        _check_positive_int("outputLength", self.output_length)
        if self.output_length > MAX_OUTPUT_LENGTH:
            raise InvalidOptionError(
                f"outputLength: must be at most {MAX_OUTPUT_LENGTH} bytes, got {self.output_length}",
                field="outputLength",
            )
        _check_positive_int("chainIdWidth", self.chain_id_width)
        _check_positive_int("timelockWidth", self.timelock_width)
        # frozen: store labels as immutable bytes so instances stay hashable
        object.__setattr__(self, "info_initial_label", _coerce_label("infoInitialLabel", self.info_initial_label))
        object.__setattr__(self, "info_timelock_label", _coerce_label("infoTimelockLabel", self.info_timelock_label))
        if self.info_initial_label == self.info_timelock_label:
            raise InvalidOptionError(
                "infoTimelockLabel: must differ from infoInitialLabel", field="infoTimelockLabel"
            )

    def replace (self, **changes) -> "DerivationOptions":
        """Return a re-validated copy with the given fields changed."""
        return dataclass_replace(self, **changes)


DEFAULT_OPTIONS = DerivationOptions()
