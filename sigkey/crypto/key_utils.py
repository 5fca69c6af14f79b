"""
- File:     sigkey/crypto/key_utils.py
- Desc:     Cryptographic key derivation utilities. Converts a signature bound to a chain id
            into an initial key, and an initial key bound to a timelock into a child key,
            using HKDF + SHA256 with a distinct info label per stage
- Author:   Vasu Makadia
- License:  Apache License 2.0
"""


# Import required modules
from typing import Optional, Union
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.backends import default_backend

# Import custom modules
from sigkey.crypto.errors import RangeExceededError, SignatureTooShortError, WrongKeyLengthError
from sigkey.crypto.options import (
    DEFAULT_OPTIONS,
    DEFAULT_TIMELOCK_WIDTH,
    MIN_SIGNATURE_LENGTH,
    UINT64_MAX,
    DerivationOptions,
)
from sigkey.encoding.byte_utils import bytes_to_hex, int_to_fixed_width, parse_numeric_id, to_bytes


BytesInput = Union[str, bytes, bytearray, memoryview]
NumericInput = Union[str, int, float]


def hkdf_sha256 (secret: bytes, salt: bytes, info: bytes, length: int) -> bytes:
    """
    Brief:
        Single HKDF extract-then-expand pass (RFC 5869) over SHA256
    Parameters:
        secret (bytes): input keying material
        salt (bytes):   HKDF salt
        info (bytes):   context / domain separation label
        length (int):   number of output bytes
    Returns:
        bytes:          derived key material
    """
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=length,
        salt=salt,
        info=info,
        backend=default_backend()
    )
    return hkdf.derive(secret)


def derive_initial_key_bytes (
        signature: BytesInput,
        chain_id: NumericInput,
        options: Optional[DerivationOptions] = None
) -> bytes:
    """
    Brief:
        Derive the raw initial key for a signature on a given chain
    Parameters:
        signature (str | bytes):    signature as hex text or raw bytes, at least 32 bytes
        chain_id (str | int):       numeric chain id (decimal or 0x-hex text, int)
        options (DerivationOptions):overrides, defaults when None
    Returns:
        bytes:                      options.output_length bytes
    """
    opts = options or DEFAULT_OPTIONS
    sig_bytes = to_bytes(signature, field="signature")
    if len(sig_bytes) < MIN_SIGNATURE_LENGTH:
        raise SignatureTooShortError(
            f"signature: must be at least {MIN_SIGNATURE_LENGTH} bytes, got {len(sig_bytes)}",
            field="signature",
            expected=MIN_SIGNATURE_LENGTH,
            actual=len(sig_bytes),
        )

    chain_value = parse_numeric_id(chain_id, field="chainId")
    # numeric value, not its spelling, decides the salt
    chain_salt = int_to_fixed_width(chain_value, opts.chain_id_width, field="chainId")

    return hkdf_sha256(sig_bytes, chain_salt, opts.info_initial_label, opts.output_length)


def derive_timelock_key_bytes (
        initial_key: BytesInput,
        timelock: NumericInput,
        options: Optional[DerivationOptions] = None
) -> bytes:
    """
    Brief:
        Derive the raw child key for an initial key unlocked at a given timelock
    Parameters:
        initial_key (str | bytes):  output of the initial stage, exactly output_length bytes
        timelock (str | int | float): unix timestamp or any other unlock counter
        options (DerivationOptions):overrides, defaults when None
    Returns:
        bytes:                      options.output_length bytes
    """
    opts = options or DEFAULT_OPTIONS
    key_bytes = to_bytes(initial_key, field="initialKey")
    if len(key_bytes) != opts.output_length:
        raise WrongKeyLengthError(
            f"initialKey: must be exactly {opts.output_length} bytes, got {len(key_bytes)}",
            field="initialKey",
            expected=opts.output_length,
            actual=len(key_bytes),
        )

    timelock_value = parse_numeric_id(timelock, field="timelock")
    if opts.timelock_width == DEFAULT_TIMELOCK_WIDTH and timelock_value > UINT64_MAX:
        raise RangeExceededError(
            f"timelock: {timelock_value} exceeds the uint64 maximum {UINT64_MAX}", field="timelock"
        )
    timelock_salt = int_to_fixed_width(timelock_value, opts.timelock_width, field="timelock")

    return hkdf_sha256(key_bytes, timelock_salt, opts.info_timelock_label, opts.output_length)


def create_initial_key_from_signature (
        signature: BytesInput,
        chain_id: NumericInput,
        options: Optional[DerivationOptions] = None
) -> str:
    """
    Brief:
        Create an initial key from a signature and a chain id
    Parameters:
        signature (str | bytes):    any chain's signature as hex text or raw bytes
        chain_id (str | int):       numeric chain id, e.g. "1", "0x1", 137
        options (DerivationOptions):overrides, defaults when None
    Returns:
        str:    0x-prefixed lowercase hex, 2 * output_length + 2 characters
    """
    return bytes_to_hex(derive_initial_key_bytes(signature, chain_id, options))


def derive_key_from_initial_key_and_timelock (
        initial_key: BytesInput,
        timelock: NumericInput,
        options: Optional[DerivationOptions] = None
) -> str:
    """
    Brief:
        Derive a key from an initial key and a timelock value
    Parameters:
        initial_key (str | bytes):  value returned by create_initial_key_from_signature
        timelock (str | int | float): decimal or 0x-hex text, int, or integral float
        options (DerivationOptions):must match the options used for the initial key
    Returns:
        str:    0x-prefixed lowercase hex, 2 * output_length + 2 characters
    """
    return bytes_to_hex(derive_timelock_key_bytes(initial_key, timelock, options))
