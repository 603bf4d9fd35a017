"""
Chalawa - Big integer arithmetic and encodings.

Modular exponentiation, uniform sampling of large integers from the
operating system CSPRNG, and the hex/bytes/int conversions shared by every
Chalawa implementation.

Encoding rules:
- Hex output is lowercase, without ``0x`` prefix, minimal width
- Hex input is strict: only ``[0-9a-fA-F]``, no whitespace
- Odd-length hex is left-padded with a single ``0`` nibble before byte conversion
"""

import logging
import re
import secrets

from .errors import DecodeError, ErrorCode, KeyGenerationError

logger = logging.getLogger(__name__)

_HEX_PATTERN = re.compile(r"[0-9a-fA-F]*")


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Compute ``base ** exponent % modulus``.

    Args:
        base: Base value
        exponent: Non-negative exponent
        modulus: Modulus greater than 1

    Returns:
        Result in ``[0, modulus)``

    Raises:
        ValueError: If modulus <= 1 or exponent is negative
    """
    if modulus <= 1:
        raise ValueError("Modulus must be greater than 1")
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    return pow(base, exponent, modulus)


def random_int_in_range(low: int, high: int, bits: int, max_attempts: int) -> int:
    """
    Sample an integer uniformly from ``[low, high]`` by rejection.

    Each attempt draws ``bits`` random bits from the ``secrets`` module
    and is accepted only when it falls inside the range.

    Args:
        low: Inclusive lower bound
        high: Inclusive upper bound
        bits: Number of random bits per draw (must cover ``high``)
        max_attempts: Number of draws before giving up

    Returns:
        Integer in ``[low, high]``

    Raises:
        ValueError: If the range is empty or ``bits`` cannot reach ``low``
        KeyGenerationError: If every draw was rejected
    """
    if low > high:
        raise ValueError("Empty sampling range")
    if low.bit_length() > bits:
        raise ValueError("Bit width too small for sampling range")

    for attempt in range(1, max_attempts + 1):
        candidate = secrets.randbits(bits)
        if low <= candidate <= high:
            if attempt > 1:
                logger.debug(f"Random sample accepted after {attempt} attempts")
            return candidate

    logger.warning(f"Random sampling exhausted {max_attempts} attempts")
    raise KeyGenerationError(
        ErrorCode.E501_SAMPLING_EXHAUSTED,
        f"No value in range after {max_attempts} attempts",
        {"max_attempts": max_attempts, "bits": bits},
    )


def _normalize_hex(value: str) -> str:
    if not isinstance(value, str) or not _HEX_PATTERN.fullmatch(value):
        raise DecodeError(ErrorCode.E202_INVALID_HEX, "Invalid hex string")
    if len(value) % 2:
        value = "0" + value
    return value


def hex_to_bytes(value: str) -> bytes:
    """
    Decode a hex string to bytes, left-padding odd-length input.

    Raises:
        DecodeError: If the string contains non-hex characters
    """
    return bytes.fromhex(_normalize_hex(value))


def hex_to_int(value: str) -> int:
    """
    Parse a hex string as a non-negative integer.

    Raises:
        DecodeError: If the string is empty or not hex
    """
    if not value:
        raise DecodeError(ErrorCode.E202_INVALID_HEX, "Empty hex string")
    return int(_normalize_hex(value), 16)


def int_to_hex(value: int) -> str:
    """Encode a non-negative integer as lowercase minimal-width hex."""
    if value < 0:
        raise ValueError("Negative integers have no hex encoding")
    return format(value, "x")


def int_to_bytes(value: int) -> bytes:
    """Big-endian minimal-width bytes of a non-negative integer (``0`` -> ``b'\\x00'``)."""
    return hex_to_bytes(int_to_hex(value))


def bytes_to_int(data: bytes) -> int:
    """Interpret bytes as a big-endian unsigned integer."""
    return int.from_bytes(data, "big")
