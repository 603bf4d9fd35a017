"""
Chalawa - Symmetric key derivation.

Key = UTF-8 bytes of the first 32 characters of hex(SHA-512(material)).

The key is built from hex characters rather than raw digest bytes, which
leaves about 128 bits of entropy in the 256-bit AES key. Every Chalawa
implementation derives keys this way; changing it breaks decryption of
messages produced elsewhere.
"""

from cryptography.hazmat.primitives import hashes

from . import bigint
from .constants import KEY_HEX_CHARS


def derive_key(material: bytes) -> bytes:
    """
    Derive a 32-byte AES key from secret material.

    Args:
        material: Password bytes or decoded shared secret bytes

    Returns:
        32 ASCII bytes drawn from the hex alphabet
    """
    digest = hashes.Hash(hashes.SHA512())
    digest.update(material)
    return digest.finalize().hex()[:KEY_HEX_CHARS].encode('utf-8')


def derive_password_key(password: str) -> bytes:
    """Derive the AES key for password mode (single SHA-512 pass, no salt)."""
    return derive_key(password.encode('utf-8'))


def derive_shared_secret_key(shared_secret: str) -> bytes:
    """
    Derive the AES key for shared-secret mode.

    The hex shared secret is decoded back to bytes before hashing.

    Raises:
        DecodeError: If the shared secret is not valid hex
    """
    return derive_key(bigint.hex_to_bytes(shared_secret))
