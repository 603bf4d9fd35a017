"""
Chalawa - Diffie-Hellman key agreement.

Finite-field Diffie-Hellman over a fixed 2048-bit MODP group with
generator 2. Keys travel as lowercase hex strings so that any
implementation with big integers and SHA-2 can take part in the exchange.

Key agreement flow:
1. Each party calls generate_key_pair() (optionally password-enhanced)
2. Public keys are exchanged over a channel chosen by the caller
3. Each party calls compute_shared_secret() with its own private key
   and the other party's public key; both obtain the same hex digest
4. The shared secret feeds SharedSecretCipher for every message

Password enhancement mixes the password and the current time in
milliseconds into the private key. Two calls with the same password yield
different key pairs; it is ephemeral entropy, not a password-to-key mapping.
"""

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from cryptography.hazmat.primitives import hashes

from . import bigint
from .constants import (
    DH_GENERATOR,
    DH_PRIME_HEX,
    KEY_PREVIEW_CHARS,
    KEYGEN_MAX_ATTEMPTS,
    PUBLIC_KEY_MAX_BYTES,
    PUBLIC_KEY_MIN_BYTES,
)
from .errors import DecodeError, ErrorCode, InvalidKeyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DHGroup:
    """
    Immutable Diffie-Hellman group parameters.

    Attributes:
        prime: Safe prime modulus
        generator: Group generator
    """
    prime: int
    generator: int

    @property
    def bits(self) -> int:
        return self.prime.bit_length()


MODP_2048 = DHGroup(prime=int(DH_PRIME_HEX, 16), generator=DH_GENERATOR)


@dataclass(frozen=True)
class KeyPair:
    """
    Diffie-Hellman key pair encoded as lowercase hex.

    Attributes:
        private_key: Private exponent
        public_key: generator^private_key mod prime
    """
    private_key: str
    public_key: str

    def to_dict(self) -> Dict[str, str]:
        """Export using the wire field names."""
        return {'privateKey': self.private_key, 'publicKey': self.public_key}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> 'KeyPair':
        """Import from a dictionary using the wire field names."""
        return cls(private_key=data['privateKey'], public_key=data['publicKey'])

    def __repr__(self) -> str:
        return (
            f"KeyPair(private_key={self.private_key[:KEY_PREVIEW_CHARS]}..., "
            f"public_key={self.public_key[:KEY_PREVIEW_CHARS]}...)"
        )


def _current_time_millis() -> int:
    return time.time_ns() // 1_000_000


def _enhance_private_key(private_key: int, password: str, group: DHGroup) -> int:
    # SHA256(privateKeyBytes || SHA256(password || millis)) mod (p - 1) + 1
    stamped = f"{password}{_current_time_millis()}".encode('utf-8')
    password_hash = hashlib.sha256(stamped).digest()
    mixed = hashlib.sha256(bigint.int_to_bytes(private_key) + password_hash).digest()
    return bigint.bytes_to_int(mixed) % (group.prime - 1) + 1


def generate_key_pair(password: Optional[str] = None,
                      group: DHGroup = MODP_2048,
                      max_attempts: int = KEYGEN_MAX_ATTEMPTS) -> KeyPair:
    """
    Generate an ephemeral Diffie-Hellman key pair.

    The private key is drawn uniformly from [2, prime - 2]. When a password
    is given, the drawn key is mixed with the password and the current
    timestamp and the public key is recomputed from the result.

    Args:
        password: Optional password mixed into the private key
        group: Group parameters
        max_attempts: Rejection-sampling attempts before giving up

    Returns:
        KeyPair with hex-encoded keys

    Raises:
        KeyGenerationError: If sampling exhausts max_attempts
    """
    private_key = bigint.random_int_in_range(
        2, group.prime - 2, group.bits, max_attempts
    )

    if password:
        private_key = _enhance_private_key(private_key, password, group)

    public_key = bigint.mod_pow(group.generator, private_key, group.prime)
    logger.debug(f"Generated {'password-enhanced ' if password else ''}DH key pair")

    return KeyPair(
        private_key=bigint.int_to_hex(private_key),
        public_key=bigint.int_to_hex(public_key),
    )


def compute_shared_secret(private_key: str,
                          other_public_key: str,
                          password: Optional[str] = None,
                          group: DHGroup = MODP_2048) -> str:
    """
    Compute the shared secret from our private key and the peer's public key.

    The raw secret other_public_key^private_key mod prime is hashed with
    SHA-256, or with SHA-512 over raw || password when a password is given.

    Args:
        private_key: Our private key (hex)
        other_public_key: Peer public key (hex)
        password: Optional password mixed into the secret
        group: Group parameters

    Returns:
        64 hex characters, or 128 when a password is mixed in

    Raises:
        DecodeError: If either key is not valid hex
        InvalidKeyError: If the peer public key is outside (1, prime)
    """
    private_value = bigint.hex_to_int(private_key)
    other_value = bigint.hex_to_int(other_public_key)

    if not 1 < other_value < group.prime:
        logger.warning("Rejected peer public key outside (1, prime)")
        raise InvalidKeyError(
            ErrorCode.E301_PUBLIC_KEY_OUT_OF_RANGE,
            "Public key must satisfy 1 < key < prime",
        )

    raw = bigint.int_to_bytes(bigint.mod_pow(other_value, private_value, group.prime))

    if password:
        return hashlib.sha512(raw + password.encode('utf-8')).hexdigest()
    return hashlib.sha256(raw).hexdigest()


def validate_public_key(public_key: str) -> bool:
    """
    Coarse public key check: decoded length strictly between 100 and 1000 bytes.

    This does not verify that the value lies in [2, prime - 2];
    compute_shared_secret performs the range check.

    Returns:
        True if the key passes the length gate, False otherwise
    """
    try:
        key_bytes = bigint.hex_to_bytes(public_key)
    except DecodeError:
        return False
    return PUBLIC_KEY_MIN_BYTES < len(key_bytes) < PUBLIC_KEY_MAX_BYTES


def public_key_fingerprint(public_key: str) -> str:
    """
    Generate a fingerprint of a public key using SHA-256.

    Parties compare fingerprints over a trusted channel to detect a
    man-in-the-middle substituting public keys during the exchange.

    Returns:
        64-character hexadecimal fingerprint

    Raises:
        DecodeError: If the key is not valid hex
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(bigint.hex_to_bytes(public_key))
    return digest.finalize().hex()


class KeyExchange:
    """
    Caller-owned helper for manual Diffie-Hellman key management.

    Holds one group and at most one key pair. Nothing is shared between
    instances; discard the instance when the session ends.
    """

    def __init__(self, group: DHGroup = MODP_2048, config=None):
        self.group = group
        self.max_attempts = KEYGEN_MAX_ATTEMPTS
        if config is not None:
            self.max_attempts = int(config.get('keygen', 'max_attempts', KEYGEN_MAX_ATTEMPTS))
        self._key_pair: Optional[KeyPair] = None

    @property
    def key_pair(self) -> Optional[KeyPair]:
        return self._key_pair

    @property
    def public_key(self) -> Optional[str]:
        return self._key_pair.public_key if self._key_pair else None

    @property
    def private_key(self) -> Optional[str]:
        return self._key_pair.private_key if self._key_pair else None

    def generate_keys(self, password: Optional[str] = None) -> KeyPair:
        """Generate and hold a fresh key pair."""
        self._key_pair = generate_key_pair(password, self.group, self.max_attempts)
        return self._key_pair

    def set_private_key(self, private_key: str) -> KeyPair:
        """
        Adopt an existing private key and recompute its public key.

        Raises:
            DecodeError: If the key is not valid hex
            InvalidKeyError: If the key is outside [1, prime - 1]
        """
        value = bigint.hex_to_int(private_key)
        if not 0 < value < self.group.prime:
            raise InvalidKeyError(ErrorCode.E300_INVALID_KEY, "Private key outside [1, prime - 1]")
        public_value = bigint.mod_pow(self.group.generator, value, self.group.prime)
        self._key_pair = KeyPair(
            private_key=bigint.int_to_hex(value),
            public_key=bigint.int_to_hex(public_value),
        )
        return self._key_pair

    def compute_secret(self, other_public_key: str, password: Optional[str] = None) -> str:
        """
        Compute the shared secret with a peer after the coarse length gate.

        Raises:
            InvalidKeyError: If no key pair is held or the peer key is rejected
        """
        if self._key_pair is None:
            raise InvalidKeyError(ErrorCode.E304_NO_PRIVATE_KEY, "No key pair generated or set")
        if not validate_public_key(other_public_key):
            raise InvalidKeyError(
                ErrorCode.E302_PUBLIC_KEY_LENGTH,
                "Public key failed length validation",
                {'hex_length': len(other_public_key) if isinstance(other_public_key, str) else None},
            )
        return compute_shared_secret(self._key_pair.private_key, other_public_key, password, self.group)
