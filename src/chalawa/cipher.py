"""
Chalawa - Password and shared-secret ciphers.

Both ciphers are key derivation followed by the AES-256-GCM codec:

- PasswordCipher: key from the UTF-8 password
- SharedSecretCipher: key from the hex shared secret of a DH exchange

The module-level encrypt/decrypt/dh_encrypt/dh_decrypt functions are the
stateless form of the same operations.
"""

from typing import Any

from . import aead, kdf


class PasswordCipher:
    """Encrypt and decrypt with a key derived from a password."""

    def __init__(self, password: str):
        self._key = kdf.derive_password_key(password)

    def encrypt(self, plaintext: Any) -> str:
        return aead.encrypt(plaintext, self._key)

    def decrypt(self, cipher_text: str) -> Any:
        return aead.decrypt(cipher_text, self._key)

    def __repr__(self) -> str:
        return "PasswordCipher(<redacted>)"


class SharedSecretCipher:
    """
    Encrypt and decrypt with a key derived from a Diffie-Hellman shared secret.

    Raises:
        DecodeError: If the shared secret is not valid hex
    """

    def __init__(self, shared_secret: str):
        self._key = kdf.derive_shared_secret_key(shared_secret)

    def encrypt(self, plaintext: Any) -> str:
        return aead.encrypt(plaintext, self._key)

    def decrypt(self, cipher_text: str) -> Any:
        return aead.decrypt(cipher_text, self._key)

    def __repr__(self) -> str:
        return "SharedSecretCipher(<redacted>)"


def encrypt(plaintext: Any, password: str) -> str:
    """Encrypt with a password-derived key."""
    return PasswordCipher(password).encrypt(plaintext)


def decrypt(cipher_text: str, password: str) -> Any:
    """Decrypt with a password-derived key."""
    return PasswordCipher(password).decrypt(cipher_text)


def dh_encrypt(plaintext: Any, shared_secret: str) -> str:
    """Encrypt with a key derived from a DH shared secret."""
    return SharedSecretCipher(shared_secret).encrypt(plaintext)


def dh_decrypt(cipher_text: str, shared_secret: str) -> Any:
    """Decrypt with a key derived from a DH shared secret."""
    return SharedSecretCipher(shared_secret).decrypt(cipher_text)
