"""
Chalawa - AES-256-GCM codec with the colon-separated wire format.

Wire format (all segments standard base64 with padding):

    <ciphertext>:<16-byte iv>:<16-byte tag>

The plaintext is JSON-encoded before encryption and JSON-decoded after
decryption, so a caller that encrypts ``"Hello"`` gets ``"Hello"`` back and
a caller that passes an already JSON-encoded structure gets that string
back and decodes it a second time itself. No additional authenticated data
is used.
"""

import base64
import binascii
import json
import logging
import os
import re
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .constants import IV_SIZE, KEY_SIZE, SEGMENT_COUNT, SEGMENT_SEPARATOR, TAG_SIZE
from .errors import (
    AuthenticationError,
    DecodeError,
    ErrorCode,
    FormatError,
    InvalidArgumentError,
    InvalidKeyError,
)

logger = logging.getLogger(__name__)

_SURROGATE_PAIR = re.compile(r"[\ud800-\udbff][\udc00-\udfff]")
_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")


def _check_key(key: bytes) -> None:
    if not isinstance(key, (bytes, bytearray)) or len(key) != KEY_SIZE:
        raise InvalidKeyError(
            ErrorCode.E303_SYMMETRIC_KEY_LENGTH,
            f"Encryption key must be {KEY_SIZE} bytes",
        )


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def _b64decode(segment: str, name: str) -> bytes:
    try:
        return base64.b64decode(segment, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(
            ErrorCode.E201_INVALID_BASE64,
            f"Invalid base64 in {name} segment",
            {"segment": name},
        ) from e


def _join_pair(match) -> str:
    high, low = match.group()
    return chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00))


def serialize_plaintext(plaintext: Any) -> bytes:
    """
    JSON-encode a value the way JavaScript's JSON.stringify does and return UTF-8 bytes.

    Surrogate pairs are joined into one character and lone surrogates are
    written as lowercase ``\\udxxx`` escapes, as JSON.stringify does.

    Raises:
        InvalidArgumentError: If the value is not JSON-serializable
    """
    try:
        text = json.dumps(plaintext, ensure_ascii=False, allow_nan=False, separators=(',', ':'))
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(
            ErrorCode.E002_INVALID_ARGUMENT,
            "Plaintext is not JSON-serializable",
            {"type": type(plaintext).__name__},
        ) from e

    text = _SURROGATE_PAIR.sub(_join_pair, text)
    text = _LONE_SURROGATE.sub(lambda m: '\\u%04x' % ord(m.group()), text)
    return text.encode('utf-8')


def encrypt(plaintext: Any, key: bytes) -> str:
    """
    Encrypt a value with AES-256-GCM.

    Args:
        plaintext: String (or other JSON-serializable value) to encrypt
        key: 32-byte key from kdf.derive_key

    Returns:
        ``ciphertext:iv:tag`` in base64

    Raises:
        InvalidKeyError: If the key is not 32 bytes
        InvalidArgumentError: If the plaintext is not JSON-serializable
    """
    _check_key(key)
    iv = os.urandom(IV_SIZE)
    sealed = AESGCM(bytes(key)).encrypt(iv, serialize_plaintext(plaintext), None)
    ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
    logger.debug(f"Encrypted {len(ciphertext)} bytes")
    return SEGMENT_SEPARATOR.join((_b64encode(ciphertext), _b64encode(iv), _b64encode(tag)))


def split_cipher_text(cipher_text: str):
    """
    Split and decode a cipher text into (ciphertext, iv, tag) bytes.

    Raises:
        FormatError: On wrong segment count, empty segments or bad iv/tag size
        DecodeError: On malformed base64
    """
    if not isinstance(cipher_text, str):
        raise FormatError(ErrorCode.E101_SEGMENT_COUNT, "Encrypted text must be a string")

    parts = cipher_text.split(SEGMENT_SEPARATOR)
    if len(parts) != SEGMENT_COUNT:
        raise FormatError(
            ErrorCode.E101_SEGMENT_COUNT,
            "Invalid encrypted text format",
            {"segments": len(parts)},
        )
    if not all(parts):
        raise FormatError(ErrorCode.E102_EMPTY_SEGMENT, "Encrypted text has an empty segment")

    ciphertext = _b64decode(parts[0], "ciphertext")
    iv = _b64decode(parts[1], "iv")
    tag = _b64decode(parts[2], "tag")

    if len(iv) != IV_SIZE or len(tag) != TAG_SIZE:
        raise FormatError(
            ErrorCode.E103_SEGMENT_LENGTH,
            f"IV and tag must be {IV_SIZE} and {TAG_SIZE} bytes",
            {"iv_length": len(iv), "tag_length": len(tag)},
        )
    return ciphertext, iv, tag


def decrypt(cipher_text: str, key: bytes) -> Any:
    """
    Decrypt a ``ciphertext:iv:tag`` string and JSON-decode the result.

    Args:
        cipher_text: Output of encrypt()
        key: 32-byte key from kdf.derive_key

    Returns:
        The decoded JSON value (a string for string plaintexts)

    Raises:
        FormatError: If the text is not three non-empty segments
        DecodeError: On malformed base64, UTF-8 or JSON
        InvalidKeyError: If the key is not 32 bytes
        AuthenticationError: If the tag does not verify
    """
    _check_key(key)
    ciphertext, iv, tag = split_cipher_text(cipher_text)

    try:
        plaintext = AESGCM(bytes(key)).decrypt(iv, ciphertext + tag, None)
    except InvalidTag as e:
        logger.debug("GCM tag verification failed")
        raise AuthenticationError() from e

    try:
        return json.loads(plaintext.decode('utf-8'))
    except UnicodeDecodeError as e:
        raise DecodeError(ErrorCode.E203_INVALID_UTF8, "Decrypted data is not valid UTF-8") from e
    except json.JSONDecodeError as e:
        raise DecodeError(ErrorCode.E204_INVALID_JSON, "Decrypted data is not valid JSON") from e
