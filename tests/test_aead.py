"""
Chalawa - AES-256-GCM codec tests.

Tests the ciphertext:iv:tag wire format, JSON wrapping, tamper detection and
the error raised for each kind of malformed input.
"""

import base64
import json

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from chalawa import aead
from chalawa.errors import (
    AuthenticationError,
    DecodeError,
    ErrorCode,
    FormatError,
    InvalidArgumentError,
    InvalidKeyError,
)
from chalawa.result import capture

KEY = b"0123456789abcdef0123456789abcdef"
OTHER_KEY = b"fedcba9876543210fedcba9876543210"
FIXED_IV = bytes(range(16))

# Produced by the Node implementation: key derived from "test-password-123",
# iv 00..0f, plaintext JSON.stringify("Hello World!")
NODE_KEY = b"5e31f5c8f09d74388ba76e47e5debb7d"
NODE_CIPHER_TEXT = "yb4ax8czjVPqpT5kjFc=:AAECAwQFBgcICQoLDA0ODw==:bdtZXkM+iPkdeG915sHktw=="


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _seal(plaintext: bytes, key: bytes = KEY, iv: bytes = FIXED_IV) -> str:
    """Build a wire-format string directly with the cryptography library."""
    sealed = AESGCM(key).encrypt(iv, plaintext, None)
    return f"{_b64(sealed[:-16])}:{_b64(iv)}:{_b64(sealed[-16:])}"


def test_encrypt_decrypt():
    """Test a plaintext string survives encryption."""
    encrypted = aead.encrypt("Hello World!", KEY)

    assert encrypted.count(":") == 2
    assert aead.decrypt(encrypted, KEY) == "Hello World!"


def test_wire_format_segments():
    """Test three non-empty base64 segments with 16-byte iv and tag."""
    encrypted = aead.encrypt("payload", KEY)
    parts = encrypted.split(":")

    assert len(parts) == 3
    assert all(parts)

    ciphertext, iv, tag = (base64.b64decode(p, validate=True) for p in parts)
    assert len(iv) == 16
    assert len(tag) == 16
    # JSON wrapping adds the two quote characters
    assert len(ciphertext) == len('"payload"')


def test_fresh_iv_per_message():
    """Test encrypting the same plaintext twice gives different output."""
    first = aead.encrypt("same", KEY)
    second = aead.encrypt("same", KEY)

    assert first != second
    assert first.split(":")[1] != second.split(":")[1]


def test_plaintext_is_json_wrapped():
    """Test the encrypted bytes are the JSON string literal of the plaintext."""
    encrypted = aead.encrypt('He said "hi"', KEY)
    ciphertext, iv, tag = aead.split_cipher_text(encrypted)

    raw = AESGCM(KEY).decrypt(iv, ciphertext + tag, None)
    assert raw == b'"He said \\"hi\\""'


def test_non_ascii_not_escaped():
    """Test non-ASCII characters are serialized as UTF-8, not as \\u escapes."""
    assert aead.serialize_plaintext("héllo 🔒") == '"héllo 🔒"'.encode("utf-8")


def test_decrypts_externally_produced_text():
    """Test a wire string produced outside this module decrypts."""
    encrypted = _seal(b'"Hello from Node.js!"')

    assert aead.decrypt(encrypted, KEY) == "Hello from Node.js!"


def test_pre_serialized_json_double_layer():
    """Test that already JSON-encoded input comes back as the same JSON text."""
    structure = {"userId": 12345, "amount": 250.0}
    encoded = json.dumps(structure)

    decrypted = aead.decrypt(aead.encrypt(encoded, KEY), KEY)

    assert decrypted == encoded
    assert json.loads(decrypted) == structure


def test_structured_plaintext():
    """Test JSON-serializable values other than strings."""
    value = {"message": "This uses both DH and password security!", "n": [1, 2]}

    assert aead.decrypt(aead.encrypt(value, KEY), KEY) == value


def test_wrong_key():
    """Test decryption with a different key raises AuthenticationError."""
    encrypted = aead.encrypt("secret", KEY)

    with pytest.raises(AuthenticationError):
        aead.decrypt(encrypted, OTHER_KEY)


@pytest.mark.parametrize("bit", [0, 7, 64, 127])
def test_tag_bit_flip(bit):
    """Test flipping any bit of the tag raises AuthenticationError."""
    ciphertext, iv, tag = aead.encrypt("Hello World!", KEY).split(":")
    tag_bytes = bytearray(base64.b64decode(tag))
    tag_bytes[bit // 8] ^= 1 << (bit % 8)
    tampered = f"{ciphertext}:{iv}:{_b64(bytes(tag_bytes))}"

    with pytest.raises(AuthenticationError):
        aead.decrypt(tampered, KEY)


def test_ciphertext_and_iv_tampering():
    """Test modified ciphertext or iv raise AuthenticationError."""
    ciphertext, iv, tag = aead.encrypt("Hello World!", KEY).split(":")

    body = bytearray(base64.b64decode(ciphertext))
    body[0] ^= 0x01
    with pytest.raises(AuthenticationError):
        aead.decrypt(f"{_b64(bytes(body))}:{iv}:{tag}", KEY)

    nonce = bytearray(base64.b64decode(iv))
    nonce[-1] ^= 0x80
    with pytest.raises(AuthenticationError):
        aead.decrypt(f"{ciphertext}:{_b64(bytes(nonce))}:{tag}", KEY)


@pytest.mark.parametrize("text", ["invalid-format", "a:b", "a:b:c:d", ""])
def test_wrong_segment_count(text):
    """Test anything but exactly two colons raises FormatError."""
    with pytest.raises(FormatError) as exc_info:
        aead.decrypt(text, KEY)

    assert exc_info.value.code == ErrorCode.E101_SEGMENT_COUNT


def test_empty_segment():
    """Test empty segments raise FormatError."""
    iv = _b64(FIXED_IV)
    with pytest.raises(FormatError) as exc_info:
        aead.decrypt(f":{iv}:{iv}", KEY)

    assert exc_info.value.code == ErrorCode.E102_EMPTY_SEGMENT


def test_invalid_base64():
    """Test malformed base64 raises DecodeError."""
    iv = _b64(FIXED_IV)
    with pytest.raises(DecodeError) as exc_info:
        aead.decrypt(f"!!!notbase64:{iv}:{iv}", KEY)

    assert exc_info.value.code == ErrorCode.E201_INVALID_BASE64
    assert exc_info.value.details == {"segment": "ciphertext"}


def test_wrong_iv_or_tag_length():
    """Test iv or tag of the wrong size raise FormatError."""
    ciphertext, iv, tag = aead.encrypt("x", KEY).split(":")
    short = _b64(b"\x00" * 12)

    with pytest.raises(FormatError):
        aead.decrypt(f"{ciphertext}:{short}:{tag}", KEY)
    with pytest.raises(FormatError):
        aead.decrypt(f"{ciphertext}:{iv}:{short}", KEY)


def test_authentic_but_not_json():
    """Test authenticated plaintext that is not JSON raises DecodeError."""
    with pytest.raises(DecodeError) as exc_info:
        aead.decrypt(_seal(b"not json"), KEY)

    assert exc_info.value.code == ErrorCode.E204_INVALID_JSON


def test_authentic_but_not_utf8():
    """Test authenticated plaintext that is not UTF-8 raises DecodeError."""
    with pytest.raises(DecodeError) as exc_info:
        aead.decrypt(_seal(b"\xff\xfe\xfd"), KEY)

    assert exc_info.value.code == ErrorCode.E203_INVALID_UTF8


@pytest.mark.parametrize("key", [b"short", b"x" * 16, b"x" * 64, "0" * 32])
def test_key_size_enforced(key):
    """Test keys that are not 32 bytes raise InvalidKeyError."""
    with pytest.raises(InvalidKeyError):
        aead.encrypt("x", key)
    with pytest.raises(InvalidKeyError):
        aead.decrypt(_seal(b'"x"'), key)


def test_node_vector_decrypts():
    """Test a fixed Node-produced cipher text decrypts."""
    assert aead.decrypt(NODE_CIPHER_TEXT, NODE_KEY) == "Hello World!"


def test_fixed_iv_matches_node_vector(monkeypatch):
    """Test encryption with the same iv reproduces the Node cipher text exactly."""
    monkeypatch.setattr(aead.os, "urandom", lambda size: FIXED_IV)

    assert aead.encrypt("Hello World!", NODE_KEY) == NODE_CIPHER_TEXT


def test_lone_surrogates_escaped():
    """Test lone surrogates are written as lowercase JSON escapes."""
    assert aead.serialize_plaintext("\ud800x\udc00") == b'"\\ud800x\\udc00"'

    encrypted = aead.encrypt("\ud800", KEY)
    assert aead.decrypt(encrypted, KEY) == "\ud800"


def test_surrogate_pair_joined():
    """Test a surrogate pair is serialized as the character it encodes."""
    assert aead.serialize_plaintext("\ud83d\udd12") == '"🔒"'.encode("utf-8")
    assert aead.serialize_plaintext({"k\udbff": "🔒"}) == \
        '{"k\\udbff":"🔒"}'.encode("utf-8")


@pytest.mark.parametrize("value", [b"raw bytes", {1, 2}, float("nan"), float("inf")])
def test_unserializable_plaintext(value):
    """Test values JSON cannot represent raise InvalidArgumentError."""
    with pytest.raises(InvalidArgumentError) as exc_info:
        aead.encrypt(value, KEY)

    assert exc_info.value.code == ErrorCode.E002_INVALID_ARGUMENT


def test_circular_plaintext():
    """Test self-referencing structures raise InvalidArgumentError."""
    value = []
    value.append(value)

    with pytest.raises(InvalidArgumentError):
        aead.encrypt(value, KEY)


def test_unserializable_plaintext_captured():
    """Test serialization failures come back as tagged results."""
    result = capture(aead.encrypt, b"raw bytes", KEY)

    assert not result.ok
    assert result.kind == "InvalidArgumentError"
