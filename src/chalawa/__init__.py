"""
Chalawa - Interoperable encryption in transit

Diffie-Hellman key agreement over a fixed 2048-bit MODP group combined with
password- or shared-secret-derived AES-256-GCM encryption, using a
byte-exact wire format shared by every Chalawa implementation.

Author: chalawa contributors
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__author__ = "chalawa contributors"
__license__ = "MIT"

# Import core modules for easy access
from .cipher import (
    PasswordCipher,
    SharedSecretCipher,
    decrypt,
    dh_decrypt,
    dh_encrypt,
    encrypt,
)
from .config import Config
from .constants import APP_NAME, VERSION
from .dh import (
    MODP_2048,
    DHGroup,
    KeyExchange,
    KeyPair,
    compute_shared_secret,
    generate_key_pair,
    public_key_fingerprint,
    validate_public_key,
)
from .errors import (
    AuthenticationError,
    ChalawaError,
    ConfigError,
    DecodeError,
    ErrorCode,
    FormatError,
    InvalidArgumentError,
    InvalidKeyError,
    KeyGenerationError,
)
from .result import Result, capture

__all__ = [
    "APP_NAME",
    "MODP_2048",
    "VERSION",
    "AuthenticationError",
    "ChalawaError",
    "Config",
    "ConfigError",
    "DHGroup",
    "DecodeError",
    "ErrorCode",
    "FormatError",
    "InvalidArgumentError",
    "InvalidKeyError",
    "KeyExchange",
    "KeyGenerationError",
    "KeyPair",
    "PasswordCipher",
    "Result",
    "SharedSecretCipher",
    "capture",
    "compute_shared_secret",
    "decrypt",
    "dh_decrypt",
    "dh_encrypt",
    "encrypt",
    "generate_key_pair",
    "public_key_fingerprint",
    "validate_public_key",
    "__author__",
    "__license__",
    "__version__",
]
