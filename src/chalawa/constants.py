"""
Chalawa - Protocol Constants and Configuration Defaults

This module defines every constant used by the Chalawa protocol. Values in the
protocol section are part of the wire format and must be identical in every
implementation; values in the defaults section may be overridden through
configuration.

Author: chalawa contributors
Version: 1.0.0
"""

# Version Information
VERSION = "1.0.0"
APP_NAME = "Chalawa"

# Diffie-Hellman Group (2048-bit MODP group, generator 2)
DH_PRIME_HEX = (
    "FFFFFFFFFFFFFFFFC90FDAA22168C234C4C6628B80DC1CD1"
    "29024E088A67CC74020BBEA63B139B22514A08798E3404DD"
    "EF9519B3CD3A431B302B0A6DF25F14374FE1356D6D51C245"
    "E485B576625E7EC6F44C42E9A637ED6B0BFF5CB6F406B7ED"
    "EE386BFB5A899FA5AE9F24117C4B1FE649286651ECE45B3D"
    "C2007CB8A163BF0598DA48361C55D39A69163FA8FD24CF5F"
    "83655D23DCA3AD961C62F356208552BB9ED529077096966D"
    "670C354E4ABC9804F1746C08CA18217C32905E462E36CE3B"
    "E39E772C180E86039B2783A2EC07A28FB5C55DF06F4C52C9"
    "DE2BCBF6955817183995497CEA956AE515D2261898FA0510"
    "15728E5A8AACAA68FFFFFFFFFFFFFFFF"
)
DH_GENERATOR = 2

# Public Key Length Gate (decoded bytes, exclusive bounds)
PUBLIC_KEY_MIN_BYTES = 100
PUBLIC_KEY_MAX_BYTES = 1000

# Symmetric Encryption
KEY_SIZE = 32  # AES-256
KEY_HEX_CHARS = 32  # leading hex characters of the SHA-512 digest used as key bytes
IV_SIZE = 16  # 128-bit IV
TAG_SIZE = 16  # 128-bit GCM tag
SEGMENT_SEPARATOR = ":"
SEGMENT_COUNT = 3

# Key Generation Defaults
KEYGEN_MAX_ATTEMPTS = 64

# Display
KEY_PREVIEW_CHARS = 16

# File Paths
DEFAULT_DATA_DIR = "~/.chalawa"
CONFIG_FILENAME = "config.toml"
COMPAT_DATA_FILENAME = "compatibility-test-data.json"

# Logging Configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_LEVEL = "WARNING"

# Compatibility Vector Samples
COMPAT_BASIC_PLAINTEXT = "Hello from Python!"
COMPAT_BASIC_PASSWORD = "test-password-123"
COMPAT_DH_PLAINTEXT = "DH encrypted message from Python"
