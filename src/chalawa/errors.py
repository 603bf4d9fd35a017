"""
Chalawa - Custom Exception Classes and Error Codes

This module defines all custom exceptions and error codes used by the
Chalawa protocol. Each error has a unique code for logging, serialization
and cross-implementation diagnostics.

Error messages and details never contain key material, passwords,
shared secrets or plaintext.

Author: chalawa contributors
Version: 1.0.0
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Enumeration of all Chalawa error codes."""

    # Argument Errors (E001-E099)
    E002_INVALID_ARGUMENT = "E002"

    # Wire Format Errors (E100-E199)
    E100_FORMAT_ERROR = "E100"
    E101_SEGMENT_COUNT = "E101"
    E102_EMPTY_SEGMENT = "E102"
    E103_SEGMENT_LENGTH = "E103"

    # Decoding Errors (E200-E299)
    E200_DECODE_ERROR = "E200"
    E201_INVALID_BASE64 = "E201"
    E202_INVALID_HEX = "E202"
    E203_INVALID_UTF8 = "E203"
    E204_INVALID_JSON = "E204"

    # Key Errors (E300-E399)
    E300_INVALID_KEY = "E300"
    E301_PUBLIC_KEY_OUT_OF_RANGE = "E301"
    E302_PUBLIC_KEY_LENGTH = "E302"
    E303_SYMMETRIC_KEY_LENGTH = "E303"
    E304_NO_PRIVATE_KEY = "E304"

    # Authentication Errors (E400-E499)
    E400_AUTHENTICATION_FAILED = "E400"

    # Key Generation Errors (E500-E599)
    E500_KEY_GENERATION_FAILED = "E500"
    E501_SAMPLING_EXHAUSTED = "E501"

    # Config Errors (E700-E799)
    E700_CONFIG_ERROR = "E700"
    E701_CONFIG_LOAD_FAILED = "E701"
    E702_CONFIG_SAVE_FAILED = "E702"
    E703_INVALID_CONFIG = "E703"
    E704_CONFIG_PARSE_ERROR = "E704"


class ChalawaError(Exception):
    """Base exception class for all Chalawa errors.

    All custom exceptions in Chalawa inherit from this class.
    Provides standardized error handling and logging.

    Attributes:
        code: Error code from ErrorCode enum
        message: Human-readable error message
        details: Additional error details (optional)
    """

    def __init__(self, code: ErrorCode, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize a Chalawa error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            details: Additional error context (optional)
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    @property
    def kind(self) -> str:
        """Name of the error kind, e.g. ``FormatError``."""
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization.

        Returns:
            Dictionary containing error information
        """
        return {
            "kind": self.kind,
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class InvalidArgumentError(ChalawaError):
    """Exception raised when a value cannot be serialized for encryption."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E002_INVALID_ARGUMENT,
        message: str = "Invalid argument",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)


class FormatError(ChalawaError):
    """Exception raised when a cipher text does not have the
    ``ciphertext:iv:authTag`` shape.
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E100_FORMAT_ERROR,
        message: str = "Invalid encrypted text format",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)


class DecodeError(ChalawaError):
    """Exception raised for malformed base64, hex, UTF-8 or JSON input."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E200_DECODE_ERROR,
        message: str = "Failed to decode input",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)


class InvalidKeyError(ChalawaError):
    """Exception raised for unusable key material.

    This includes public keys outside ``(1, prime)``, public keys failing
    the coarse length gate and symmetric keys of the wrong size.
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E300_INVALID_KEY,
        message: str = "Invalid key",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)


class AuthenticationError(ChalawaError):
    """Exception raised when the GCM authentication tag does not verify.

    Signals tampering, or decryption with the wrong password or shared secret.
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E400_AUTHENTICATION_FAILED,
        message: str = "Authentication tag verification failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)


class KeyGenerationError(ChalawaError):
    """Exception raised when private key sampling exhausts its attempts."""

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E500_KEY_GENERATION_FAILED,
        message: str = "Key generation failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)


class ConfigError(ChalawaError):
    """Exception raised for configuration failures.

    This includes loading, parsing, and validating configuration files.
    """

    def __init__(
        self,
        code: ErrorCode = ErrorCode.E700_CONFIG_ERROR,
        message: str = "Configuration operation failed",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(code, message, details)
