"""
Chalawa - Cross-implementation compatibility vectors.

Produces and checks the JSON document that Chalawa implementations in
different languages exchange to prove they interoperate:

    {
      "basic": {"plainText", "password", "encrypted"},
      "diffieHellman": {
        "alice": {"privateKey", "publicKey"},
        "bob": {"privateKey", "publicKey"},
        "sharedSecret", "plainText", "encrypted"
      }
    }

One implementation writes the document with generate_compatibility_data();
another loads it and runs verify_compatibility_data(), which decrypts both
ciphertexts and recomputes the shared secret from both sides.
"""

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from . import cipher, dh
from .constants import (
    COMPAT_BASIC_PASSWORD,
    COMPAT_BASIC_PLAINTEXT,
    COMPAT_DATA_FILENAME,
    COMPAT_DH_PLAINTEXT,
)
from .errors import ChalawaError, DecodeError, ErrorCode, FormatError
from .utils import truncate_string

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 35


@dataclass
class CompatibilityReport:
    """
    Outcome of verifying a compatibility document.

    Attributes:
        basic_decrypted: Password ciphertext decrypted to the stated plaintext
        secrets_match: Both sides derive the same shared secret
        shared_secret_matches: Derived secret equals the stated sharedSecret
        dh_decrypted: Shared-secret ciphertext decrypted to the stated plaintext
        errors: Error kinds and messages hit during verification
    """
    basic_decrypted: bool = False
    secrets_match: bool = False
    shared_secret_matches: bool = False
    dh_decrypted: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return (
            self.basic_decrypted
            and self.secrets_match
            and self.shared_secret_matches
            and self.dh_decrypted
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['passed'] = self.passed
        return data


def generate_compatibility_data(path: Optional[Union[str, Path]] = None,
                                config=None) -> Dict[str, Any]:
    """
    Generate a fresh compatibility document.

    Args:
        path: File to write the document to (optional)
        config: Config instance; supplies keygen.max_attempts, and
            compat.data_file as the file to write when no path is given

    Returns:
        The compatibility document
    """
    exchange_a = dh.KeyExchange(config=config)
    exchange_b = dh.KeyExchange(config=config)
    alice = exchange_a.generate_keys()
    bob = exchange_b.generate_keys()

    shared_secret = exchange_a.compute_secret(bob.public_key)

    data = {
        'basic': {
            'plainText': COMPAT_BASIC_PLAINTEXT,
            'password': COMPAT_BASIC_PASSWORD,
            'encrypted': cipher.encrypt(COMPAT_BASIC_PLAINTEXT, COMPAT_BASIC_PASSWORD),
        },
        'diffieHellman': {
            'alice': alice.to_dict(),
            'bob': bob.to_dict(),
            'sharedSecret': shared_secret,
            'plainText': COMPAT_DH_PLAINTEXT,
            'encrypted': cipher.dh_encrypt(COMPAT_DH_PLAINTEXT, shared_secret),
        },
    }

    logger.info(
        f"Generated compatibility data, basic ciphertext "
        f"{truncate_string(data['basic']['encrypted'], PREVIEW_LENGTH)}"
    )

    if path is None and config is not None:
        path = config.get('compat', 'data_file', COMPAT_DATA_FILENAME)

    if path is not None:
        path = Path(path).expanduser()
        path.write_text(json.dumps(data, indent=2), encoding='utf-8')
        logger.info(f"Compatibility data saved to {path}")

    return data


def load_compatibility_data(path: Optional[Union[str, Path]] = None,
                            config=None) -> Dict[str, Any]:
    """
    Read a compatibility document written by any implementation.

    Without a path, reads compat.data_file from config, or
    compatibility-test-data.json in the working directory.

    Raises:
        DecodeError: If the file is not valid JSON
        FormatError: If required sections are missing
    """
    if path is None:
        if config is not None:
            path = config.get('compat', 'data_file', COMPAT_DATA_FILENAME)
        else:
            path = COMPAT_DATA_FILENAME
    path = Path(path).expanduser()

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise DecodeError(
            ErrorCode.E204_INVALID_JSON,
            "Compatibility data is not valid JSON",
            {"path": str(path)},
        ) from e

    if not isinstance(data, dict) or 'basic' not in data or 'diffieHellman' not in data:
        raise FormatError(
            ErrorCode.E100_FORMAT_ERROR,
            "Compatibility data needs 'basic' and 'diffieHellman' sections",
            {"path": str(path)},
        )
    return data


def _record(report: CompatibilityReport, check: str, error: Exception) -> None:
    kind = error.kind if isinstance(error, ChalawaError) else type(error).__name__
    report.errors.append(f"{check}: {kind}: {error}")
    logger.warning(f"Compatibility check '{check}' failed with {kind}")


def verify_compatibility_data(data: Dict[str, Any]) -> CompatibilityReport:
    """
    Check a compatibility document against this implementation.

    Failures are collected in the report rather than raised so that one
    broken section does not hide the outcome of the others.

    Args:
        data: Document from generate_compatibility_data or another implementation

    Returns:
        CompatibilityReport
    """
    report = CompatibilityReport()

    basic = data.get('basic', {})
    try:
        decrypted = cipher.decrypt(basic['encrypted'], basic['password'])
        report.basic_decrypted = decrypted == basic['plainText']
    except (ChalawaError, KeyError) as e:
        _record(report, 'basic', e)

    section = data.get('diffieHellman', {})
    try:
        alice = dh.KeyPair.from_dict(section['alice'])
        bob = dh.KeyPair.from_dict(section['bob'])
        alice_secret = dh.compute_shared_secret(alice.private_key, bob.public_key)
        bob_secret = dh.compute_shared_secret(bob.private_key, alice.public_key)
        report.secrets_match = alice_secret == bob_secret
        report.shared_secret_matches = alice_secret == section['sharedSecret']
    except (ChalawaError, KeyError) as e:
        _record(report, 'sharedSecret', e)

    try:
        decrypted = cipher.dh_decrypt(section['encrypted'], section['sharedSecret'])
        report.dh_decrypted = decrypted == section['plainText']
    except (ChalawaError, KeyError) as e:
        _record(report, 'diffieHellman', e)

    logger.info(f"Compatibility verification {'passed' if report.passed else 'failed'}")
    return report
