"""
Pytest configuration and fixtures for Chalawa tests.

Provides common fixtures and test utilities for unit and integration tests.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from chalawa import dh


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test data.

    Yields:
        Path: Temporary directory path

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp(prefix="chalawa_test_"))
    try:
        yield tmp
    finally:
        shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def clean_env(monkeypatch) -> None:
    """Remove CHALAWA_* variables so config tests start from defaults."""
    for name in list(os.environ):
        if name.startswith("CHALAWA_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def alice() -> dh.KeyPair:
    """Key pair for the first party, generated once per session."""
    return dh.generate_key_pair()


@pytest.fixture(scope="session")
def bob() -> dh.KeyPair:
    """Key pair for the second party, generated once per session."""
    return dh.generate_key_pair()


@pytest.fixture(scope="session")
def shared_secret(alice: dh.KeyPair, bob: dh.KeyPair) -> str:
    """Shared secret between alice and bob (no password)."""
    return dh.compute_shared_secret(alice.private_key, bob.public_key)


# Pytest marks
def pytest_configure(config):
    """
    Configure pytest markers.

    Args:
        config: Pytest configuration object
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# Test collection hooks
def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to add markers based on test location.

    Args:
        config: Pytest configuration
        items: List of collected test items
    """
    for item in items:
        # Add unit marker to tests in unit/ directory
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add integration marker to integration test modules
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
