"""
Pytest configuration and shared fixtures for Merkle Vault tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


# =============================================================================
# Factories
# =============================================================================

def make_files(count: int = 8, prefix: str = "file") -> dict[str, bytes]:
    """Build a snapshot of ``count`` files named file1..fileN."""
    return {
        f"{prefix}{i}": f"File {i} contents".encode()
        for i in range(1, count + 1)
    }


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def eight_files() -> dict[str, bytes]:
    """The standard eight-file snapshot."""
    return make_files(8)


@pytest.fixture
def client_dir(tmp_path, eight_files) -> Path:
    """A client files directory populated with the standard snapshot."""
    directory = tmp_path / "client_files"
    directory.mkdir()
    for name, content in eight_files.items():
        (directory / name).write_bytes(content)
    return directory


@pytest.fixture
def server_dir(tmp_path) -> Path:
    """An empty server storage directory."""
    directory = tmp_path / "server_files"
    directory.mkdir()
    return directory


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep VAULT_* variables from the developer environment out of tests."""
    for var in (
        "VAULT_SERVER_PATH", "VAULT_SERVER_HOST", "VAULT_SERVER_PORT",
        "VAULT_FILES_PATH", "VAULT_MERKLE_PATH", "VAULT_SERVER_URL",
        "VAULT_HTTP_TIMEOUT", "VAULT_LOG_LEVEL", "VAULT_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
