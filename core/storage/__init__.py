"""
Storage Module

Directory-backed file snapshots and Merkle root persistence.
"""

from .file_store import (
    DEFAULT_CLIENT_DIR,
    DEFAULT_ROOT_FILE,
    DEFAULT_SERVER_DIR,
    FileStore,
    RootStore,
    validate_filename,
)

__all__ = [
    "DEFAULT_CLIENT_DIR",
    "DEFAULT_ROOT_FILE",
    "DEFAULT_SERVER_DIR",
    "FileStore",
    "RootStore",
    "validate_filename",
]
