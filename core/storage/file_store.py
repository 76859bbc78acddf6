"""
File Storage
File: file_store.py

Purpose: Read directory snapshots for tree building, store uploaded files,
and persist the Merkle root between runs.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from core.crypto.hashing import DIGEST_SIZE
from core.schemas.errors import (
    FileNotFoundException,
    InvalidFileNameException,
    RootNotFoundException,
    VaultException,
)


logger = logging.getLogger(__name__)


# Default locations
DEFAULT_SERVER_DIR = "server_files"
DEFAULT_CLIENT_DIR = "client_files"
DEFAULT_ROOT_FILE = "merkle.bin"


def validate_filename(filename: str) -> str:
    """
    Ensure ``filename`` names a single entry directly inside a store.

    Hidden names are rejected as well, since snapshots skip them.

    Raises:
        InvalidFileNameException: On empty, hidden, or path-like names
    """
    if (
        not filename
        or filename.startswith(".")
        or "/" in filename
        or "\\" in filename
        or "\x00" in filename
        or (os.altsep is not None and os.altsep in filename)
    ):
        raise InvalidFileNameException(filename)
    return filename


def _atomic_write(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temp file in the same directory."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class FileStore:
    """
    A flat directory of files, one file per name.

    Usage:
        store = FileStore("server_files")
        store.save("a.txt", b"hello")
        files = store.snapshot()   # {"a.txt": b"hello"}
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def __repr__(self) -> str:
        return f"FileStore({str(self.directory)!r})"

    def ensure_directory(self) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    def path_for(self, filename: str) -> Path:
        return self.directory / validate_filename(filename)

    def list_names(self) -> list[str]:
        """Names of regular, non-hidden files in ascending order."""
        if not self.directory.is_dir():
            return []
        return sorted(
            entry.name
            for entry in self.directory.iterdir()
            if entry.is_file() and not entry.name.startswith(".")
        )

    def snapshot(self) -> dict[str, bytes]:
        """
        Read every file into a ``name -> content`` mapping.

        Keys are inserted in ascending name order. A missing directory
        yields an empty snapshot.
        """
        files = {name: (self.directory / name).read_bytes() for name in self.list_names()}
        logger.debug(f"Snapshot of {self.directory}: {len(files)} file(s)")
        return files

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def read(self, filename: str) -> bytes:
        """
        Read one file.

        Raises:
            InvalidFileNameException: If ``filename`` is not a plain name
            FileNotFoundException: If the file does not exist
        """
        path = self.path_for(filename)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise FileNotFoundException(filename, details={"directory": str(self.directory)}) from e

    def save(self, filename: str, content: bytes) -> Path:
        """Store ``content`` under ``filename``, replacing any previous file."""
        path = self.path_for(filename)
        self.ensure_directory()
        _atomic_write(path, content)
        logger.info(f"Stored {filename} ({len(content)} bytes) in {self.directory}")
        return path

    def delete(self, filename: str) -> None:
        path = self.path_for(filename)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise FileNotFoundException(filename) from e
        logger.info(f"Deleted {filename} from {self.directory}")


class RootStore:
    """
    Persists a single Merkle root digest as raw bytes.

    Usage:
        roots = RootStore("merkle.bin")
        roots.save(tree.root_hash)
        root = roots.load()
    """

    def __init__(self, path: str | Path = DEFAULT_ROOT_FILE) -> None:
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"RootStore({str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, root: bytes) -> Path:
        if len(root) != DIGEST_SIZE:
            raise VaultException(
                f"Refusing to store a {len(root)}-byte root; expected {DIGEST_SIZE}",
                code="INVALID_ROOT",
            )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        _atomic_write(self.path, root)
        logger.info(f"Stored Merkle root at {self.path}")
        return self.path

    def load(self) -> bytes:
        """
        Load the stored root.

        Raises:
            RootNotFoundException: If no root has been stored
        """
        try:
            return self.path.read_bytes()
        except FileNotFoundError as e:
            raise RootNotFoundException(str(self.path)) from e


__all__ = [
    "DEFAULT_SERVER_DIR",
    "DEFAULT_CLIENT_DIR",
    "DEFAULT_ROOT_FILE",
    "FileStore",
    "RootStore",
    "validate_filename",
]
