"""
Hashing Utilities
Digest function and hex helpers shared by the Merkle tree and the wire format.

This module provides:
- SHA-256 hashing for raw bytes (leaves)
- Concatenation hashing for internal nodes
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw file bytes exactly as stored, no normalisation
- All operations are deterministic
"""
from __future__ import annotations

import hashlib


# Length in bytes of every digest produced by this module
DIGEST_SIZE: int = hashlib.sha256().digest_size


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_bytes(data: bytes) -> bytes:
    """
    Alias for sha256() - compute the leaf digest of file contents.

    Args:
        data: Raw file contents

    Returns:
        32-byte SHA-256 digest
    """
    return sha256(data)


def hash_concat(first: bytes, second: bytes) -> bytes:
    """
    Hash the concatenation of two digests.

    Used for every internal node: parent = sha256(first + second).
    Operand order is significant.

    Args:
        first: Digest placed first in the concatenation
        second: Digest placed second in the concatenation

    Returns:
        32-byte SHA-256 digest of concatenation
    """
    return sha256(first + second)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def short_hex(digest: bytes, length: int = 3) -> str:
    """Abbreviated hex of the first ``length`` bytes, for logs and tree dumps."""
    return digest[:length].hex()


__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "hash_bytes",
    "hash_concat",
    "to_hex",
    "from_hex",
    "short_hex",
]
