"""
Core cryptographic utilities.

Provides the digest function used for leaves and internal nodes.
"""
from .hashing import (
    DIGEST_SIZE,
    sha256,
    hash_bytes,
    hash_concat,
    to_hex,
    from_hex,
    short_hex,
)

__all__ = [
    "DIGEST_SIZE",
    "sha256",
    "hash_bytes",
    "hash_concat",
    "to_hex",
    "from_hex",
    "short_hex",
]
