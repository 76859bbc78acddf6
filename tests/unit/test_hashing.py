"""
Hashing Unit Tests
Tests for core/crypto/hashing.py
"""
import hashlib

import pytest

from core.crypto.hashing import (
    DIGEST_SIZE,
    from_hex,
    hash_bytes,
    hash_concat,
    sha256,
    short_hex,
    to_hex,
)


class TestSha256:

    def test_known_vector(self):
        assert sha256(b"hello").hex() == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_digest_size(self):
        assert DIGEST_SIZE == 32
        assert len(sha256(b"")) == DIGEST_SIZE

    def test_hash_bytes_is_sha256(self):
        assert hash_bytes(b"File 1 contents") == sha256(b"File 1 contents")


class TestHashConcat:

    def test_matches_manual_concatenation(self):
        a, b = sha256(b"a"), sha256(b"b")
        assert hash_concat(a, b) == hashlib.sha256(a + b).digest()

    def test_order_matters(self):
        a, b = sha256(b"a"), sha256(b"b")
        assert hash_concat(a, b) != hash_concat(b, a)


class TestHex:

    def test_to_hex_prefix(self):
        assert to_hex(b"\xde\xad\xbe\xef") == "0xdeadbeef"

    def test_round_trip(self):
        digest = sha256(b"x")
        assert from_hex(to_hex(digest)) == digest

    def test_missing_prefix_rejected(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_odd_length_rejected(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_invalid_characters_rejected(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")

    def test_short_hex(self):
        assert short_hex(bytes.fromhex("abcdef0123")) == "abcdef"
        assert short_hex(bytes.fromhex("abcdef0123"), length=1) == "ab"
