"""
Merkle Proof Verification
Replay of an audit path against claimed content and an expected root,
plus conversion between in-memory proofs and their wire records.

This module provides:
- verify_merkle_proof: replay an audit path, always returns a bool
- proof_to_records / proof_from_records: wire conversion
- MerkleProver / MerkleVerifier: class-based convenience wrappers

Proof data usually comes from a remote server, so verification treats
every structural problem as a failed proof and never raises.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

from core.crypto.hashing import from_hex, hash_bytes, short_hex, to_hex
from core.merkle.merkle_tree import (
    MerkleTree,
    NodeSide,
    ProofStep,
    merkle_parent,
)
from core.schemas.transport import ProofStepRecord


logger = logging.getLogger(__name__)


def verify_merkle_proof(
    proof: Sequence[ProofStep],
    root: bytes,
    content: bytes,
) -> bool:
    """
    Verify that ``content`` belongs to the tree committed to by ``root``.

    Algorithm:
    1. Reject proofs shorter than two steps
    2. Reject proofs that do not contain sha256(content)
    3. Pop two steps from the tail (A first, then B):
       - B on the Left:  new = sha256(B + A)
       - B on the Right: new = sha256(A + B)
       - B without side: malformed, reject
       push the new digest (no side) and repeat until one step remains
    4. Accept iff the remaining digest equals ``root``

    The caller's list is not modified.

    Args:
        proof: Audit path as produced by MerkleTree.generate_merkle_proof
        root: Expected root digest
        content: File contents claimed to be the proof's leaf

    Returns:
        True if the proof is valid, False otherwise
    """
    if len(proof) < 2:
        logger.debug(f"Rejecting proof: {len(proof)} step(s), need at least 2")
        return False

    content_hash = hash_bytes(content)
    if not any(step.digest == content_hash for step in proof):
        logger.debug(f"Rejecting proof: no step matches content digest {short_hex(content_hash)}")
        return False

    pending = list(proof)
    while len(pending) > 1:
        first = pending.pop()
        second = pending.pop()

        if second.side == NodeSide.LEFT:
            combined = merkle_parent(second.digest, first.digest)
        elif second.side == NodeSide.RIGHT:
            combined = merkle_parent(first.digest, second.digest)
        else:
            logger.debug("Rejecting proof: step without side before final reduction")
            return False

        pending.append(ProofStep(combined))

    return pending[0].digest == root


def proof_to_records(proof: Sequence[ProofStep]) -> list[ProofStepRecord]:
    """Serialize an audit path, preserving step order."""
    return [
        ProofStepRecord(
            digest=to_hex(step.digest),
            side=step.side.value if step.side is not None else None,
        )
        for step in proof
    ]


def proof_from_records(records: Sequence[ProofStepRecord]) -> list[ProofStep]:
    """Deserialize an audit path, preserving step order."""
    return [
        ProofStep(
            digest=from_hex(record.digest),
            side=NodeSide(record.side) if record.side is not None else None,
        )
        for record in records
    ]


class MerkleProver:
    """
    Convenience class for building trees and proofs from file snapshots.

    Example:
        >>> files = {"a.txt": b"a", "b.txt": b"b"}
        >>> proof = MerkleProver.prove(files, "a.txt")
        >>> MerkleVerifier.verify(proof, MerkleProver.compute_root(files), b"a")
        True
    """

    @staticmethod
    def prove(files: Mapping[str, bytes], file_name: str) -> Optional[list[ProofStep]]:
        """
        Build a tree from ``files`` and generate the proof for ``file_name``.

        Returns:
            The audit path, or None when no proof can be produced

        Raises:
            EmptyInputException: If ``files`` is empty
        """
        tree = MerkleTree.build(files)
        return tree.generate_merkle_proof(file_name, files)

    @staticmethod
    def compute_root(files: Mapping[str, bytes]) -> bytes:
        """
        Compute the Merkle root for a snapshot.

        Raises:
            EmptyInputException: If ``files`` is empty
        """
        return MerkleTree.build(files).root_hash


class MerkleVerifier:
    """Convenience class for verifying audit paths."""

    @staticmethod
    def verify(proof: Sequence[ProofStep], root: bytes, content: bytes) -> bool:
        """Verify ``proof`` for ``content`` against ``root``."""
        return verify_merkle_proof(proof, root, content)

    @staticmethod
    def verify_records(
        records: Sequence[ProofStepRecord],
        root: bytes,
        content: bytes,
    ) -> bool:
        """Verify a proof still in wire form."""
        return verify_merkle_proof(proof_from_records(records), root, content)

    @staticmethod
    def verify_file(path: str | Path, proof: Sequence[ProofStep], root: bytes) -> bool:
        """
        Verify a file on disk against ``root``.

        A missing or unreadable file verifies to False.
        """
        try:
            content = Path(path).read_bytes()
        except OSError as e:
            logger.warning(f"Cannot read {path} for verification: {e}")
            return False
        return verify_merkle_proof(proof, root, content)


__all__ = [
    "verify_merkle_proof",
    "proof_to_records",
    "proof_from_records",
    "MerkleProver",
    "MerkleVerifier",
]
