"""
Merkle Tree and Proofs
Tree construction over file snapshots, proof generation and verification.

This module provides:
- MerkleTree / MerkleNode: immutable tree built once per snapshot
- ProofStep / NodeSide: audit path entries
- verify_merkle_proof: replay a proof against content and a root
- MerkleProver / MerkleVerifier: convenience wrappers

Commitment Rules:
1. Leaf hashing: sha256(file_bytes), leaves sorted by file name
2. Parent hashing: sha256(first_popped + second_popped)
3. Padding: clone the last leaf up to the next power of two
4. Single file: root = leaf, no proof
5. Zero files: EmptyInputException

Usage:
    from core.merkle import MerkleTree, verify_merkle_proof

    files = {"file1.txt": b"...", "file2.txt": b"..."}
    tree = MerkleTree.build(files)
    proof = tree.generate_merkle_proof("file1.txt", files)
    assert verify_merkle_proof(proof, tree.root_hash, files["file1.txt"])
"""
from .merkle_tree import (
    MerkleNode,
    MerkleTree,
    NodeSide,
    ProofStep,
    build_merkle_root,
    build_merkle_tree,
    closest_bigger_power_of_two,
    is_power_of_two,
    merkle_parent,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    proof_from_records,
    proof_to_records,
    verify_merkle_proof,
)


__all__ = [
    # Core types
    "MerkleNode",
    "MerkleTree",
    "NodeSide",
    "ProofStep",
    # Core functions
    "merkle_parent",
    "build_merkle_tree",
    "build_merkle_root",
    "verify_merkle_proof",
    "closest_bigger_power_of_two",
    "is_power_of_two",
    # Wire conversion
    "proof_to_records",
    "proof_from_records",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
