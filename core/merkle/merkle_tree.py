"""
Merkle Tree Implementation
Construction of a binary hash tree over a snapshot of named files,
target location, and audit path generation.

This module provides:
- MerkleNode / MerkleTree: immutable node tree built once per snapshot
- Balancing of non-power-of-two leaf counts
- Path location (is a digest under the left or right child?)
- Audit path (proof) generation for a single file

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(file_bytes)
2. Leaf order: ascending sort of file names
3. Padding: clone the last leaf until the leaf count is a power of two
4. Reduction: pop A, pop B from the end of the level, parent = sha256(A + B)
   with A as left child and B as right child. A lone leftover node is
   carried to the next level unchanged.
5. Single file: root = leaf, no proof can be produced
6. Zero files: EmptyInputException

Known ambiguity:
- Padding puts duplicate digests in the tree. The path locator searches the
  left child first, so a proof target whose digest is duplicated resolves
  to the first match in left-first pre-order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Mapping, Optional

from core.crypto.hashing import hash_bytes, hash_concat, short_hex
from core.schemas.errors import EmptyInputException


logger = logging.getLogger(__name__)


class NodeSide(str, Enum):
    """Operand position of a digest when two digests are recombined."""

    LEFT = "Left"
    RIGHT = "Right"

    @property
    def opposite(self) -> "NodeSide":
        return NodeSide.RIGHT if self is NodeSide.LEFT else NodeSide.LEFT


def merkle_parent(first: bytes, second: bytes) -> bytes:
    """
    Compute the parent digest of two child digests.

    Args:
        first: Digest of the left child (first popped during reduction)
        second: Digest of the right child (second popped during reduction)

    Returns:
        Parent digest (32 bytes)
    """
    return hash_concat(first, second)


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def closest_bigger_power_of_two(n: int) -> int:
    """
    Smallest power of two greater than or equal to ``n``.

    Example:
        >>> [closest_bigger_power_of_two(n) for n in (1, 3, 5, 8)]
        [1, 4, 8, 8]
    """
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


@dataclass(frozen=True)
class MerkleNode:
    """
    A node of the Merkle tree.

    Leaves have no children; internal nodes own exactly two. Nodes are
    frozen, and every parent owns its own children (padding uses clones).
    """
    digest: bytes
    left: Optional["MerkleNode"] = field(default=None, repr=False)
    right: Optional["MerkleNode"] = field(default=None, repr=False)

    @classmethod
    def leaf(cls, content: bytes) -> "MerkleNode":
        """Create a leaf node from raw file contents."""
        return cls(digest=hash_bytes(content))

    @classmethod
    def combine(cls, first: "MerkleNode", second: "MerkleNode") -> "MerkleNode":
        """Create the parent of ``first`` (left) and ``second`` (right)."""
        return cls(
            digest=merkle_parent(first.digest, second.digest),
            left=first,
            right=second,
        )

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def clone(self) -> "MerkleNode":
        """Return a distinct node with the same digest and children."""
        return replace(self)


@dataclass(frozen=True)
class ProofStep:
    """
    One entry of an audit path.

    Attributes:
        digest: Digest carried by this step
        side: Operand position of ``digest`` during recombination.
              None only for a value produced by recombination itself.
    """
    digest: bytes
    side: Optional[NodeSide] = None

    def __post_init__(self) -> None:
        """Normalise string sides coming from deserialised data."""
        if self.side is not None and not isinstance(self.side, NodeSide):
            object.__setattr__(self, "side", NodeSide(self.side))

    def __repr__(self) -> str:
        if self.side is None:
            return f"ProofStep(h: {short_hex(self.digest)})"
        return f"ProofStep(h: {short_hex(self.digest)} {self.side.value})"


@dataclass(frozen=True)
class MerkleTree:
    """
    Merkle tree over one snapshot of ``name -> content``.

    Build with :meth:`MerkleTree.build`. The tree is never mutated; a
    content change requires building a new tree.

    Attributes:
        root: Root node
        leaf_count: Number of files the tree was built from (before padding)
    """
    root: MerkleNode
    leaf_count: int = 1

    @classmethod
    def build(cls, files: Mapping[str, bytes]) -> "MerkleTree":
        """
        Build a tree from a mapping of file name to file contents.

        Files are consumed in ascending name order. If the number of files
        is not a power of two, the last leaf is cloned until it is.

        Args:
            files: Mapping of unique file names to contents

        Returns:
            A new MerkleTree

        Raises:
            EmptyInputException: If ``files`` is empty
        """
        if not files:
            raise EmptyInputException()

        nodes: list[MerkleNode] = [MerkleNode.leaf(files[name]) for name in sorted(files)]
        leaf_count = len(nodes)

        # Balance tree
        if not is_power_of_two(leaf_count):
            last_leaf = nodes[-1]
            padding = closest_bigger_power_of_two(leaf_count) - leaf_count
            nodes.extend(last_leaf.clone() for _ in range(padding))
            logger.debug(f"Padded {leaf_count} leaves with {padding} clones of {short_hex(last_leaf.digest)}")

        while len(nodes) > 1:
            next_level: list[MerkleNode] = []
            while nodes:
                first = nodes.pop()
                if nodes:
                    second = nodes.pop()
                    next_level.append(MerkleNode.combine(first, second))
                else:
                    next_level.append(first)
            nodes = next_level

        tree = cls(root=nodes[0], leaf_count=leaf_count)
        logger.debug(f"Built Merkle tree over {leaf_count} files, root {short_hex(tree.root_hash)}")
        return tree

    @property
    def root_hash(self) -> bytes:
        """Digest of the root node."""
        return self.root.digest

    def get_root_hash(self) -> bytes:
        return self.root_hash

    @property
    def is_degenerate(self) -> bool:
        """True when the tree holds a single file and cannot produce proofs."""
        return self.root.is_leaf

    @property
    def depth(self) -> int:
        """Number of levels from the root down to the leaves (inclusive)."""
        depth = 1
        node = self.root
        while node.left is not None:
            node = node.left
            depth += 1
        return depth

    def leaf_hashes(self) -> list[bytes]:
        """Leaf digests (padding included) in structural left-to-right order."""
        return [node.digest for node in self._iter_leaves()]

    def _iter_leaves(self) -> Iterator[MerkleNode]:
        stack: list[MerkleNode] = [self.root]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                yield node
                continue
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    # ------------------------------------------------------------------
    # Path location
    # ------------------------------------------------------------------

    @staticmethod
    def is_node_in_subtree(node: Optional[MerkleNode], target_hash: bytes) -> bool:
        """
        Whether ``target_hash`` is the digest of ``node`` or any descendant.

        Pre-order, left child before right child.
        """
        stack: list[Optional[MerkleNode]] = [node]
        while stack:
            current = stack.pop()
            if current is None:
                continue
            if current.digest == target_hash:
                return True
            stack.append(current.right)
            stack.append(current.left)
        return False

    def find_target_relative_to_node(
        self,
        node: MerkleNode,
        target_hash: bytes,
    ) -> Optional[NodeSide]:
        """
        Report which child subtree of ``node`` contains ``target_hash``.

        The left subtree is searched exhaustively first, so duplicate
        digests resolve to the left-most structural match.

        Returns:
            NodeSide.LEFT, NodeSide.RIGHT, or None when the target is not
            below ``node`` (including when ``node`` is a leaf).
        """
        if self.is_node_in_subtree(node.left, target_hash):
            return NodeSide.LEFT
        if self.is_node_in_subtree(node.right, target_hash):
            return NodeSide.RIGHT
        return None

    # ------------------------------------------------------------------
    # Proof generation
    # ------------------------------------------------------------------

    def generate_merkle_proof(
        self,
        file_name: str,
        files: Mapping[str, bytes],
    ) -> Optional[list[ProofStep]]:
        """
        Generate the audit path for ``file_name``.

        ``files`` must be the mapping this tree was built from. The walk
        starts at the root; at each node the sibling of the subtree holding
        the target is recorded with its side. At the last pair, the target
        leaf's own digest is recorded just before its sibling.

        The returned list is replayed from its tail: the tail is the
        leaf-adjacent end and the head is root-adjacent.

        Args:
            file_name: Name of the file to prove
            files: Snapshot the tree was built from

        Returns:
            List of ProofStep, or None when the file is absent or the tree
            has no usable path (single-file tree).
        """
        content = files.get(file_name)
        if content is None:
            logger.debug(f"No proof for {file_name}: not in snapshot")
            return None

        target_hash = hash_bytes(content)
        proof_list: list[ProofStep] = []
        current: Optional[MerkleNode] = self.root

        while current is not None:
            side = self.find_target_relative_to_node(current, target_hash)
            if side is None or current.left is None or current.right is None:
                break

            if side is NodeSide.LEFT:
                target_child, sibling = current.left, current.right
            else:
                target_child, sibling = current.right, current.left

            # If we are at the end add both leaves (one is the target)
            if current.left.digest == target_hash or current.right.digest == target_hash:
                proof_list.append(ProofStep(target_child.digest, side))

            proof_list.append(ProofStep(sibling.digest, side.opposite))
            current = target_child

        if not proof_list:
            logger.debug(f"No proof for {file_name}: tree has no usable path")
            return None

        return proof_list

    def generate_proof(
        self,
        file_name: str,
        files: Mapping[str, bytes],
    ) -> Optional[list[ProofStep]]:
        """Alias for :meth:`generate_merkle_proof`."""
        return self.generate_merkle_proof(file_name, files)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, indent: str = "        ") -> str:
        """
        Render the tree sideways: left subtree above, right subtree below,
        one abbreviated digest per line indented by depth.
        """
        lines: list[str] = []

        def _render(node: MerkleNode, depth: int) -> None:
            if node.left is not None:
                _render(node.left, depth + 1)
            lines.append(f"{indent * depth}{short_hex(node.digest)}")
            if node.right is not None:
                _render(node.right, depth + 1)

        _render(self.root, 0)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()


def build_merkle_tree(files: Mapping[str, bytes]) -> MerkleTree:
    """Build a MerkleTree from ``files``. See :meth:`MerkleTree.build`."""
    return MerkleTree.build(files)


def build_merkle_root(files: Mapping[str, bytes]) -> bytes:
    """Root digest of the tree built from ``files``."""
    return MerkleTree.build(files).root_hash


__all__ = [
    "NodeSide",
    "MerkleNode",
    "ProofStep",
    "MerkleTree",
    "merkle_parent",
    "is_power_of_two",
    "closest_bigger_power_of_two",
    "build_merkle_tree",
    "build_merkle_root",
]
