"""
CLI Inspection Commands

Offline views of the tree over a local directory.

Usage:
    merkle-vault root [PATH] [--json]
    merkle-vault tree [PATH]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from core.crypto.hashing import to_hex
from core.merkle import MerkleTree
from core.schemas.errors import EmptyInputException
from core.storage import FileStore


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def _load_tree(args: Namespace) -> tuple[FileStore, MerkleTree] | None:
    store = FileStore(args.path or args.cli_config.client.files_path)
    try:
        return store, MerkleTree.build(store.snapshot())
    except EmptyInputException:
        print(f"Error: No files in {store.directory}", file=sys.stderr)
        return None


def root_cmd(args: Namespace) -> int:
    """Print the Merkle root of a directory."""
    loaded = _load_tree(args)
    if loaded is None:
        return EXIT_RUNTIME_ERROR
    store, tree = loaded

    if args.json:
        print(json.dumps({
            "path": str(store.directory),
            "root": to_hex(tree.root_hash),
            "file_count": tree.leaf_count,
            "depth": tree.depth,
        }, indent=2))
    else:
        print(to_hex(tree.root_hash))
    return EXIT_SUCCESS


def tree_cmd(args: Namespace) -> int:
    """Print the tree, left subtree above and right subtree below each node."""
    loaded = _load_tree(args)
    if loaded is None:
        return EXIT_RUNTIME_ERROR
    _, tree = loaded

    print(tree.render(), end="")
    return EXIT_SUCCESS
