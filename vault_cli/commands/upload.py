"""
CLI Upload Command

Commit to the local files with a Merkle root, then hand them to the server.

Steps:
1. Snapshot the local files directory
2. Build the tree and persist its root (the only thing the client keeps)
3. Upload every file
4. Optionally delete the local copies once every upload succeeded

Usage:
    merkle-vault upload [--files-path DIR] [--merkle-path FILE] [--server URL] [--delete] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.crypto.hashing import to_hex
from core.merkle import MerkleTree
from core.schemas.errors import EmptyInputException, TransportException
from core.storage import FileStore, RootStore
from vault_cli import client as vault_client


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class UploadSummary:
    """Summary of an upload run for CLI output."""
    files_path: str = ""
    merkle_path: str = ""
    root: str = ""
    uploaded: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["deleted"]:
            del d["deleted"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def ok(self) -> bool:
        return not self.errors


def print_summary_human(summary: UploadSummary) -> None:
    print(f"files: {summary.files_path}")
    print(f"root: {summary.root}")
    print(f"root stored at: {summary.merkle_path}")
    print(f"uploaded: {len(summary.uploaded)}")
    if summary.deleted:
        print(f"deleted locally: {len(summary.deleted)}")
    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors[:10]:
            print(f"  ✗ {err}")


def upload_cmd(args: Namespace) -> int:
    """
    Execute the upload command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    store = FileStore(args.files_path or config.client.files_path)
    roots = RootStore(args.merkle_path or config.client.merkle_path)

    files = store.snapshot()
    try:
        tree = MerkleTree.build(files)
    except EmptyInputException:
        print(f"Error: No files to upload in {store.directory}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if tree.is_degenerate:
        logger.warning("Only one file: the server will not be able to produce proofs for it")

    roots.save(tree.root_hash)

    summary = UploadSummary(
        files_path=str(store.directory),
        merkle_path=str(roots.path),
        root=to_hex(tree.root_hash),
    )

    with vault_client.create_client(config, server_url=args.server) as client:
        for name, content in files.items():
            try:
                client.upload_file(name, content)
                summary.uploaded.append(name)
            except TransportException as e:
                logger.error(f"Upload of {name} failed: {e}")
                summary.errors.append(f"{name}: {e.message}")

    if args.delete:
        if summary.ok:
            for name in summary.uploaded:
                store.delete(name)
                summary.deleted.append(name)
        else:
            logger.warning("Keeping local files because some uploads failed")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.ok else EXIT_RUNTIME_ERROR
