"""
CLI Download Command

Fetch a file with its Merkle proof from the server and accept it only if
the proof replays to the locally stored root.

Usage:
    merkle-vault download <filename> [--files-path DIR] [--merkle-path FILE] [--server URL] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from core.crypto.hashing import hash_bytes, to_hex
from core.merkle import proof_from_records, verify_merkle_proof
from core.schemas.errors import RootNotFoundException, TransportException
from core.storage import FileStore, RootStore
from vault_cli import client as vault_client


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class DownloadSummary:
    """Outcome of a download for CLI output."""
    filename: str = ""
    size: int = 0
    content_hash: str = ""
    root: str = ""
    proof_steps: int = 0
    verified: bool = False
    saved_to: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.saved_to is None:
            del d["saved_to"]
        return d


def print_summary_human(summary: DownloadSummary) -> None:
    print(f"file: {summary.filename} ({summary.size} bytes)")
    print(f"root: {summary.root}")
    print(f"proof steps: {summary.proof_steps}")
    print(f"proof is: {str(summary.verified).lower()}")
    if summary.saved_to:
        print(f"saved to: {summary.saved_to}")


def download_cmd(args: Namespace) -> int:
    """
    Execute the download command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (2 when the proof does not verify)
    """
    config = args.cli_config
    store = FileStore(args.files_path or config.client.files_path)
    roots = RootStore(args.merkle_path or config.client.merkle_path)

    try:
        root = roots.load()
    except RootNotFoundException as e:
        print(f"Error: {e.message}. Run 'merkle-vault upload' first.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        with vault_client.create_client(config, server_url=args.server) as client:
            response = client.fetch_file(args.filename)
    except TransportException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # The proof only binds content to the root, not to a name
    if response.filename != args.filename:
        print(
            f"Error: asked for {args.filename!r} but server sent {response.filename!r}",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        content = response.content_bytes()
    except ValueError as e:
        print(f"Error: server sent undecodable content: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof = proof_from_records(response.merkle_proof)
    verified = verify_merkle_proof(proof, root, content)

    summary = DownloadSummary(
        filename=args.filename,
        size=len(content),
        content_hash=to_hex(hash_bytes(content)),
        root=to_hex(root),
        proof_steps=len(proof),
        verified=verified,
    )

    if verified:
        summary.saved_to = str(store.save(args.filename, content))
        logger.info(f"Proof for {args.filename} verified")
    else:
        logger.warning(f"Proof for {args.filename} rejected; file not saved")

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if verified else EXIT_VERIFICATION_FAILED
