"""
CLI Proof Commands

Generate a proof for a local file, and verify a saved proof offline.

Usage:
    merkle-vault prove <filename> [PATH] [--out FILE]
    merkle-vault verify <proof.json> <file> [--root 0x...] [--merkle-path FILE]
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from core.crypto.hashing import from_hex
from core.merkle import MerkleTree, proof_from_records, proof_to_records, verify_merkle_proof
from core.schemas.errors import EmptyInputException, RootNotFoundException
from core.schemas.transport import ProofStepRecord
from core.storage import FileStore, RootStore


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

_PROOF_ADAPTER = TypeAdapter(list[ProofStepRecord])


def dump_proof(records: list[ProofStepRecord]) -> str:
    return _PROOF_ADAPTER.dump_json(records, indent=2).decode("utf-8")


def load_proof(path: Path) -> list[ProofStepRecord]:
    """
    Parse a proof file.

    Raises:
        ValueError: If the file is not a valid list of proof records
    """
    try:
        return _PROOF_ADAPTER.validate_json(path.read_bytes())
    except ValidationError as e:
        raise ValueError(f"Invalid proof file {path}: {e.error_count()} error(s)") from e


def prove_cmd(args: Namespace) -> int:
    """Write the proof for one file of a local directory."""
    store = FileStore(args.path or args.cli_config.client.files_path)
    files = store.snapshot()

    try:
        tree = MerkleTree.build(files)
    except EmptyInputException:
        print(f"Error: No files in {store.directory}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    proof = tree.generate_merkle_proof(args.filename, files)
    if proof is None:
        reason = "not found" if args.filename not in files else "tree has a single file"
        print(f"Error: Could not generate proof for {args.filename}: {reason}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    output = dump_proof(proof_to_records(proof))
    if args.out:
        Path(args.out).write_text(output + "\n")
        print(f"Proof written to {args.out}")
    else:
        print(output)
    return EXIT_SUCCESS


def verify_cmd(args: Namespace) -> int:
    """Verify a saved proof for a file against a root."""
    try:
        records = load_proof(Path(args.proof))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        content = Path(args.file).read_bytes()
    except OSError as e:
        print(f"Error: Cannot read {args.file}: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        if args.root:
            root = from_hex(args.root)
        else:
            root = RootStore(args.merkle_path or args.cli_config.client.merkle_path).load()
    except ValueError as e:
        print(f"Error: Invalid root: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except RootNotFoundException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    verified = verify_merkle_proof(proof_from_records(records), root, content)
    print(f"proof is: {str(verified).lower()}")
    return EXIT_SUCCESS if verified else EXIT_VERIFICATION_FAILED
