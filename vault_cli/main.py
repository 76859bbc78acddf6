"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m vault_cli serve [--path DIR] [--host HOST] [--port PORT]
    python -m vault_cli upload [--files-path DIR] [--merkle-path FILE] [--server URL] [--delete] [--json]
    python -m vault_cli download <filename> [--files-path DIR] [--merkle-path FILE] [--server URL] [--json]
    python -m vault_cli root [PATH] [--json]
    python -m vault_cli tree [PATH]
    python -m vault_cli prove <filename> [PATH] [--out FILE]
    python -m vault_cli verify <proof.json> <file> [--root 0x...] [--merkle-path FILE]
    python -m vault_cli config --init

Environment Variables:
    VAULT_SERVER_PATH       Directory the server stores files in (default: server_files)
    VAULT_SERVER_PORT       Port the server listens on (default: 3000)
    VAULT_FILES_PATH        Client files directory (default: client_files)
    VAULT_MERKLE_PATH       File holding the client's root (default: merkle.bin)
    VAULT_SERVER_URL        Server base URL for upload/download
    VAULT_LOG_LEVEL         Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from vault_cli.commands import serve, upload, download, inspect, proofs
from vault_cli.config import load_config, get_default_config_template


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_client_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--files-path",
        type=str,
        default=None,
        help="Local files directory (default: from config or client_files)",
    )
    parser.add_argument(
        "--merkle-path",
        type=str,
        default=None,
        help="File holding the Merkle root (default: from config or merkle.bin)",
    )
    parser.add_argument(
        "--server",
        type=str,
        default=None,
        help="Server base URL (default: from config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle-vault",
        description="Merkle Vault CLI - Store files remotely and verify them against a local Merkle root.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./vault.json or ~/.config/merkle-vault/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- serve command ---
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the file server",
        description="Accept uploads and serve files together with their Merkle proofs.",
    )
    serve_parser.add_argument("--path", type=str, default=None, help="Storage directory (default: server_files)")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (default: 3000)")
    serve_parser.set_defaults(func=serve.serve_cmd)

    # --- upload command ---
    upload_parser = subparsers.add_parser(
        "upload",
        help="Store the Merkle root locally and upload all files",
        description="Compute the root of the local files, save it, and upload every file to the server.",
    )
    _add_client_paths(upload_parser)
    upload_parser.add_argument(
        "--delete",
        action="store_true",
        default=False,
        help="Delete local copies once every upload succeeded",
    )
    upload_parser.set_defaults(func=upload.upload_cmd)

    # --- download command ---
    download_parser = subparsers.add_parser(
        "download",
        help="Download a file and verify its proof",
        description="Fetch a file with its proof and save it only if the proof matches the stored root.",
    )
    download_parser.add_argument("filename", type=str, help="Name of the file to download")
    _add_client_paths(download_parser)
    download_parser.set_defaults(func=download.download_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the Merkle root of a directory",
    )
    root_parser.add_argument("path", type=str, nargs="?", default=None, help="Directory (default: client files)")
    root_parser.add_argument("--json", action="store_true", help="JSON output")
    root_parser.set_defaults(func=inspect.root_cmd)

    # --- tree command ---
    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the Merkle tree of a directory",
    )
    tree_parser.add_argument("path", type=str, nargs="?", default=None, help="Directory (default: client files)")
    tree_parser.set_defaults(func=inspect.tree_cmd)

    # --- prove command ---
    prove_parser = subparsers.add_parser(
        "prove",
        help="Generate a proof for a local file",
    )
    prove_parser.add_argument("filename", type=str, help="File to prove")
    prove_parser.add_argument("path", type=str, nargs="?", default=None, help="Directory (default: client files)")
    prove_parser.add_argument("--out", "-o", type=str, default=None, help="Write the proof to this file")
    prove_parser.set_defaults(func=proofs.prove_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a saved proof offline",
        description="Check a JSON proof for a file against a root given in hex or read from the root file.",
    )
    verify_parser.add_argument("proof", type=str, help="Path to proof JSON")
    verify_parser.add_argument("file", type=str, help="Path to file content")
    verify_parser.add_argument("--root", type=str, default=None, help="Root as 0x-prefixed hex")
    verify_parser.add_argument("--merkle-path", type=str, default=None, help="Root file (default: merkle.bin)")
    verify_parser.set_defaults(func=proofs.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="vault.json",
        help="Path for config file (default: vault.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (VAULT_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: merkle-vault config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
