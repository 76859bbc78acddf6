"""
CLI command modules.
"""

from vault_cli.commands import serve, upload, download, inspect, proofs

__all__ = ["serve", "upload", "download", "inspect", "proofs"]
