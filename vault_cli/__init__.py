"""
Merkle Vault CLI

Command-line interface for the vault server and client.

Usage:
    python -m vault_cli serve --path server_files --port 3000
    python -m vault_cli upload --files-path client_files --delete
    python -m vault_cli download file1.txt
    python -m vault_cli root client_files
    python -m vault_cli tree client_files
"""

__version__ = "0.1.0"
