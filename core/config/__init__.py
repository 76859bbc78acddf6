"""
Runtime Configuration Module

Provides configuration loading and management for Merkle Vault.
"""

from .runtime import (
    ClientConfig,
    HttpConfig,
    RuntimeConfig,
    ServerConfig,
    default_config_paths,
    load_config_file,
)

__all__ = [
    "ClientConfig",
    "HttpConfig",
    "RuntimeConfig",
    "ServerConfig",
    "default_config_paths",
    "load_config_file",
]
