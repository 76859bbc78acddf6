"""
Runtime Configuration

Central configuration for the vault server, the client, and HTTP transport.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.storage.file_store import DEFAULT_CLIENT_DIR, DEFAULT_ROOT_FILE, DEFAULT_SERVER_DIR

load_dotenv()


@dataclass
class ServerConfig:
    """Configuration for the file server."""
    path: str = DEFAULT_SERVER_DIR
    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class ClientConfig:
    """Configuration for the client side of the vault."""
    files_path: str = DEFAULT_CLIENT_DIR
    merkle_path: str = DEFAULT_ROOT_FILE
    server_url: str = "http://127.0.0.1:3000"


@dataclass
class HttpConfig:
    """Configuration for HTTP client."""
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    user_agent: str = "merkle-vault/0.1.0"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for Merkle Vault.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    server: ServerConfig = field(default_factory=ServerConfig)
    client: ClientConfig = field(default_factory=ClientConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - VAULT_SERVER_PATH: Directory the server stores files in
        - VAULT_SERVER_HOST: Interface the server binds to
        - VAULT_SERVER_PORT: Port the server listens on
        - VAULT_FILES_PATH: Client files directory
        - VAULT_MERKLE_PATH: File holding the client's Merkle root
        - VAULT_SERVER_URL: Base URL the client talks to
        - VAULT_HTTP_TIMEOUT: Request timeout in seconds
        - VAULT_LOG_LEVEL / VAULT_LOG_FILE: Logging
        """
        overrides: dict[str, Any] = {}

        # Server settings
        if os.getenv("VAULT_SERVER_PATH"):
            overrides.setdefault("server", {})["path"] = os.getenv("VAULT_SERVER_PATH")
        if os.getenv("VAULT_SERVER_HOST"):
            overrides.setdefault("server", {})["host"] = os.getenv("VAULT_SERVER_HOST")
        if os.getenv("VAULT_SERVER_PORT"):
            overrides.setdefault("server", {})["port"] = int(os.getenv("VAULT_SERVER_PORT", "3000"))

        # Client settings
        if os.getenv("VAULT_FILES_PATH"):
            overrides.setdefault("client", {})["files_path"] = os.getenv("VAULT_FILES_PATH")
        if os.getenv("VAULT_MERKLE_PATH"):
            overrides.setdefault("client", {})["merkle_path"] = os.getenv("VAULT_MERKLE_PATH")
        if os.getenv("VAULT_SERVER_URL"):
            overrides.setdefault("client", {})["server_url"] = os.getenv("VAULT_SERVER_URL")

        # HTTP
        if os.getenv("VAULT_HTTP_TIMEOUT"):
            overrides.setdefault("http", {})["timeout"] = float(os.getenv("VAULT_HTTP_TIMEOUT", "30"))

        # Logging
        if os.getenv("VAULT_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("VAULT_LOG_LEVEL")
        if os.getenv("VAULT_LOG_FILE"):
            overrides["log_file"] = os.getenv("VAULT_LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        server_data = data.get("server", {})
        client_data = data.get("client", {})
        http_data = data.get("http", {})

        server = ServerConfig(**server_data) if server_data else ServerConfig()
        client = ClientConfig(**client_data) if client_data else ClientConfig()
        http = HttpConfig(**http_data) if http_data else HttpConfig()

        return cls(
            server=server,
            client=client,
            http=http,
            log_level=data.get("log_level", "INFO"),
            log_file=data.get("log_file"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("server", "client", "http"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]
        if "log_file" in overrides:
            new_config.log_file = overrides["log_file"]

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "server": {
                "path": self.server.path,
                "host": self.server.host,
                "port": self.server.port,
            },
            "client": {
                "files_path": self.client.files_path,
                "merkle_path": self.client.merkle_path,
                "server_url": self.client.server_url,
            },
            "http": {
                "timeout": self.http.timeout,
                "max_retries": self.http.max_retries,
                "retry_delay": self.http.retry_delay,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": self.extra,
        }


def default_config_paths() -> list[Path]:
    """Config file locations searched when no explicit path is given, in order."""
    return [
        Path.cwd() / "vault.json",
        Path.cwd() / ".vault.json",
        Path.home() / ".config" / "merkle-vault" / "config.json",
    ]


def load_config_file(path: str | Path) -> RuntimeConfig:
    """
    Load configuration from a JSON or YAML file (by extension).

    Raises:
        FileNotFoundError: If ``path`` does not exist
    """
    path = Path(path)
    if path.suffix.lower() in (".yaml", ".yml"):
        return RuntimeConfig.from_yaml(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path) as f:
        data = json.load(f)
    return RuntimeConfig.from_dict(data)

