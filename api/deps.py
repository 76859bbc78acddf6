"""
API Dependencies

Dependency injection for the API.
Provides the runtime configuration and the file store routes operate on.
"""

from __future__ import annotations

import logging

from fastapi import Request

from core.config.runtime import RuntimeConfig, default_config_paths, load_config_file
from core.storage import FileStore

logger = logging.getLogger(__name__)


def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./vault.json
      2. ./.vault.json
      3. ~/.config/merkle-vault/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    config: RuntimeConfig | None = None

    for path in default_config_paths():
        if path.exists():
            try:
                config = load_config_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        # No config file found, start with defaults
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_file_store(request: Request) -> FileStore:
    """Return the FileStore attached to the application at creation time."""
    return request.app.state.file_store
