"""
CLI Configuration

Configuration loading for the vault CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config.runtime import RuntimeConfig, default_config_paths, load_config_file


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    An explicit ``config_path`` must exist. Without one, the first existing
    default location is used. Environment variables override file settings.

    Args:
        config_path: Optional path to config file (.json, .yaml or .yml)

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If ``config_path`` is given but missing
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = load_config_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
