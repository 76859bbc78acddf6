"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:create_app --factory --reload

    # Or run directly
    python -m api.app
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from fastapi import FastAPI

from api.deps import load_runtime_config
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    vault_error_handler,
)
from api.routes import files, health
from core.config.runtime import RuntimeConfig
from core.schemas.errors import VaultException
from core.storage import FileStore


# Configure logging: VAULT_LOG_LEVEL env var, then vault.json log_level
def _resolve_log_level() -> int:
    """Resolve log level from env var or vault.json, defaulting to INFO."""
    raw = os.getenv("VAULT_LOG_LEVEL")
    if raw is None:
        cfg_path = Path.cwd() / "vault.json"
        if cfg_path.exists():
            try:
                with open(cfg_path) as f:
                    raw = json.load(f).get("log_level")
            except (OSError, ValueError, AttributeError):
                raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(
    store_dir: str | Path | None = None,
    config: RuntimeConfig | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store_dir: Directory holding stored files (default: config server.path)
        config: Runtime configuration (default: loaded from file and env)
    """
    config = config or load_runtime_config()
    store = FileStore(store_dir if store_dir is not None else config.server.path)
    store.ensure_directory()

    app = FastAPI(
        title="Merkle Vault API",
        description="""
File storage with Merkle proofs of integrity.

## Endpoints

- **POST /upload** - Store a file (base64 content)
- **GET /file/{filename}** - Fetch a file with a Merkle proof against the current tree
- **GET /root** - Current Merkle root of the store
- **GET /health** - Health check
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.file_store = store
    app.state.config = config

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(VaultException, vault_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(files.router)

    logger.info(f"Serving files from {store.directory}")
    return app


def run(host: str | None = None, port: int | None = None, store_dir: str | None = None) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    config = load_runtime_config()
    application = create_app(store_dir=store_dir, config=config)
    bind_host = host or config.server.host
    bind_port = port or config.server.port
    logger.info(f"Listening on {bind_host}:{bind_port}")
    uvicorn.run(application, host=bind_host, port=bind_port)


if __name__ == "__main__":
    run()
