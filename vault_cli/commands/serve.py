"""
CLI Serve Command

Run the vault file server.

Usage:
    merkle-vault serve [--path DIR] [--host HOST] [--port PORT]
"""

from __future__ import annotations

import logging
from argparse import Namespace


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0


def serve_cmd(args: Namespace) -> int:
    """
    Execute the serve command.

    Blocks until the server is stopped.
    """
    import uvicorn

    from api.app import create_app

    config = args.cli_config
    store_dir = args.path or config.server.path
    host = args.host or config.server.host
    port = args.port or config.server.port

    app = create_app(store_dir=store_dir, config=config)

    print("Welcome to merkle-vault server!")
    print(f"Listening on {host}:{port}, storing files in {store_dir}")
    logger.info(f"Starting server on {host}:{port}")

    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())
    return EXIT_SUCCESS
