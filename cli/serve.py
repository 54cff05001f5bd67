#!/usr/bin/env python3

from api.app import create_app
from logger import get_logger

logger = get_logger()


def cmd_serve(args, services):
    """Run the HTTP API."""
    config = services.config
    host = args.host or config.server_host
    port = args.port or config.server_port

    app = create_app(config, services)
    logger.info(f"Serving Tally API on http://{host}:{port}")
    app.run(host=host, port=port)


def setup_parser(subparsers):
    """Setup serve command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API",
        description="Run the HTTP API with the configured database",
    )
    parser.add_argument("--host", help="Interface to bind (default: from config)")
    parser.add_argument(
        "--port", type=int, help="Port to listen on (default: from config)"
    )
    parser.set_defaults(func=cmd_serve)
