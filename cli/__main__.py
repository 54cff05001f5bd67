#!/usr/bin/env python3
"""
Tally CLI - run the finance tracking API and manage its database.

Usage:
    python -m cli <command> [subcommand] [options]

Commands:
    serve        Run the HTTP API
    migrate      Database migrations
    token        Issue an access token for local use

Examples:
    python -m cli migrate status
    python -m cli migrate apply
    python -m cli serve --port 8080
    python -m cli token --user-id 1
"""

import sys
import argparse
from cli import migrate, serve, tokens
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Tally - Personal finance tracking API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    serve.setup_parser(subparsers)
    migrate.setup_parser(subparsers)
    tokens.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Migrate commands need db_manager for raw database operations
            if args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
