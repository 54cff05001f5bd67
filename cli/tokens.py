#!/usr/bin/env python3

from api.app import create_app
from api.auth import issue_token


def cmd_token(args, services):
    """Print an access token for a user, signed with the configured secret."""
    app = create_app(services.config, services)
    with app.app_context():
        print(issue_token(args.user_id))


def setup_parser(subparsers):
    """Setup token command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "token",
        help="Issue an access token for local use",
        description="Issue a bearer token for a user id",
    )
    parser.add_argument("--user-id", type=int, required=True, help="User id")
    parser.set_defaults(func=cmd_token)
