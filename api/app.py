"""Flask application factory for the Tally HTTP API."""

from typing import Optional

from flask import Flask, request
from flask_cors import CORS

from api import accounts, categories
from api.auth import init_jwt
from api.errors import register_error_handlers
from config import Config
from services.base import Services
from logger import attach_app_logger, get_logger

logger = get_logger()

CORS_ALLOW_METHODS = ["POST", "GET", "PUT", "DELETE"]
CORS_ALLOW_HEADERS = [
    "Content-Type",
    "Content-Length",
    "X-CSRF-Token",
    "Authorization",
    "accept",
    "origin",
    "Cache-Control",
    "X-Requested-With",
]


def create_app(config: Config, services: Optional[Services] = None) -> Flask:
    """Build the Flask app.

    Args:
        config: Application configuration.
        services: Optional services container (testing). If None, one is
                  created from config.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    app.json.sort_keys = False

    app.extensions["services"] = services or Services(config)

    CORS(
        app,
        resources={r"/*": {"origins": "*"}},
        methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        supports_credentials=True,
    )

    @app.before_request
    def answer_preflight():
        # Preflight requests never reach a view
        if request.method == "OPTIONS":
            return "", 204

    attach_app_logger(app)
    init_jwt(app, config)
    register_error_handlers(app)

    app.register_blueprint(accounts.bp)
    app.register_blueprint(categories.bp)

    logger.info("API application created")
    return app
