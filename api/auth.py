"""Bearer token verification and ownership checks.

Tokens are JWTs whose subject is the user id as a string. Verification
itself is delegated to flask-jwt-extended; views opt in with
``@jwt_required()``.
"""

from datetime import timedelta

from flask_jwt_extended import JWTManager, create_access_token, get_jwt_identity

from api.errors import ForbiddenError, UnauthorizedError, error_response
from config import Config
from logger import get_logger

logger = get_logger()


def init_jwt(app, config: Config) -> JWTManager:
    """Configure JWT verification on the app.

    Every authentication failure is answered with a 401 in the standard
    error envelope.

    Args:
        app: Flask application.
        config: Application configuration holding the signing secret.

    Returns:
        The JWTManager bound to the app.
    """
    app.config["JWT_SECRET_KEY"] = config.jwt_secret_key
    app.config["JWT_TOKEN_LOCATION"] = ["headers"]
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        minutes=config.token_expires_minutes
    )

    jwt = JWTManager(app)

    @jwt.unauthorized_loader
    def missing_token(reason):
        logger.warning(f"401: {reason}")
        return error_response(reason, 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        logger.warning(f"401: invalid token: {reason}")
        return error_response(reason, 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        logger.warning("401: expired token")
        return error_response("Token has expired", 401)

    return jwt


def issue_token(user_id: int) -> str:
    """Sign an access token for a user. Must run inside an app context."""
    return create_access_token(identity=str(user_id))


def current_user_id() -> int:
    """Get the authenticated user's id from the verified token.

    Raises:
        UnauthorizedError: If the token subject is not an integer id.
    """
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        raise UnauthorizedError("Token subject is not a user id")


def require_owner(user_id: int) -> None:
    """Ensure the authenticated user is the owner ``user_id``.

    Raises:
        ForbiddenError: If the caller is someone else.
    """
    caller = current_user_id()
    if caller != user_id:
        raise ForbiddenError(f"User {caller} may not access resources of user {user_id}")
