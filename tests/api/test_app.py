from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

ENDPOINTS = [
    ("post", "/account"),
    ("get", "/account/1"),
    ("delete", "/account/1"),
    ("put", "/account"),
    ("get", "/account"),
    ("get", "/account/graph/1/expense"),
    ("get", "/account/reports/1/expense"),
    ("post", "/category"),
    ("get", "/category/1"),
    ("delete", "/category/1"),
    ("put", "/category"),
    ("get", "/category"),
]


class _ExplodingServices:
    """Services stand-in that fails the test if any store call is made."""

    def __getattr__(self, name):
        raise AssertionError(f"store accessed: {name}")


class TestAuthentication:
    """Requests without a valid token never reach the handlers."""

    @pytest.mark.parametrize("method,path", ENDPOINTS)
    def test_missing_token(self, app, client, method, path):
        """Test that every endpoint rejects requests without a token."""
        app.extensions["services"] = _ExplodingServices()

        response = getattr(client, method)(path, json={})

        assert response.status_code == 401
        assert "error" in response.get_json()

    def test_invalid_token(self, app, client):
        """Test that a garbage token is rejected."""
        app.extensions["services"] = _ExplodingServices()

        response = client.get("/account/1", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert "error" in response.get_json()

    def test_expired_token(self, app, client):
        """Test that an expired token is rejected."""
        with app.app_context():
            token = create_access_token(identity="1", expires_delta=timedelta(seconds=-1))

        response = client.get("/account/1", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.get_json() == {"error": "Token has expired"}

    def test_token_with_non_numeric_subject(self, app, client):
        """Test that a token whose subject is not a user id is rejected."""
        with app.app_context():
            token = create_access_token(identity="alice")

        response = client.get(
            "/account",
            query_string={"user_id": 1, "type": "expense"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 401


class TestCors:
    """Cross-origin behavior."""

    def test_preflight_returns_empty_204(self, client):
        """Test that OPTIONS is answered before auth with no body."""
        response = client.options(
            "/account",
            headers={
                "Origin": "http://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )

        assert response.status_code == 204
        assert response.data == b""
        assert response.headers["Access-Control-Allow-Origin"] == "http://example.com"
        allowed = response.headers["Access-Control-Allow-Methods"]
        for method in ("POST", "GET", "PUT", "DELETE"):
            assert method in allowed

    def test_cross_origin_request_gets_cors_headers(self, client, auth_headers):
        """Test that ordinary responses allow the caller's origin."""
        response = client.get(
            "/account/graph/1/expense",
            headers={**auth_headers(1), "Origin": "http://example.com"},
        )

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "http://example.com"
        assert response.headers["Access-Control-Allow-Credentials"] == "true"


class TestErrorEnvelope:
    """Every failure uses the same error body."""

    def test_unknown_route(self, client):
        """Test that unknown routes answer with the envelope."""
        response = client.get("/nope")

        assert response.status_code == 404
        assert set(response.get_json()) == {"error"}

    def test_method_not_allowed(self, client):
        """Test that a wrong method answers with the envelope."""
        response = client.patch("/account")

        assert response.status_code == 405
        assert set(response.get_json()) == {"error"}

    def test_store_failure_is_500(self, client, auth_headers, services):
        """Test that storage errors surface as an internal error."""
        with services.db_manager.connect() as conn:
            conn.execute("DROP TABLE accounts")
            conn.commit()

        response = client.get("/account/1", headers=auth_headers(1))

        assert response.status_code == 500
        assert response.get_json() == {"error": "internal server error"}
