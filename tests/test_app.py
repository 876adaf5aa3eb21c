"""
Tests for the application factory: health route, prefixes, CORS and the
error envelope for failures outside the resource routers.
"""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from sample_backend import __version__
from sample_backend.api.app import create_app
from sample_backend.core.config import Settings
from sample_backend.core.exceptions import ConflictError
from sample_backend.core.logging_setup import QuietPollFilter


def _settings(**overrides) -> Settings:
    values = {"APP_ENV": "testing", "DATABASE_URL": "sqlite://"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == {"status": "ok", "version": __version__, "environment": "testing"}

    def test_custom_prefix(self) -> None:
        app = create_app(_settings(API_PREFIX="/api/v1"))
        with TestClient(app) as client:
            assert client.get("/api/v1/health").status_code == 200
            assert client.get("/api/health").status_code == 404

    def test_health_polls_filtered_from_access_log(self, app) -> None:
        filters = [f for f in logging.getLogger("uvicorn.access").filters if isinstance(f, QuietPollFilter)]
        assert len(filters) == 1
        record = logging.LogRecord(
            "uvicorn.access", logging.INFO, __file__, 1, '"GET /api/health HTTP/1.1" 200', None, None
        )
        assert filters[0].filter(record) is False


class TestErrorEnvelope:
    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "Not Found"

    def test_method_not_allowed(self, client: TestClient) -> None:
        response = client.patch("/api/users")
        assert response.status_code == 405
        assert response.json()["success"] is False

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/users", content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 422
        assert response.json()["message"] == "Validation failed"

    def test_app_error_without_field(self, app) -> None:
        @app.get("/boom-conflict")
        def _conflict():
            raise ConflictError("already there")

        with TestClient(app) as client:
            response = client.get("/boom-conflict")

        assert response.status_code == 409
        assert response.json()["errors"] is None

    @pytest.mark.parametrize(("debug", "message"), [(False, "Internal server error"), (True, "Internal server error: kaput")])
    def test_unhandled_exception(self, debug: bool, message: str) -> None:
        app = create_app(_settings(DEBUG=debug))

        @app.get("/boom")
        def _boom():
            raise RuntimeError("kaput")

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "data": None,
            "message": message,
            "errors": None,
            "meta": None,
        }


class TestCors:
    def test_preflight_from_dev_server(self, client: TestClient) -> None:
        response = client.options(
            "/api/users",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_unknown_origin_not_allowed(self, client: TestClient) -> None:
        response = client.get("/api/health", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in response.headers

    def test_server_error_keeps_cors_headers(self) -> None:
        app = create_app(_settings())

        @app.get("/api/boom")
        def _boom():
            raise RuntimeError("kaput")

        with TestClient(app) as client:
            response = client.get("/api/boom", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 500
        assert response.json()["message"] == "Internal server error"
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
