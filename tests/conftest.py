"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
settings          testing settings backed by an in-memory SQLite database
app               application built from ``settings``
client            ``TestClient`` with the app's lifespan (tables created)
make_user         POSTs a user and returns its JSON ``data``
template_root     a minimal template checkout that passes the layout check
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sample_backend.api.app import create_app
from sample_backend.core.config import Settings, get_settings

# ── Application ───────────────────────────────────────────────────────────────


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        APP_ENV="testing",
        DATABASE_URL="sqlite://",
        API_PREFIX="/api",
        DEFAULT_PAGE_SIZE=20,
        MAX_PAGE_SIZE=50,
    )


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(client: TestClient):
    counter = {"n": 0}

    def _make(name: str | None = None, email: str | None = None) -> dict:
        counter["n"] += 1
        payload = {
            "name": name or f"User {counter['n']}",
            "email": email or f"user{counter['n']}@example.com",
        }
        response = client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    """``get_settings`` is cached per process; isolate tests from each other."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """The CLI and ``setup_logging`` replace root handlers; undo that per test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


# ── Template layout ───────────────────────────────────────────────────────────


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """Vite scaffold plus an empty backend, as the template README documents."""
    client_dir = tmp_path / "sample-client"
    (client_dir / "src").mkdir(parents=True)
    (tmp_path / "sample-backend").mkdir()

    (client_dir / "package.json").write_text(
        json.dumps({"name": "sample-client", "private": True, "scripts": {"dev": "vite"}}),
        encoding="utf-8",
    )
    (client_dir / "tsconfig.json").write_text(
        "{\n"
        "  // project references generated by the scaffold\n"
        '  "files": [],\n'
        '  "references": [{ "path": "./tsconfig.app.json" }],\n'
        "}\n",
        encoding="utf-8",
    )
    (client_dir / ".env.example").write_text(
        "# API base URL used by the client\nVITE_API_BASE_URL=http://localhost:8000/api\n",
        encoding="utf-8",
    )
    return tmp_path
