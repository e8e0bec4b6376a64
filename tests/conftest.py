"""
Pytest fixtures for Echo Mirror tests. Access logs go to a temporary directory.
"""

from __future__ import annotations

import json
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from echo_mirror.api_server.routes import register_routes
from echo_mirror.api_server.server import create_app, install_pipeline
from echo_mirror.config import Settings
from echo_mirror.core.exceptions import HTTPError
from echo_mirror.logging.access_file import AccessLogFile, access_log_path
from echo_mirror.pipeline import default_stages


@pytest.fixture
def settings(tmp_path):
    """Production-mode settings with logs under tmp_path/log."""
    return Settings(log_dir=tmp_path / "log")


@pytest.fixture
def access_log(settings):
    return AccessLogFile(settings.log_dir)


@pytest.fixture
def app(settings, access_log):
    return create_app(settings, access_log)


@pytest.fixture
def client(app):
    """TestClient with lifespan running, so the access log file is open."""
    with TestClient(app) as c:
        yield c


def build_faulty_app(settings: Settings, access_log: AccessLogFile) -> FastAPI:
    """Echo app plus routes that raise, behind the standard stages."""
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom: secret internals")

    @app.get("/teapot")
    async def teapot():
        raise HTTPError(418, "short and stout", expose=True)

    @app.get("/hidden")
    async def hidden():
        raise HTTPError(403, "do not leak this", expose=False)

    register_routes(app)
    install_pipeline(app, default_stages(settings, access_log))
    return app


@pytest.fixture
def faulty_client(settings, access_log):
    with TestClient(build_faulty_app(settings, access_log)) as c:
        yield c


@pytest.fixture
def read_access_log(settings):
    """Return today's access log lines parsed as JSON."""

    def _read() -> list[dict[str, Any]]:
        path = access_log_path(settings.log_dir)
        if not path.exists():
            return []
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]

    return _read
