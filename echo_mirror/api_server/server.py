"""
FastAPI server: echo routes behind the stage pipeline.

create_app() wires settings, the access log file and the stages into one app;
EchoServer runs it under uvicorn. Config via env (see echo_mirror.config).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Sequence

import uvicorn
from fastapi import FastAPI

from echo_mirror import __version__
from echo_mirror.api_server.routes import register_routes
from echo_mirror.config import Settings, get_settings
from echo_mirror.logging import get_logger
from echo_mirror.logging.access_file import AccessLogFile
from echo_mirror.pipeline import Stage, StagePipeline, default_stages

logger = get_logger(__name__)


def install_pipeline(app: FastAPI, stages: Sequence[Stage]) -> None:
    """Run every HTTP request of app through stages (stages[0] outermost)."""
    app.add_middleware(StagePipeline, stages=stages)


def create_app(
    settings: Settings | None = None,
    access_log: AccessLogFile | None = None,
) -> FastAPI:
    """
    Build the echo app.

    The access log file is opened on startup and closed on shutdown (lifespan);
    a file that cannot be opened leaves the server running without file logs.
    """
    settings = settings or get_settings()
    access_log = access_log or AccessLogFile(settings.log_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        access_log.open()
        logger.info(
            "api_started",
            environment=settings.environment,
            access_log=str(access_log.path) if access_log.is_open else None,
        )
        yield
        access_log.close()
        logger.info("api_stopped")

    # Docs routes off: every path belongs to the echo handler
    app = FastAPI(
        title="Echo Mirror",
        description="Mirrors request bodies back in a fixed JSON envelope.",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.access_log = access_log

    register_routes(app)
    install_pipeline(app, default_stages(settings, access_log))
    return app


class EchoServer:
    """
    Echo server bound to one set of settings.

        server = EchoServer(Settings(port=8080))
        server.run()
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.app = create_app(self.settings)

    def run(self) -> None:
        """Serve until interrupted. Uvicorn enforces the idle (keep-alive) timeout."""
        logger.info(
            "server_starting",
            host=self.settings.host,
            port=self.settings.port,
            idle_timeout_sec=self.settings.idle_timeout_sec,
            # uvicorn has no per-read / per-write deadline; reported for visibility
            read_timeout_sec=self.settings.read_timeout_sec,
            write_timeout_sec=self.settings.write_timeout_sec,
        )
        uvicorn.run(
            self.app,
            host=self.settings.host,
            port=self.settings.port,
            timeout_keep_alive=int(self.settings.idle_timeout_sec),
            access_log=False,
            log_level="info" if self.settings.is_development else "warning",
        )
