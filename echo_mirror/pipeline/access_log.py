"""
Structured access logging stage with request correlation.

Per request:
- X-Request-ID: fresh UUID4 set on the request headers and bound to the structlog
  context while downstream stages run.
- Body captured once (body.capture_body) and replayed to the handler.
- Status observed with StatusRecorder; duration measured around the downstream call.
- One AccessLogEntry appended to the day's file after the handler completes.
- Development mode: one concise console line (method, path, status, duration).

A request whose handler raises produces no entry; FailureIsolationStage logs the fault.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime

import structlog
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import MutableHeaders
from starlette.types import Scope

from echo_mirror.logging import get_logger
from echo_mirror.logging.access_file import AccessLogEntry, AccessLogFile
from echo_mirror.pipeline.base import REQUEST_ID_HEADER, CallNext, Exchange, Outcome, Stage
from echo_mirror.pipeline.body import capture_body
from echo_mirror.pipeline.status import StatusRecorder

logger = get_logger(__name__)


def request_uri(scope: Scope) -> str:
    """Request target as received: raw path plus query string."""
    raw_path = scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else scope["path"]
    query = scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


class AccessLogStage(Stage):
    """Time, correlate and log each request around the downstream stages."""

    def __init__(self, access_log: AccessLogFile, console: bool = False) -> None:
        self.access_log = access_log
        self.console = console

    async def process(self, exchange: Exchange, call_next: CallNext) -> Outcome:
        start = time.perf_counter()

        request_id = str(uuid.uuid4())
        MutableHeaders(scope=exchange.scope)[REQUEST_ID_HEADER] = request_id

        captured = await capture_body(exchange.receive)
        recorder = StatusRecorder(exchange.send)
        downstream = exchange.derive(receive=captured.replay(exchange.receive), send=recorder)

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            outcome = await call_next(downstream)

        response_time_ms = int((time.perf_counter() - start) * 1000)
        entry = AccessLogEntry(
            timestamp=datetime.now().astimezone().isoformat(timespec="seconds"),
            method=exchange.scope["method"],
            uri=request_uri(exchange.scope),
            status=recorder.status,
            request_body=captured.data,
            response_time_ms=response_time_ms,
        )
        # blocking file I/O stays off the event loop
        await run_in_threadpool(self.access_log.write, entry)

        if self.console:
            logger.info(
                "request_completed",
                method=entry.method,
                path=exchange.scope["path"],
                status=entry.status,
                response_time_ms=response_time_ms,
                request_id=request_id,
            )
        return outcome
