"""
Failure isolation: contain a crash in one request and answer it with a JSON error.

Any Exception raised downstream becomes an Outcome carrying the HTTPError that was
written to the client. Only HTTPErrors marked expose reach the client with their own
status and message; everything else is the generic 500 envelope. The fault message
goes to diagnostics only. Nothing is retried.
"""

from __future__ import annotations

from echo_mirror.core.exceptions import HTTPError, internal_server_error
from echo_mirror.logging import get_logger
from echo_mirror.pipeline.base import CallNext, Exchange, Outcome, ResponseChannel, Stage

logger = get_logger(__name__)


async def write_error(channel: ResponseChannel, error: HTTPError) -> None:
    """
    Write error as a JSON response on channel.

    Once the response has started its status can no longer change: the envelope is
    appended to the body if the body is still open, and dropped if it is complete.
    """
    body = error.to_json()
    if not channel.started:
        await channel(
            {
                "type": "http.response.start",
                "status": error.status,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode("latin-1")),
                ],
            }
        )
        await channel({"type": "http.response.body", "body": body})
        return
    if channel.finished:
        logger.warning("error_response_dropped", reason="response already complete")
        return
    try:
        await channel({"type": "http.response.body", "body": body})
    except Exception as e:
        logger.warning("error_response_append_failed", error=str(e))


class FailureIsolationStage(Stage):
    """Outermost stage: one fault affects exactly one request."""

    async def process(self, exchange: Exchange, call_next: CallNext) -> Outcome:
        try:
            return await call_next(exchange)
        except Exception as exc:
            if isinstance(exc, HTTPError) and exc.expose:
                error = exc
            else:
                error = internal_server_error()
            logger.error(
                "request_fault_recovered",
                error=str(exc),
                error_type=type(exc).__name__,
                path=exchange.scope.get("path"),
                request_id=exchange.request_id,
            )
            await write_error(exchange.channel, error)
            return Outcome(error=error)
