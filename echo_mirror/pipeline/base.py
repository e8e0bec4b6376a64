"""
Stage chain: the request-processing pipeline shared by every stage.

- Exchange: one request in flight (ASGI scope, receive, send) plus its ResponseChannel.
- ResponseChannel: the outgoing side; holds response headers staged by stages and
  merges them into whatever response is eventually started.
- Outcome: per-request result at the transport boundary (success, or the HTTPError written).
- Stage: common capability, process(exchange, call_next) -> Outcome.
- StagePipeline: pure ASGI middleware composing an ordered list of stages around an app.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import partial
from typing import Awaitable, Callable, Sequence

from starlette.datastructures import Headers, MutableHeaders
from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from echo_mirror.core.exceptions import HTTPError
from echo_mirror.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class ResponseChannel:
    """
    ASGI send wrapper at the root of an exchange.

    Headers staged in .headers are added to the http.response.start message unless
    the response already carries a header of the same name. Tracks whether the
    response has started and finished so late writers know what is still possible.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self.headers = MutableHeaders()
        self.started = False
        self.finished = False

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            message = self._with_staged_headers(message)
            self.started = True
        elif message["type"] == "http.response.body" and not message.get("more_body", False):
            self.finished = True
        await self._send(message)

    def _with_staged_headers(self, message: Message) -> Message:
        headers = MutableHeaders(raw=[(k, v) for k, v in message.get("headers", [])])
        for key, value in self.headers.items():
            if key not in headers:
                headers.append(key, value)
        return {**message, "headers": headers.raw}


@dataclass
class Exchange:
    """One HTTP request moving through the stage chain."""

    scope: Scope
    receive: Receive
    send: Send
    channel: ResponseChannel

    @property
    def request(self) -> Request:
        return Request(self.scope, self.receive)

    @property
    def request_id(self) -> str | None:
        return Headers(scope=self.scope).get(REQUEST_ID_HEADER)

    def derive(self, **changes) -> Exchange:
        """Copy for downstream stages; scope and channel stay shared."""
        return replace(self, **changes)


@dataclass(frozen=True)
class Outcome:
    """Result of one exchange: error is the envelope written when processing faulted."""

    error: HTTPError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


CallNext = Callable[[Exchange], Awaitable[Outcome]]


class Stage:
    """One link in the chain with a single cross-cutting responsibility."""

    async def process(self, exchange: Exchange, call_next: CallNext) -> Outcome:
        raise NotImplementedError


class StagePipeline:
    """
    ASGI middleware running each HTTP request through an ordered list of stages.

    stages[0] is outermost. The chain is composed once at construction; the
    innermost call_next invokes the wrapped app. Non-HTTP scopes (lifespan,
    websocket) go straight to the app.

        app.add_middleware(StagePipeline, stages=[FailureIsolationStage(), ...])
    """

    def __init__(self, app: ASGIApp, stages: Sequence[Stage]) -> None:
        self.app = app
        self.stages = list(stages)
        chain: CallNext = self._dispatch
        for stage in reversed(self.stages):
            chain = partial(stage.process, call_next=chain)
        self._chain = chain

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        await self.run(scope, receive, send)

    async def run(self, scope: Scope, receive: Receive, send: Send) -> Outcome:
        """Run one HTTP request through the chain and return its Outcome."""
        channel = ResponseChannel(send)
        exchange = Exchange(scope=scope, receive=receive, send=channel, channel=channel)
        outcome = await self._chain(exchange)
        if not outcome.ok:
            logger.debug(
                "request_failed",
                status=outcome.error.status,
                request_id=exchange.request_id,
            )
        return outcome

    async def _dispatch(self, exchange: Exchange) -> Outcome:
        await self.app(exchange.scope, exchange.receive, exchange.send)
        return Outcome()
