"""
Fake ASGI plumbing for driving stages and the pipeline without a server.
"""

from __future__ import annotations

import asyncio
from typing import Any


class ASGIRecorder:
    """Fake ASGI receive/send pair: feeds body chunks, records sent messages."""

    def __init__(self, chunks: list[bytes] | None = None) -> None:
        self._chunks = list(chunks if chunks is not None else [b""])
        self.sent: list[dict[str, Any]] = []

    async def receive(self) -> dict[str, Any]:
        if self._chunks:
            body = self._chunks.pop(0)
            return {"type": "http.request", "body": body, "more_body": bool(self._chunks)}
        return {"type": "http.disconnect"}

    async def send(self, message: dict[str, Any]) -> None:
        self.sent.append(message)

    @property
    def start(self) -> dict[str, Any]:
        return next(m for m in self.sent if m["type"] == "http.response.start")

    @property
    def body(self) -> bytes:
        return b"".join(m.get("body", b"") for m in self.sent if m["type"] == "http.response.body")

    def header(self, name: str) -> str | None:
        wanted = name.lower().encode("latin-1")
        for key, value in self.start["headers"]:
            if key.lower() == wanted:
                return value.decode("latin-1")
        return None


def http_scope(method: str = "GET", path: str = "/", query: bytes = b"") -> dict[str, Any]:
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query,
        "root_path": "",
        "headers": [(b"host", b"testserver")],
        "client": ("127.0.0.1", 12345),
        "server": ("testserver", 80),
    }


def run(coro):
    return asyncio.run(coro)
