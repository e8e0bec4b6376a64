"""
Application-level exceptions.

HTTPError is the error envelope written to clients: status and message are
serialized, expose is internal and decides whether the message may reach the
client at all.
"""

from __future__ import annotations

import json
from typing import Any


class HTTPError(Exception):
    """Structured HTTP error response."""

    def __init__(self, status: int, message: str, expose: bool = False) -> None:
        super().__init__(message)
        self.status = status
        self.message = message
        self.expose = expose

    def to_dict(self) -> dict[str, Any]:
        """Client-facing envelope; expose is never serialized."""
        return {"status": self.status, "message": self.message}

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict(), separators=(",", ":")).encode("utf-8")

    def __repr__(self) -> str:
        return f"HTTPError(status={self.status!r}, message={self.message!r}, expose={self.expose!r})"


def internal_server_error() -> HTTPError:
    """Generic fault envelope. Never exposed: the underlying detail stays in diagnostics."""
    return HTTPError(500, "Internal Server Error", expose=False)
