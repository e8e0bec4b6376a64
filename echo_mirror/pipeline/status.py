"""
Response status tracking for access logs.
"""

from __future__ import annotations

from starlette.types import Message, Send


class StatusRecorder:
    """Pass-through ASGI send that remembers the first response status written."""

    def __init__(self, send: Send, default: int = 200) -> None:
        self._send = send
        self.status = default
        self._recorded = False

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start" and not self._recorded:
            self.status = message["status"]
            self._recorded = True
        await self._send(message)
