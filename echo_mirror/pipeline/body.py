"""
Body capture: read a request body once, parse it, and replay it for the next reader.

The whole body is buffered in memory with no size limit. Parsed values are always
re-serializable: out-of-range numbers make the body unparseable and lone UTF-16
surrogates in strings become U+FFFD.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass
from typing import Any

from starlette.types import Message, Receive

_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    # NaN / Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _replace_surrogates(value: Any) -> Any:
    if isinstance(value, str):
        return _LONE_SURROGATE.sub("\ufffd", value)
    if isinstance(value, list):
        return [_replace_surrogates(v) for v in value]
    if isinstance(value, dict):
        return {_replace_surrogates(k): _replace_surrogates(v) for k, v in value.items()}
    return value


def parse_json_body(raw: bytes) -> Any:
    """Parsed JSON value, or None for an empty or unparseable body."""
    if not raw:
        return None
    try:
        value = json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except (ValueError, RecursionError):
        return None
    try:
        return _replace_surrogates(value)
    except RecursionError:
        return None


@dataclass(frozen=True)
class CapturedBody:
    """Raw body bytes and the JSON value parsed from them (None when absent)."""

    raw: bytes
    data: Any = None

    def replay(self, receive: Receive) -> Receive:
        """
        Receive callable that yields the buffered body once, then defers to receive.

        Downstream readers see the body as if the stream had never been consumed;
        later calls (http.disconnect) come from the original channel.
        """
        replayed = False

        async def replay_receive() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": self.raw, "more_body": False}
            return await receive()

        return replay_receive


async def capture_body(receive: Receive) -> CapturedBody:
    """Drain every http.request message from receive and parse the result."""
    chunks: list[bytes] = []
    while True:
        message = await receive()
        if message["type"] == "http.request":
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        elif message["type"] == "http.disconnect":
            break
    raw = b"".join(chunks)
    return CapturedBody(raw=raw, data=parse_json_body(raw))
