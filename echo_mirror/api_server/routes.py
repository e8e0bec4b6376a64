"""
Echo route: welcome message on the root path, body echo everywhere else.

- GET /            -> 200 {"message": "Welcome"}
- other method on / -> 405 "Method not allowed" (plain text)
- any other path   -> 200 {"response": {"data": <JSON body or null>, "message": "Redirect Data"}}

The route accepts every HTTP method, including non-standard ones. The catch-all
always answers 200; no redirect status or Location header is sent.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from echo_mirror.pipeline.body import parse_json_body

ECHO_PATH = "/{path:path}"


def welcome_payload() -> dict[str, str]:
    return {"message": "Welcome"}


def echo_payload(data: object) -> dict[str, dict[str, object]]:
    return {"response": {"data": data, "message": "Redirect Data"}}


async def echo(request: Request) -> Response:
    """Root path welcomes GET callers; every other path echoes the parsed JSON body."""
    if request.scope["path"] == "/":
        if request.method != "GET":
            return PlainTextResponse("Method not allowed", status_code=405)
        return JSONResponse(welcome_payload())

    data = parse_json_body(await request.body())
    return JSONResponse(echo_payload(data))


def register_routes(app: FastAPI) -> None:
    """
    Register the catch-all echo route on app.

    A plain route with no method list matches every method, so the handler
    decides what / answers instead of the router.
    """
    app.add_route(ECHO_PATH, echo, include_in_schema=False)
