"""
FastAPI/ASGI application entrypoint.

Run with: uvicorn echo_mirror.api_server.app:app --host 0.0.0.0 --port 3000
"""

from echo_mirror.api_server.server import create_app

app = create_app()

__all__ = ["app"]
