"""
Main entrypoint: echo server in the main thread.

Env: PORT (default 3000), HOST, APP_ENV / NODE_ENV (development adds console
request lines), LOG_DIR, LOG_LEVEL, LOG_FORMAT. An optional .env is loaded first.

ASGI app only: uvicorn echo_mirror.api_server.app:app --host 0.0.0.0 --port 3000
"""

import sys

# Configure structured JSON logging before other imports that may log
from echo_mirror.logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Resolve settings and serve until interrupted."""
    from echo_mirror.config.env import load_env
    from echo_mirror.config import get_settings

    if not load_env():
        logger.info("main_env_file_missing", message="No .env file found, using environment variables")

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error("main_config_error", error=str(e))
        sys.exit(1)

    from echo_mirror.api_server.server import EchoServer

    logger.info("main_listening", port=settings.port, environment=settings.environment)
    EchoServer(settings).run()


if __name__ == "__main__":
    main()
