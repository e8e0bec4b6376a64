"""
Application settings from environment.

Settings are resolved once at startup and passed into the app factory and the
stage chain as plain values; nothing downstream reads os.environ.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from echo_mirror.config.env import env_float, env_int, env_str, load_env

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_LOG_DIR = "log"
DEVELOPMENT = "development"


@dataclass(frozen=True)
class Settings:
    """Typed server settings."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    environment: str = "production"
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    read_timeout_sec: float = 15.0
    write_timeout_sec: float = 15.0
    idle_timeout_sec: float = 60.0

    @property
    def is_development(self) -> bool:
        """Development mode adds a console line per request."""
        return self.environment == DEVELOPMENT


def get_settings() -> Settings:
    """
    Return settings resolved from env (after loading .env).

    PORT, HOST, APP_ENV (falls back to NODE_ENV), LOG_DIR,
    READ_TIMEOUT_SEC, WRITE_TIMEOUT_SEC, IDLE_TIMEOUT_SEC.
    Raises ValueError for malformed numbers.
    """
    load_env()
    port = env_int("PORT", DEFAULT_PORT)
    if not 0 < port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535, got {port}")
    environment = env_str("APP_ENV", env_str("NODE_ENV", "production")).lower()
    return Settings(
        port=port,
        host=env_str("HOST", DEFAULT_HOST),
        environment=environment,
        log_dir=Path(env_str("LOG_DIR", DEFAULT_LOG_DIR)),
        read_timeout_sec=env_float("READ_TIMEOUT_SEC", 15.0),
        write_timeout_sec=env_float("WRITE_TIMEOUT_SEC", 15.0),
        idle_timeout_sec=env_float("IDLE_TIMEOUT_SEC", 60.0),
    )
