"""
Environment loading for Echo Mirror.

- Loads .env from the project root (or the current directory) when available.
- Small parsing helpers so every setting reads env the same way.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is echo_mirror/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"


def load_env() -> bool:
    """
    Load .env into os.environ without overriding variables already set.

    Returns True if a .env file was found and loaded. Safe to call multiple times.
    """
    if _ENV_PATH.is_file():
        return load_dotenv(_ENV_PATH)
    return load_dotenv()


def env_str(name: str, default: str) -> str:
    """Return stripped env value, or default when unset or blank."""
    return (os.getenv(name) or "").strip() or default


def env_int(name: str, default: int) -> int:
    """Return env value as int; raise ValueError naming the variable when malformed."""
    raw = env_str(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def env_float(name: str, default: float) -> float:
    """Return env value as float; raise ValueError naming the variable when malformed."""
    raw = env_str(name, str(default))
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
