"""
Configuration management for Echo Mirror.

Loads settings from environment variables and an optional .env file.
Exposes a single source of truth for server configuration.
"""

from echo_mirror.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
