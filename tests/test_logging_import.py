"""
Test that echo_mirror.logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from echo_mirror.logging and use the logger."""
    from echo_mirror.logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")


def test_app_module_import(monkeypatch, tmp_path):
    """The uvicorn entrypoint module builds an app from env."""
    import importlib
    import sys

    monkeypatch.setenv("LOG_DIR", str(tmp_path / "log"))
    sys.modules.pop("echo_mirror.api_server.app", None)
    module = importlib.import_module("echo_mirror.api_server.app")
    assert module.app.title == "Echo Mirror"


def test_configured_processors():
    """Timestamps come from TimeStamper; JSON output renames event to event_type."""
    import structlog

    from echo_mirror.logging import logger as logger_module

    processors = structlog.get_config()["processors"]
    kinds = [type(p) for p in processors]
    assert structlog.processors.TimeStamper in kinds
    assert structlog.processors.StackInfoRenderer not in kinds
    if logger_module.LOG_FORMAT == "json":
        assert kinds[-2:] == [structlog.processors.EventRenamer, structlog.processors.JSONRenderer]
