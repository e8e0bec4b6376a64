"""
Structured logging for Echo Mirror.

Diagnostics (startup, degraded access log, recovered faults) go through structlog
as JSON lines. The per-day access log file is written by access_file.AccessLogFile.
"""

from echo_mirror.logging.logger import get_logger

__all__ = ["get_logger"]
