"""
Request-processing pipeline.

Stages run outermost to innermost:

    FailureIsolationStage -> SecurityHeadersStage -> AccessLogStage -> app

Isolation wraps everything so no downstream failure escapes; the access log sits
next to the handler so it measures handler latency and sees the handler's status.
"""

from __future__ import annotations

from echo_mirror.config.settings import Settings
from echo_mirror.logging.access_file import AccessLogFile
from echo_mirror.pipeline.access_log import AccessLogStage
from echo_mirror.pipeline.base import Exchange, Outcome, Stage, StagePipeline
from echo_mirror.pipeline.recovery import FailureIsolationStage
from echo_mirror.pipeline.security import SecurityHeadersStage


def default_stages(settings: Settings, access_log: AccessLogFile) -> list[Stage]:
    """Standard stage order for the server."""
    return [
        FailureIsolationStage(),
        SecurityHeadersStage(),
        AccessLogStage(access_log, console=settings.is_development),
    ]


__all__ = [
    "AccessLogStage",
    "Exchange",
    "FailureIsolationStage",
    "Outcome",
    "SecurityHeadersStage",
    "Stage",
    "StagePipeline",
    "default_stages",
]
