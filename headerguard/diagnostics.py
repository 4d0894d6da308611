# headerguard/diagnostics.py

"""
Diagnostics sinks for advisory configuration warnings.

`helmet()` warns (it never fails) when an option-less header is given options.
Instead of printing to a global console, the warning goes to a sink passed in
by the caller. The default sink forwards to the standard `logging` module, so
the warning lands wherever the application's logging is configured.

Warnings are emitted once per offending `helmet()` call, never per request.
"""

import logging
from typing import Optional, Protocol

from headerguard.config import settings


class DiagnosticsSink(Protocol):
    """Anything with a `warn(message)` method can receive diagnostics."""

    def warn(self, message: str) -> None:
        ...


class LoggingDiagnostics:
    """
    Default sink: emits each diagnostic as a WARNING log record.

    Args:
        logger (logging.Logger | None): Target logger. Defaults to the logger
            named by `settings.diagnostics_logger`.
    """

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(settings.diagnostics_logger)

    def warn(self, message: str) -> None:
        self.logger.warning(message)


def default_sink() -> DiagnosticsSink:
    return LoggingDiagnostics()
