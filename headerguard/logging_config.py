# headerguard/logging_config.py

"""
Configures structured JSON logging for applications using headerguard.

The library itself only ever calls `logging.getLogger(__name__)`; it never
installs handlers on import. Applications (like the bundled demo in
`headerguard.main`) call `configure_logging()` once at startup to get one JSON
line per event on stdout.

Uses the `python-json-logger` package to serialize logs to structured JSON.

💡 Control verbosity with the HEADERGUARD_LOG_LEVEL environment variable.
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from headerguard.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configures the global Python logger.

    Replaces any existing root handlers with a single JSON formatter writing
    to stdout. Option diagnostics stay visible even when the root level is
    stricter than WARNING.

    Args:
        level (str | None): Log level (e.g., "DEBUG", "INFO", "WARNING").
            Defaults to `settings.log_level`.
    """
    level = (level or settings.log_level).upper()

    handler = logging.StreamHandler(sys.stdout)

    # JSON fields included in logs
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    handler.setFormatter(JsonFormatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # helmet() warnings must never be filtered out by a quiet root logger
    diagnostics = logging.getLogger(settings.diagnostics_logger)
    diagnostics.setLevel(min(logging.WARNING, root.level))
