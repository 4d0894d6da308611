import logging

import pytest
from pydantic import ValidationError

from headerguard.config import Settings, settings
from headerguard.diagnostics import LoggingDiagnostics, default_sink
from headerguard.middlewares.content_security_policy import DirectiveCompiler


def test_defaults():
    assert settings.csp_reserved_characters == ";,"
    assert settings.diagnostics_logger == "headerguard"
    assert DirectiveCompiler().reserved == ";,"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HEADERGUARD_CSP_RESERVED_CHARACTERS", ";")
    monkeypatch.setenv("HEADERGUARD_LOG_LEVEL", "debug")
    monkeypatch.setenv("HEADERGUARD_EXPOSE_ERROR_DETAILS", "false")

    configured = Settings()

    assert configured.csp_reserved_characters == ";"
    assert configured.log_level == "DEBUG"
    assert configured.expose_error_details is False


def test_reserved_characters_cannot_be_empty(monkeypatch):
    monkeypatch.setenv("HEADERGUARD_CSP_RESERVED_CHARACTERS", "")
    with pytest.raises(ValidationError):
        Settings()


def test_compiler_follows_settings(monkeypatch):
    monkeypatch.setattr(settings, "csp_reserved_characters", ";|")
    assert DirectiveCompiler().reserved == ";|"


def test_logging_diagnostics(caplog):
    sink = LoggingDiagnostics(logging.getLogger("headerguard.tests"))
    with caplog.at_level(logging.WARNING, logger="headerguard.tests"):
        sink.warn("careful")
    assert [(r.name, r.levelno, r.getMessage()) for r in caplog.records] == [
        ("headerguard.tests", logging.WARNING, "careful"),
    ]


def test_default_sink_uses_configured_logger():
    assert default_sink().logger.name == settings.diagnostics_logger


def test_configure_logging_uses_settings(monkeypatch):
    from pythonjsonlogger.json import JsonFormatter

    from headerguard.logging_config import configure_logging

    root = logging.getLogger()
    diagnostics_logger = logging.getLogger(settings.diagnostics_logger)
    saved = (list(root.handlers), root.level, diagnostics_logger.level)
    monkeypatch.setattr(settings, "log_level", "error")
    try:
        configure_logging()

        assert root.level == logging.ERROR
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)
        assert diagnostics_logger.level == logging.WARNING
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
        diagnostics_logger.setLevel(saved[2])
