# headerguard/main.py

"""
Demo FastAPI application wired with headerguard.

This file shows the intended integration end to end:
- JSON logging configured from settings
- `helmet()` registered as HTTP middleware
- A global exception handler rendering headerguard failures as JSON
- A `/healthz` probe

Run with:
    uvicorn headerguard.main:app

🧠 Request-time Content-Security-Policy failures reach `handle_headerguard_error`
because `Helmet` forwards pipeline errors to the application's exception
handlers instead of raising them.
"""

from typing import Any, Mapping, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from headerguard.composer import helmet
from headerguard.config import settings
from headerguard.diagnostics import DiagnosticsSink
from headerguard.exceptions import HeaderGuardError
from headerguard.logging_config import configure_logging


async def handle_headerguard_error(request: Request, exc: HeaderGuardError):
    """
    Return structured JSON for headerguard failures.

    The message is replaced by a generic one when
    `settings.expose_error_details` is off.
    """
    message = exc.detail if settings.expose_error_details else "Internal Server Error"
    return JSONResponse(status_code=exc.status_code, content={"message": message})


def create_app(
    options: Optional[Mapping[str, Any]] = None,
    diagnostics: Optional[DiagnosticsSink] = None,
) -> FastAPI:
    """
    Build a FastAPI app protected by `helmet(options)`.

    Args:
        options: Passed straight to `helmet()`.
        diagnostics: Passed straight to `helmet()`.
    """
    application = FastAPI(title="headerguard demo", version="0.1.0")

    # ─── Global Exception Handling ─────────────────────────────────────────────
    application.add_exception_handler(HeaderGuardError, handle_headerguard_error)

    # ─── Middleware Stack ──────────────────────────────────────────────────────
    application.middleware("http")(helmet(options, diagnostics))

    # ─── Health Probes ─────────────────────────────────────────────────────────
    @application.get("/healthz", tags=["health"])
    async def healthz():
        """Liveness probe; no external dependencies."""
        return {"status": "ok"}

    return application


# ───────────────────────────────────────────────────────────────────────────────
# Application Startup
# ───────────────────────────────────────────────────────────────────────────────
configure_logging()

app = create_app()
