# headerguard/config.py

"""
Configuration module for headerguard.

This module defines process-wide settings using Pydantic's `BaseSettings` class,
so every value can be overridden from the environment (prefix `HEADERGUARD_`)
or from a `.env` file.

These settings cover the ambient behaviour of the library, not the headers
themselves (those are configured per application through `helmet(options)`):
- Log level used by the demo application
- Logger that receives configuration diagnostics
- Characters rejected inside Content-Security-Policy directive values
- Whether error handlers may echo error messages back to clients
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ─── Logging ───────────────────────────────────────────────────────────────
    log_level: str = "INFO"                  # Root log level for the demo app
    diagnostics_logger: str = "headerguard"  # Logger receiving option warnings

    # ─── Content-Security-Policy ───────────────────────────────────────────────
    # Characters that may never appear inside a single directive value.
    # ";" separates directives and "," separates policies on the wire.
    csp_reserved_characters: str = ";,"

    # ─── Error Responses ───────────────────────────────────────────────────────
    expose_error_details: bool = True  # Echo HeaderGuardError messages to clients

    # ─── Pydantic Global Configuration ─────────────────────────────────────────
    model_config = SettingsConfigDict(
        env_prefix="HEADERGUARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ─── Validators ────────────────────────────────────────────────────────────
    @field_validator("csp_reserved_characters")
    @classmethod
    def check_reserved_characters(cls, v: str) -> str:
        """
        At least one reserved character is required, otherwise a directive value
        could smuggle an extra directive into the header.
        """
        if not v:
            raise ValueError("csp_reserved_characters must contain at least one character")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


# Instantiate a singleton config object, importable throughout the package
settings = Settings()
