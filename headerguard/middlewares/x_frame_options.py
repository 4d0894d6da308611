# headerguard/middlewares/x_frame_options.py

"""
X-Frame-Options: legacy clickjacking protection.

Only "deny" and "sameorigin" are accepted; the obsolete ALLOW-FROM form is
rejected because no current browser honours it.
"""

from typing import Any

from pydantic import field_validator

from headerguard.middlewares.base import HeaderOptions, StaticHeader, parse_options

HEADER_NAME = "X-Frame-Options"


class XFrameOptionsOptions(HeaderOptions):
    action: str = "sameorigin"

    @field_validator("action")
    @classmethod
    def check_action(cls, v: str) -> str:
        normalized = v.lower()
        if normalized not in ("deny", "sameorigin"):
            raise ValueError(f"{v!r} is not a valid action; use 'deny' or 'sameorigin'")
        return normalized


def x_frame_options(options: Any = None) -> StaticHeader:
    opts = parse_options(XFrameOptionsOptions, options, HEADER_NAME)
    return StaticHeader(HEADER_NAME, opts.action.upper())
