# headerguard/middlewares/strict_transport_security.py

"""
Strict-Transport-Security: tells browsers to prefer HTTPS for future visits.

Defaults to 180 days with includeSubDomains, matching what most deployments
want once they are fully on HTTPS.
"""

from typing import Any, List

from pydantic import Field, field_validator

from headerguard.middlewares.base import HeaderOptions, StaticHeader, parse_options

HEADER_NAME = "Strict-Transport-Security"

DEFAULT_MAX_AGE = 180 * 24 * 60 * 60


class StrictTransportSecurityOptions(HeaderOptions):
    """
    Fields:
        max_age (int): Seconds the browser should remember to use HTTPS.
        include_sub_domains (bool): Apply the rule to every subdomain.
        preload (bool): Opt in to browser preload lists.
    """
    max_age: float = Field(default=DEFAULT_MAX_AGE, ge=0, allow_inf_nan=False)
    include_sub_domains: bool = True
    preload: bool = False

    @field_validator("max_age")
    @classmethod
    def round_max_age(cls, v: float) -> int:
        return round(v)


def strict_transport_security(options: Any = None) -> StaticHeader:
    opts = parse_options(StrictTransportSecurityOptions, options, HEADER_NAME)

    parts: List[str] = [f"max-age={opts.max_age}"]
    if opts.include_sub_domains:
        parts.append("includeSubDomains")
    if opts.preload:
        parts.append("preload")

    return StaticHeader(HEADER_NAME, "; ".join(parts))
