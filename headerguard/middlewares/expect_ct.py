# headerguard/middlewares/expect_ct.py

"""
Expect-CT: asks browsers to check Certificate Transparency.

Defaults to `max-age=0`, which keeps the header harmless for sites that have
not set up reporting.
"""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from headerguard.middlewares.base import HeaderOptions, StaticHeader, parse_options

HEADER_NAME = "Expect-CT"


class ExpectCtOptions(HeaderOptions):
    max_age: float = Field(default=0, ge=0, allow_inf_nan=False)
    enforce: bool = False
    report_uri: Optional[str] = None

    @field_validator("max_age")
    @classmethod
    def round_max_age(cls, v: float) -> int:
        return round(v)

    @field_validator("report_uri")
    @classmethod
    def check_report_uri(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and ('"' in v or not v.strip()):
            raise ValueError("report_uri must be a non-empty string without double quotes")
        return v


def expect_ct(options: Any = None) -> StaticHeader:
    opts = parse_options(ExpectCtOptions, options, HEADER_NAME)

    parts: List[str] = [f"max-age={opts.max_age}"]
    if opts.enforce:
        parts.append("enforce")
    if opts.report_uri:
        parts.append(f'report-uri="{opts.report_uri}"')

    return StaticHeader(HEADER_NAME, ", ".join(parts))
