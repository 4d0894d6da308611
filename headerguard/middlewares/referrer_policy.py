# headerguard/middlewares/referrer_policy.py

"""
Referrer-Policy: controls how much referrer information browsers send.

Accepts one token or a list of fallbacks (browsers use the last one they
understand), e.g. ["origin", "unsafe-url"].
"""

from typing import Any, List, Union

from pydantic import field_validator

from headerguard.middlewares.base import HeaderOptions, StaticHeader, parse_options

HEADER_NAME = "Referrer-Policy"

ALLOWED_TOKENS = frozenset({
    "no-referrer",
    "no-referrer-when-downgrade",
    "same-origin",
    "origin",
    "strict-origin",
    "origin-when-cross-origin",
    "strict-origin-when-cross-origin",
    "unsafe-url",
    "",
})


class ReferrerPolicyOptions(HeaderOptions):
    policy: Union[str, List[str]] = "no-referrer"

    @field_validator("policy")
    @classmethod
    def check_policy(cls, v: Union[str, List[str]]) -> List[str]:
        tokens = [v] if isinstance(v, str) else list(v)
        if not tokens:
            raise ValueError("policy must contain at least one token")

        seen = set()
        for token in tokens:
            if token not in ALLOWED_TOKENS:
                raise ValueError(f"{token!r} is not a valid referrer policy token")
            if token in seen:
                raise ValueError(f"{token!r} is specified more than once")
            seen.add(token)
        return tokens


def referrer_policy(options: Any = None) -> StaticHeader:
    opts = parse_options(ReferrerPolicyOptions, options, HEADER_NAME)
    return StaticHeader(HEADER_NAME, ",".join(opts.policy))
