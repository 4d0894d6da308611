# headerguard/middlewares/x_dns_prefetch_control.py

"""X-DNS-Prefetch-Control: controls browser DNS prefetching ("off" by default)."""

from typing import Any

from headerguard.middlewares.base import HeaderOptions, StaticHeader, parse_options

HEADER_NAME = "X-DNS-Prefetch-Control"


class XDnsPrefetchControlOptions(HeaderOptions):
    allow: bool = False


def x_dns_prefetch_control(options: Any = None) -> StaticHeader:
    opts = parse_options(XDnsPrefetchControlOptions, options, HEADER_NAME)
    return StaticHeader(HEADER_NAME, "on" if opts.allow else "off")
