# headerguard/middlewares/x_xss_protection.py

"""
X-XSS-Protection: turns the legacy browser XSS auditor off.

The auditor created more vulnerabilities than it prevented, so the only value
written is "0".
"""

from headerguard.middlewares.base import StaticHeader

HEADER_NAME = "X-XSS-Protection"


def x_xss_protection() -> StaticHeader:
    return StaticHeader(HEADER_NAME, "0")
