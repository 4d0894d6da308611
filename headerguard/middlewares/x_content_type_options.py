# headerguard/middlewares/x_content_type_options.py

"""X-Content-Type-Options: disables MIME type sniffing."""

from headerguard.middlewares.base import StaticHeader

HEADER_NAME = "X-Content-Type-Options"


def x_content_type_options() -> StaticHeader:
    return StaticHeader(HEADER_NAME, "nosniff")
