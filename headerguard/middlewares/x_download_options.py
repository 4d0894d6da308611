# headerguard/middlewares/x_download_options.py

"""X-Download-Options: keeps old Internet Explorer from opening downloads in the site's context."""

from headerguard.middlewares.base import StaticHeader

HEADER_NAME = "X-Download-Options"


def x_download_options() -> StaticHeader:
    return StaticHeader(HEADER_NAME, "noopen")
