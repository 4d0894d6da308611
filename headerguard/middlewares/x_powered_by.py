# headerguard/middlewares/x_powered_by.py

"""X-Powered-By: removed, since it only advertises the server stack."""

from headerguard.middlewares.base import RemoveHeader

HEADER_NAME = "X-Powered-By"


def x_powered_by() -> RemoveHeader:
    return RemoveHeader(HEADER_NAME)
