# headerguard/middlewares/cross_origin_embedder_policy.py

"""
Cross-Origin-Embedder-Policy: stops the document from loading cross-origin
resources that don't explicitly grant permission. Off unless enabled.
"""

from headerguard.middlewares.base import StaticHeader

HEADER_NAME = "Cross-Origin-Embedder-Policy"


def cross_origin_embedder_policy() -> StaticHeader:
    return StaticHeader(HEADER_NAME, "require-corp")
