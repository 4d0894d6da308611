# headerguard/middlewares/origin_agent_cluster.py

"""
Origin-Agent-Cluster: asks the browser to isolate the page in an
origin-keyed agent cluster. Off unless enabled.
"""

from headerguard.middlewares.base import StaticHeader

HEADER_NAME = "Origin-Agent-Cluster"


def origin_agent_cluster() -> StaticHeader:
    return StaticHeader(HEADER_NAME, "?1")
