# headerguard/middlewares/__init__.py

"""
One module per security header.

Each module exposes a factory named after its header (e.g. `x_frame_options`)
returning a `HeaderHandler`. Factories for configurable headers take a single
`options` argument (a mapping, snake_case or camelCase keys); the others take
none.
"""

from headerguard.middlewares.content_security_policy import content_security_policy
from headerguard.middlewares.cross_origin_embedder_policy import cross_origin_embedder_policy
from headerguard.middlewares.expect_ct import expect_ct
from headerguard.middlewares.origin_agent_cluster import origin_agent_cluster
from headerguard.middlewares.referrer_policy import referrer_policy
from headerguard.middlewares.strict_transport_security import strict_transport_security
from headerguard.middlewares.x_content_type_options import x_content_type_options
from headerguard.middlewares.x_dns_prefetch_control import x_dns_prefetch_control
from headerguard.middlewares.x_download_options import x_download_options
from headerguard.middlewares.x_frame_options import x_frame_options
from headerguard.middlewares.x_permitted_cross_domain_policies import x_permitted_cross_domain_policies
from headerguard.middlewares.x_powered_by import x_powered_by
from headerguard.middlewares.x_xss_protection import x_xss_protection

__all__ = [
    "content_security_policy",
    "cross_origin_embedder_policy",
    "expect_ct",
    "origin_agent_cluster",
    "referrer_policy",
    "strict_transport_security",
    "x_content_type_options",
    "x_dns_prefetch_control",
    "x_download_options",
    "x_frame_options",
    "x_permitted_cross_domain_policies",
    "x_powered_by",
    "x_xss_protection",
]
