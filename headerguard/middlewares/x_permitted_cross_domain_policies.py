# headerguard/middlewares/x_permitted_cross_domain_policies.py

"""X-Permitted-Cross-Domain-Policies: tells Adobe clients which cross-domain policy files to trust."""

from typing import Any, Literal

from headerguard.middlewares.base import HeaderOptions, StaticHeader, parse_options

HEADER_NAME = "X-Permitted-Cross-Domain-Policies"


class XPermittedCrossDomainPoliciesOptions(HeaderOptions):
    permitted_policies: Literal["none", "master-only", "by-content-type", "all"] = "none"


def x_permitted_cross_domain_policies(options: Any = None) -> StaticHeader:
    opts = parse_options(XPermittedCrossDomainPoliciesOptions, options, HEADER_NAME)
    return StaticHeader(HEADER_NAME, opts.permitted_policies)
