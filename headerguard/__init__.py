# headerguard/__init__.py

"""
headerguard: security response headers for Starlette and FastAPI applications.

    from fastapi import FastAPI
    from headerguard import helmet

    app = FastAPI()
    app.middleware("http")(helmet())

Every header is also available on its own, under its option alias and under
its header-derived name (`frameguard` is `x_frame_options`, `hsts` is
`strict_transport_security`, ...), for use with `HeaderPipeline`.
"""

from headerguard.composer import (
    ALIASES,
    CAPABILITIES,
    REMOVED_ALIASES,
    feature_policy,
    helmet,
    hpkp,
    no_cache,
)
from headerguard.diagnostics import DiagnosticsSink, LoggingDiagnostics
from headerguard.exceptions import (
    ConfigurationError,
    HeaderGuardError,
    InvalidDirectiveError,
    RemovedCapabilityError,
)
from headerguard.middlewares import (
    content_security_policy,
    cross_origin_embedder_policy,
    expect_ct,
    origin_agent_cluster,
    referrer_policy,
    strict_transport_security,
    x_content_type_options,
    x_dns_prefetch_control,
    x_download_options,
    x_frame_options,
    x_permitted_cross_domain_policies,
    x_powered_by,
    x_xss_protection,
)
from headerguard.pipeline import HeaderPipeline, Helmet

# ─── Option Aliases ───────────────────────────────────────────────────────────
dns_prefetch_control = ALIASES["dns_prefetch_control"]
frameguard = ALIASES["frameguard"]
hide_powered_by = ALIASES["hide_powered_by"]
hsts = ALIASES["hsts"]
ie_no_open = ALIASES["ie_no_open"]
no_sniff = ALIASES["no_sniff"]
permitted_cross_domain_policies = ALIASES["permitted_cross_domain_policies"]
xss_filter = ALIASES["xss_filter"]

__all__ = [
    "ALIASES",
    "CAPABILITIES",
    "REMOVED_ALIASES",
    "ConfigurationError",
    "DiagnosticsSink",
    "HeaderGuardError",
    "HeaderPipeline",
    "Helmet",
    "InvalidDirectiveError",
    "LoggingDiagnostics",
    "RemovedCapabilityError",
    "content_security_policy",
    "cross_origin_embedder_policy",
    "dns_prefetch_control",
    "expect_ct",
    "feature_policy",
    "frameguard",
    "helmet",
    "hide_powered_by",
    "hpkp",
    "hsts",
    "ie_no_open",
    "no_cache",
    "no_sniff",
    "origin_agent_cluster",
    "permitted_cross_domain_policies",
    "referrer_policy",
    "strict_transport_security",
    "x_content_type_options",
    "x_dns_prefetch_control",
    "x_download_options",
    "x_frame_options",
    "x_permitted_cross_domain_policies",
    "x_powered_by",
    "x_xss_protection",
    "xss_filter",
]
