# headerguard/composer.py

"""
Turns one options mapping into a ready-to-register security header middleware.

`helmet()` is the entry point of the package:

    app = FastAPI()
    app.middleware("http")(helmet({"hsts": False, "frameguard": {"action": "deny"}}))

Every recognised option key names one capability (one header concern). Its
value decides what happens:
- `False`            -> the header's handler is not installed at all
- `True` / omitted   -> installed with defaults (opt-in capabilities stay off
                        when omitted and are switched on by `True`)
- anything else      -> passed to the header's factory as options

Capabilities whose header has nothing to configure warn through the
diagnostics sink when given options, then install their fixed behaviour.

🧠 Construction is all-or-nothing: unknown keys, malformed options and misuse
raise `ConfigurationError` and no middleware is returned.
"""

import enum
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional, Tuple

from starlette.requests import HTTPConnection

from headerguard.diagnostics import DiagnosticsSink, default_sink
from headerguard.exceptions import ConfigurationError, RemovedCapabilityError
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
from headerguard.middlewares.base import HeaderHandler
from headerguard.pipeline import HeaderPipeline, Helmet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capability:
    """
    One header concern manageable through `helmet()` options.

    Attributes:
        alias (str): Option key (snake_case).
        factory (Callable): Builds the handler; takes `options` when
            `takes_options` is True, nothing otherwise.
        enabled_by_default (bool): Opt-out (True) or opt-in (False).
        takes_options (bool): Whether non-boolean values are meaningful.
    """
    alias: str
    factory: Callable[..., HeaderHandler]
    enabled_by_default: bool = True
    takes_options: bool = True


class CapabilityState(enum.Enum):
    DISABLED = "disabled"
    ENABLED = "enabled"
    CONFIGURED = "configured"


# ─── Capability Table (handler order) ─────────────────────────────────────────
CAPABILITIES: Tuple[Capability, ...] = (
    Capability("content_security_policy", content_security_policy),
    Capability("cross_origin_embedder_policy", cross_origin_embedder_policy,
               enabled_by_default=False, takes_options=False),
    Capability("expect_ct", expect_ct),
    Capability("origin_agent_cluster", origin_agent_cluster,
               enabled_by_default=False, takes_options=False),
    Capability("referrer_policy", referrer_policy),
    Capability("hsts", strict_transport_security),
    Capability("no_sniff", x_content_type_options, takes_options=False),
    Capability("dns_prefetch_control", x_dns_prefetch_control),
    Capability("ie_no_open", x_download_options, takes_options=False),
    Capability("frameguard", x_frame_options),
    Capability("permitted_cross_domain_policies", x_permitted_cross_domain_policies),
    Capability("hide_powered_by", x_powered_by, takes_options=False),
    Capability("xss_filter", x_xss_protection, takes_options=False),
)

_BY_ALIAS: Dict[str, Capability] = {c.alias: c for c in CAPABILITIES}

# Public alias -> implementing factory.
ALIASES: Mapping = MappingProxyType({c.alias: c.factory for c in CAPABILITIES})


# ─── Removed Capabilities ─────────────────────────────────────────────────────
def _removed(alias: str, message: str) -> Callable[..., None]:
    def removed(*args: Any, **kwargs: Any) -> None:
        raise RemovedCapabilityError(f"headerguard.{alias} {message}")

    removed.__name__ = alias
    removed.__qualname__ = alias
    return removed


feature_policy = _removed(
    "feature_policy",
    "was removed because the Feature-Policy header is deprecated. "
    "If you still need this header, you can use the `feature-policy` module.",
)
hpkp = _removed(
    "hpkp",
    "was removed because the header has been deprecated. "
    "If you still need this header, you can use the `hpkp` module. "
    "For more, see <https://github.com/helmetjs/helmet/issues/180>.",
)
no_cache = _removed(
    "no_cache",
    "was removed. You can use the `nocache` module instead. "
    "For more, see <https://github.com/helmetjs/helmet/issues/215>.",
)

REMOVED_ALIASES: Mapping = MappingProxyType({
    "feature_policy": feature_policy,
    "hpkp": hpkp,
    "no_cache": no_cache,
})


# ─── Option Normalization ─────────────────────────────────────────────────────
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")
_REQUEST_CLASS_NAMES = frozenset({"Request", "HTTPConnection", "WebSocket", "IncomingMessage"})

_MISUSE_MESSAGE = (
    "It appears you have done something like `app.middleware(\"http\")(helmet)`, "
    "but it should be `app.middleware(\"http\")(helmet())`. "
    "Call helmet() to build the middleware, then register the result."
)


def _normalize_option_name(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def _looks_like_request(value: Any) -> bool:
    return isinstance(value, HTTPConnection) or type(value).__name__ in _REQUEST_CLASS_NAMES


def _check_options(options: Any) -> Mapping:
    if options is None:
        return {}
    if _looks_like_request(options):
        raise ConfigurationError(_MISUSE_MESSAGE)
    if not isinstance(options, Mapping):
        if callable(options):
            raise ConfigurationError(_MISUSE_MESSAGE)
        raise ConfigurationError(
            f"helmet() options must be a mapping, got {type(options).__name__}"
        )
    return options


def resolve_states(
    options: Any,
    diagnostics: DiagnosticsSink,
) -> List[Tuple[Capability, CapabilityState, Any]]:
    """
    Normalize raw options into one explicit state per capability.

    Returns:
        (capability, state, options) triples in handler order. `options` is
        only meaningful for CONFIGURED entries.

    Raises:
        ConfigurationError: Unknown or duplicated keys, or misuse.
    """
    supplied: Dict[str, Tuple[str, Any]] = {}
    for key, value in _check_options(options).items():
        if not isinstance(key, str):
            raise ConfigurationError(f"helmet() option names must be strings, got {key!r}")
        alias = _normalize_option_name(key)
        if alias in REMOVED_ALIASES:
            REMOVED_ALIASES[alias]()
        if alias not in _BY_ALIAS:
            raise ConfigurationError(f"{key!r} is not a recognized helmet() option.")
        if alias in supplied:
            raise ConfigurationError(
                f"{key!r} and {supplied[alias][0]!r} configure the same header; pass only one."
            )
        supplied[alias] = (key, value)

    states: List[Tuple[Capability, CapabilityState, Any]] = []
    for capability in CAPABILITIES:
        key, value = supplied.get(capability.alias, (capability.alias, None))

        if value is False:
            state = CapabilityState.DISABLED
        elif value is None:
            state = CapabilityState.ENABLED if capability.enabled_by_default else CapabilityState.DISABLED
        elif value is True:
            state = CapabilityState.ENABLED
        elif capability.takes_options:
            state = CapabilityState.CONFIGURED
        else:
            if capability.enabled_by_default:
                diagnostics.warn(
                    f"{key} does not take options. Remove the property to silence this warning."
                )
            else:
                diagnostics.warn(
                    f"{key} does not take options. Set the property to `true` to silence this warning."
                )
            state = CapabilityState.ENABLED

        states.append((capability, state, value))
    return states


# ─── Entry Point ──────────────────────────────────────────────────────────────
def helmet(options: Any = None, diagnostics: Optional[DiagnosticsSink] = None) -> Helmet:
    """
    Build the security header middleware.

    Args:
        options (Mapping | None): Capability alias -> False | True | options.
            camelCase keys (`originAgentCluster`) are accepted.
        diagnostics (DiagnosticsSink | None): Receives option warnings.
            Defaults to a sink logging through `logging`.

    Returns:
        Helmet: A Starlette dispatch function applying every enabled header.

    Raises:
        ConfigurationError: On misuse, unknown keys or invalid header options.
    """
    sink = diagnostics if diagnostics is not None else default_sink()

    handlers: List[HeaderHandler] = []
    for capability, state, value in resolve_states(options, sink):
        if state is CapabilityState.DISABLED:
            continue
        if state is CapabilityState.CONFIGURED:
            handlers.append(capability.factory(value))
        else:
            handlers.append(capability.factory())

    logger.debug(
        "helmet configured",
        extra={"headers": [h.header_name for h in handlers]},
    )
    return Helmet(HeaderPipeline(handlers))
