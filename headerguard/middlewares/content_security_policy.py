# headerguard/middlewares/content_security_policy.py

"""
Content-Security-Policy handler and its directive compiler.

Unlike the other headers, this one has structure: a list of directives, each a
name followed by zero or more values, serialized as

    default-src 'self';img-src 'self' data:;upgrade-insecure-requests

`DirectiveCompiler` does the work in two phases:

1. Construction: merge the user's directives into the default policy,
   normalize every name (`defaultSrc` / `default_src` -> `default-src`),
   validate every value's shape and freeze the result.
2. Per request: resolve callable values against the current request and
   response, validate the resolved strings, and join everything into the wire
   format.

The frozen directive map is shared by all requests. Resolution only builds
local lists, so concurrent requests never interfere with each other.

🧠 Directive names and values are not interpreted: any syntactically valid
directive is passed through as-is.
"""

import re
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import field_validator
from starlette.requests import Request
from starlette.responses import Response

from headerguard.config import settings
from headerguard.exceptions import ConfigurationError, InvalidDirectiveError
from headerguard.middlewares.base import HeaderHandler, HeaderOptions, maybe_await, parse_options

HEADER_NAME = "Content-Security-Policy"
REPORT_ONLY_HEADER_NAME = "Content-Security-Policy-Report-Only"

# Marker for directives that are emitted as a bare name.
NO_ARGUMENTS: Tuple[()] = ()

DirectiveElement = Union[str, Callable[[Request, Response], Any]]
# True (or an empty sequence) means "name only"; False removes a default.
DirectiveValue = Union[str, Sequence[DirectiveElement], bool]

DEFAULT_DIRECTIVES: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "default-src": ("'self'",),
    "base-uri": ("'self'",),
    "block-all-mixed-content": NO_ARGUMENTS,
    "font-src": ("'self'", "https:", "data:"),
    "frame-ancestors": ("'self'",),
    "img-src": ("'self'", "data:"),
    "object-src": ("'none'",),
    "script-src": ("'self'",),
    "script-src-attr": ("'none'",),
    "style-src": ("'self'", "https:", "'unsafe-inline'"),
    "upgrade-insecure-requests": NO_ARGUMENTS,
})

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")
_VALID_NAME = re.compile(r"^[a-z0-9-]+$")


def normalize_directive_name(name: str) -> str:
    """
    Canonical lowercase-hyphenated form of a directive name.

    >>> normalize_directive_name("scriptSrcAttr")
    'script-src-attr'
    >>> normalize_directive_name("img_src")
    'img-src'
    """
    return _CAMEL_BOUNDARY.sub(r"-\1", name).replace("_", "-").lower()


def is_directive_value_invalid(value: Any, reserved: str) -> bool:
    """A resolved value must be a non-blank string free of reserved characters."""
    if not isinstance(value, str) or not value.strip():
        return True
    return any(char in value for char in reserved)


class ContentSecurityPolicyOptions(HeaderOptions):
    """
    Fields:
        directives: Mapping of directive name to value, merged into the defaults.
            `False` or `None` keeps the default policy untouched.
        use_defaults (bool): Start from the default policy (default True).
        report_only (bool): Send Content-Security-Policy-Report-Only instead.
    """
    directives: Optional[Union[Mapping[str, Any], bool]] = None
    use_defaults: bool = True
    report_only: bool = False

    @field_validator("directives")
    @classmethod
    def check_directives(cls, v):
        if v is True:
            raise ValueError("directives must be a mapping, False or None")
        return v


class DirectiveCompiler:
    """
    Builds the immutable directive map and serializes it per request.

    Args:
        directives: User directives (mapping), or `False`/`None` for defaults only.
        use_defaults (bool): Merge into the default policy when True.
        reserved (str | None): Characters rejected inside values. Defaults to
            `settings.csp_reserved_characters`.
        header_name (str): Used in error messages.

    Raises:
        ConfigurationError: On a malformed directive name or value.
    """

    def __init__(
        self,
        directives: Optional[Union[Mapping[str, DirectiveValue], bool]] = None,
        use_defaults: bool = True,
        reserved: Optional[str] = None,
        header_name: str = HEADER_NAME,
    ) -> None:
        self.header_name = header_name
        self.reserved = reserved if reserved is not None else settings.csp_reserved_characters

        merged: Dict[str, Tuple[DirectiveElement, ...]] = dict(DEFAULT_DIRECTIVES) if use_defaults else {}

        if directives is not None and directives is not False:
            if not isinstance(directives, Mapping):
                raise ConfigurationError(
                    f"{header_name} directives must be a mapping, got {type(directives).__name__}"
                )
            for raw_name, raw_value in directives.items():
                name = self._normalize_name(raw_name)
                if raw_value is False:
                    merged.pop(name, None)
                    continue
                merged[name] = self._normalize_value(name, raw_value)

        self.directives: Mapping[str, Tuple[DirectiveElement, ...]] = MappingProxyType(merged)

    def _normalize_name(self, raw_name: Any) -> str:
        if not isinstance(raw_name, str):
            raise ConfigurationError(
                f"{self.header_name} received a directive name that is not a string: {raw_name!r}"
            )
        name = normalize_directive_name(raw_name)
        if not name or not _VALID_NAME.match(name):
            raise ConfigurationError(
                f"{self.header_name} received an invalid directive name {raw_name!r}"
            )
        return name

    def _normalize_value(self, name: str, raw_value: Any) -> Tuple[DirectiveElement, ...]:
        if raw_value is True:
            return NO_ARGUMENTS
        if isinstance(raw_value, str):
            elements: Tuple[Any, ...] = (raw_value,)
        elif isinstance(raw_value, (list, tuple)):
            elements = tuple(raw_value)
        else:
            raise ConfigurationError(
                f'{self.header_name} received an invalid value type for "{name}": '
                f"{type(raw_value).__name__}"
            )

        for element in elements:
            if callable(element):
                continue
            if not isinstance(element, str) or is_directive_value_invalid(element, self.reserved):
                raise ConfigurationError(
                    f'{self.header_name} received an invalid directive value for "{name}"'
                )
        return elements

    def __len__(self) -> int:
        return len(self.directives)

    async def compile(self, request: Request, response: Response) -> Optional[str]:
        """
        Serialize the policy for one request.

        Returns:
            The header value, or None when the policy has no directives.

        Raises:
            InvalidDirectiveError: A value resolved to an empty string or one
                containing a reserved character.
            Exception: Whatever a directive callable raised.
        """
        if not self.directives:
            return None

        parts: List[str] = []
        for name, elements in self.directives.items():
            if not elements:
                parts.append(name)
                continue

            resolved: List[str] = []
            for element in elements:
                value = await maybe_await(element(request, response)) if callable(element) else element
                if is_directive_value_invalid(value, self.reserved):
                    raise InvalidDirectiveError(self.header_name, name)
                resolved.append(value)

            parts.append(" ".join([name, *resolved]))

        return ";".join(parts)


class ContentSecurityPolicy(HeaderHandler):
    """Writes the compiled policy, or nothing when the policy is empty."""

    def __init__(self, compiler: DirectiveCompiler, report_only: bool = False) -> None:
        self.compiler = compiler
        self.header_name = REPORT_ONLY_HEADER_NAME if report_only else HEADER_NAME

    async def __call__(self, request: Request, response: Response) -> None:
        value = await self.compiler.compile(request, response)
        if value is not None:
            response.headers[self.header_name] = value


def content_security_policy(options: Any = None) -> ContentSecurityPolicy:
    """
    Factory for the Content-Security-Policy handler.

    Example:
        content_security_policy({
            "directives": {
                "scriptSrc": ["'self'", lambda request, response: f"'nonce-{request.state.nonce}'"],
                "upgrade-insecure-requests": False,
            },
        })
    """
    opts = parse_options(ContentSecurityPolicyOptions, options, HEADER_NAME)
    compiler = DirectiveCompiler(opts.directives, use_defaults=opts.use_defaults)
    return ContentSecurityPolicy(compiler, report_only=opts.report_only)


def get_default_directives() -> Dict[str, Tuple[str, ...]]:
    """Copy of the default policy, in canonical order."""
    return dict(DEFAULT_DIRECTIVES)
