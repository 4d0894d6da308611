# headerguard/middlewares/base.py

"""
Defines the `HeaderHandler` abstract class, the contract for every header handler.

A header handler is invoked once per request, after the downstream response has
been produced, and mutates that response's headers. It either:
- completes normally (the pipeline moves on to the next handler), or
- raises, in which case the pipeline stops and forwards the exception to the
  application's error handling instead of letting it escape.

Handlers are built once by their factory and then shared, read-only, by every
concurrent request. All option parsing happens in the factory.

🔁 Why use this abstraction?
- `HeaderPipeline` can treat the trivial one-value headers and the
  Content-Security-Policy compiler uniformly
- Every handler knows the header it owns, which keeps logs readable
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel
from starlette.requests import Request
from starlette.responses import Response

from headerguard.exceptions import ConfigurationError


class HeaderHandler(ABC):
    """
    Abstract base class for all header handlers.

    Attributes:
        header_name (str): Display name of the header this handler owns.
    """

    header_name: str = ""

    @abstractmethod
    def __call__(self, request: Request, response: Response) -> Optional[Awaitable[None]]:
        """
        Apply this handler's header to `response`.

        Args:
            request (Request): The incoming request.
            response (Response): The outgoing response, headers still mutable.

        Returns:
            None, or an awaitable the pipeline must await before moving on.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.header_name}>"


class StaticHeader(HeaderHandler):
    """Writes one literal value, computed once at construction."""

    def __init__(self, header_name: str, value: str) -> None:
        self.header_name = header_name
        self.value = value

    def __call__(self, request: Request, response: Response) -> None:
        response.headers[self.header_name] = self.value


class RemoveHeader(HeaderHandler):
    """Strips a header that leaks information (e.g. X-Powered-By)."""

    def __init__(self, header_name: str) -> None:
        self.header_name = header_name

    def __call__(self, request: Request, response: Response) -> None:
        if self.header_name in response.headers:
            del response.headers[self.header_name]


class HeaderOptions(BaseModel):
    """
    Base model for per-header options.

    Unknown keys are rejected so that typos fail loudly, and camelCase
    spellings (`maxAge`) are accepted next to snake_case ones (`max_age`).
    Defaults run through the same validators as supplied values.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
        validate_default=True,
    )


OptionsT = TypeVar("OptionsT", bound=HeaderOptions)


def parse_options(
    model: Type[OptionsT],
    options: Any,
    header_name: str,
) -> OptionsT:
    """
    Validate raw factory options against `model`.

    Args:
        model: The `HeaderOptions` subclass describing valid options.
        options: `None`, a mapping, or an already-built `model` instance.
        header_name (str): Used to prefix error messages.

    Raises:
        ConfigurationError: If the options are not a mapping or fail validation.
    """
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            f"{header_name} options must be a mapping, got {type(options).__name__}"
        )
    try:
        return model.model_validate(dict(options))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'options'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"{header_name} received invalid options ({problems})") from exc


async def maybe_await(result: Any) -> Any:
    """Await `result` when a handler or callable returned an awaitable."""
    if inspect.isawaitable(result):
        return await result
    return result
