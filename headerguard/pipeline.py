# headerguard/pipeline.py

"""
Adapts header handlers to Starlette's HTTP middleware convention.

`HeaderPipeline` runs an ordered, immutable tuple of handlers against one
response. The first handler that raises stops the chain; its exception is
returned to the caller rather than propagated, and headers written by earlier
handlers stay where they are.

`Helmet` is the object `helmet()` returns. It is a plain Starlette dispatch
function, so it plugs straight into either registration style:

    app.middleware("http")(helmet())
    app.add_middleware(BaseHTTPMiddleware, dispatch=helmet())

When the pipeline reports an error, `Helmet` hands it to the exception handler
the application registered for that error class (or any base class). Without
one, the error is raised to Starlette's server-error middleware, which turns it
into a 500 response. Headers applied before the failure are copied onto the
error handler's response; the failing handler's header is never written.

🛡️ Handlers and the pipeline hold no per-request state, so one `Helmet`
instance is safely shared by every concurrent request.
"""

import inspect
import logging
from typing import Callable, Iterable, List, Optional, Tuple

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response

from headerguard.middlewares.base import HeaderHandler, maybe_await

logger = logging.getLogger(__name__)


class HeaderPipeline:
    """
    Ordered chain of header handlers.

    Args:
        handlers (Iterable[HeaderHandler]): Handlers in the order they must run.
    """

    def __init__(self, handlers: Iterable[HeaderHandler]) -> None:
        self._handlers: Tuple[HeaderHandler, ...] = tuple(handlers)

    @property
    def handlers(self) -> Tuple[HeaderHandler, ...]:
        return self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self):
        return iter(self._handlers)

    async def run(
        self,
        request: Request,
        response: Response,
        applied: Optional[List[HeaderHandler]] = None,
    ) -> Optional[Exception]:
        """
        Apply every handler to `response`, in order.

        Args:
            applied (list | None): When given, each handler that completes is
                appended to it.

        Returns:
            The exception raised by the first failing handler, or None when
            every handler completed.
        """
        for handler in self._handlers:
            try:
                await maybe_await(handler(request, response))
            except Exception as exc:
                logger.warning(
                    "security header handler failed",
                    extra={
                        "header": handler.header_name,
                        "path": request.url.path,
                        "error": str(exc),
                    },
                )
                return exc
            if applied is not None:
                applied.append(handler)
        return None


def _lookup_exception_handler(request: Request, exc: Exception) -> Optional[Callable]:
    app = request.scope.get("app")
    handlers = getattr(app, "exception_handlers", None) or {}
    for cls in type(exc).__mro__:
        if cls in handlers:
            return handlers[cls]
    return None


def _carry_applied_headers(
    applied: List[HeaderHandler],
    source: Response,
    target: Response,
) -> None:
    """Headers written (or removed) before the failure stay applied."""
    for handler in applied:
        name = handler.header_name
        if name in source.headers:
            target.headers[name] = source.headers[name]
        elif name in target.headers:
            del target.headers[name]


class Helmet:
    """
    Starlette dispatch function applying a `HeaderPipeline` to every response.

    Built by `headerguard.helmet()`; not usually instantiated directly.

    Args:
        pipeline (HeaderPipeline): The handlers to apply.
    """

    def __init__(self, pipeline: HeaderPipeline) -> None:
        self.pipeline = pipeline

    @property
    def handlers(self) -> Tuple[HeaderHandler, ...]:
        return self.pipeline.handlers

    async def __call__(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)

        applied: List[HeaderHandler] = []
        error = await self.pipeline.run(request, response, applied)
        if error is None:
            return response

        handler = _lookup_exception_handler(request, error)
        if handler is None:
            raise error
        if inspect.iscoroutinefunction(handler):
            error_response = await handler(request, error)
        else:
            error_response = await run_in_threadpool(handler, request, error)

        _carry_applied_headers(applied, response, error_response)
        return error_response

    def __repr__(self) -> str:
        names = ", ".join(h.header_name for h in self.pipeline)
        return f"<Helmet [{names}]>"
