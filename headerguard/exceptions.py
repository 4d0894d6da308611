# headerguard/exceptions.py

"""
Custom exception classes for headerguard.

Two families of failure exist and they surface at very different moments:

- `ConfigurationError` is raised synchronously while `helmet()` (or one of the
  individual header factories) is being constructed. It is always fatal to
  construction: no partially built middleware is ever returned.
- `InvalidDirectiveError` happens per request, when a dynamically resolved
  Content-Security-Policy value turns out to be unusable. It is never raised
  into the request's call stack directly; the pipeline collects it and hands it
  to the application's exception handlers.

🧠 Why use custom exceptions?
- Let applications register one handler for every headerguard failure
- Carry the HTTP status code alongside the message
- Keep construction-time and request-time failures distinguishable
"""


class HeaderGuardError(Exception):
    """
    Base class for every error raised by headerguard.

    Args:
        detail (str): Human-readable description of the error.
        status_code (int): HTTP status code an error handler should respond with.
    """
    def __init__(self, detail: str, status_code: int = 500):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class ConfigurationError(HeaderGuardError, ValueError):
    """
    Raised when the options given to `helmet()` or a header factory are invalid.

    Example:
        raise ConfigurationError('"hstss" is not a recognized helmet option.')
    """


class RemovedCapabilityError(ConfigurationError):
    """Raised when a header that is no longer supported is requested."""


class InvalidDirectiveError(HeaderGuardError):
    """
    A Content-Security-Policy directive resolved to an invalid value at request time.

    Args:
        header_name (str): Display name of the header, e.g. "Content-Security-Policy".
        directive (str): Normalized directive name, e.g. "default-src".
    """
    def __init__(self, header_name: str, directive: str, status_code: int = 500):
        self.header_name = header_name
        self.directive = directive
        super().__init__(
            f'{header_name} received an invalid directive value for "{directive}"',
            status_code=status_code,
        )
