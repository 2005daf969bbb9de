"""Perch exception hierarchy.

Shared across the route table, routes, and the app so every module
raises and catches the same types.

``HaltSignal`` sits outside the hierarchy on purpose: it ends a dispatch
cycle early with a finished response and is not an error.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when ``PerchConfig`` values are invalid."""


class InvalidRouteError(PerchError):
    """Raised at registration when the pattern or handler has the wrong shape."""


class InvalidMethodError(PerchError):
    """Raised by ``Route.via()`` for a method token the registry doesn't know."""


class InvalidControllerError(PerchError):
    """Raised when a route's handler cannot be resolved to a callable.

    Deferred until the handler is actually looked up, so a route can be
    registered with a handler reference that only exists later.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class PageNotFoundError(HTTPError):
    """404: no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class HaltSignal(BaseException):  # noqa: N818
    """Ends the current dispatch cycle; the response is final as it stands.

    Raised by ``App.halt()``, ``App.stop()`` and ``App.redirect()``.
    Derives from ``BaseException`` so handler code using
    ``except Exception`` does not swallow it on the way out.
    """
