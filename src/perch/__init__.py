"""Perch — a small, synchronous request router and dispatcher.

Register path patterns with handlers, then dispatch one request per
``run()``. Handlers can end dispatch early with ``halt()``, ``stop()``
or ``redirect()``.

Basic usage::

    from perch import App

    app = App()

    @app.route("/:controller")
    def index(params, app):
        app.response.set_body(f"Hello, {params['controller']}!")

    application = app.wsgi_app
"""

__version__ = "0.1.0-dev"
__all__ = [
    "App",
    "ConfigurationError",
    "HTTPError",
    "HaltSignal",
    "InvalidControllerError",
    "InvalidMethodError",
    "InvalidRouteError",
    "MethodRegistry",
    "PageNotFoundError",
    "PerchConfig",
    "PerchError",
    "RegexMatcher",
    "Request",
    "Response",
    "Route",
    "SegmentMatcher",
    "TestClient",
    "WSGIAdapter",
]

_ERRORS = (
    "ConfigurationError",
    "HTTPError",
    "HaltSignal",
    "InvalidControllerError",
    "InvalidMethodError",
    "InvalidRouteError",
    "PageNotFoundError",
    "PerchError",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "PerchConfig":
        from perch.config import PerchConfig

        return PerchConfig

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name == "Route":
        from perch.routing.route import Route

        return Route

    if name == "MethodRegistry":
        from perch.routing.methods import MethodRegistry

        return MethodRegistry

    if name in ("RegexMatcher", "SegmentMatcher"):
        from perch.routing import matcher as _matcher

        return getattr(_matcher, name)

    if name == "TestClient":
        from perch.testing import TestClient

        return TestClient

    if name == "WSGIAdapter":
        from perch.server.wsgi import WSGIAdapter

        return WSGIAdapter

    if name in _ERRORS:
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
