"""Perch application class.

Owns the route table and the current request/response, and runs one
match-and-invoke cycle per ``run()``. Handlers end a cycle early with
``halt()``, ``stop()`` or ``redirect()``.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable
from typing import Any, NoReturn

from perch.config import PerchConfig
from perch.errors import HaltSignal, InvalidRouteError
from perch.http.request import Request
from perch.http.response import Response
from perch.routing.methods import MethodRegistry
from perch.routing.route import Route
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.app")

Handler = Callable[..., Any]


class DispatchState(enum.Enum):
    """Where the most recent ``run()`` got to."""

    IDLE = "idle"
    MATCHING = "matching"
    INVOKING = "invoking"
    COMPLETED = "completed"
    HALTED = "halted"
    ERRORED = "errored"


class App:
    """The perch application.

    Register routes, then call ``run()`` once per request::

        app = App()

        @app.route("/hello/:name")
        def hello(params, app):
            app.response.set_body(f"Hello, {params['name']}!")

        app.request.path = "/hello/world"
        try:
            app.run()
        except HaltSignal:
            pass  # response is final

    Not thread-safe: register everything up front, and don't share one
    App between threads that dispatch concurrently.
    """

    __slots__ = ("_request", "_response", "_table", "config", "params", "state")

    def __init__(
        self,
        config: PerchConfig | None = None,
        *,
        request: Request | None = None,
        response: Response | None = None,
        registry: MethodRegistry | None = None,
    ) -> None:
        self.config: PerchConfig = config or PerchConfig()
        self._request: Request | None = request
        self._response: Response | None = response
        self._table = RouteTable(registry=registry, strict_slashes=self.config.strict_slashes)
        self.params: dict[str, str] = {}
        self.state = DispatchState.IDLE

    # -- Request / response --

    @property
    def request(self) -> Request:
        """The current request, default-constructed on first access."""
        if self._request is None:
            self._request = Request()
        return self._request

    def set_request(self, request: Request) -> App:
        self._request = request
        return self

    @property
    def response(self) -> Response:
        """The current response, default-constructed on first access."""
        if self._response is None:
            self._response = Response(content_type=self.config.default_content_type)
        return self._response

    def set_response(self, response: Response) -> App:
        self._response = response
        return self

    # -- Route registration --

    @property
    def table(self) -> RouteTable:
        return self._table

    def map(self, pattern: Any, handler: Any) -> Route:
        """Register *handler* for *pattern* and return the route.

        The route answers GET until ``via()`` says otherwise::

            app.map("/widgets", create_widget).via("post").name("widgets")
        """
        return self._table.register(pattern, handler)

    def get(self, pattern: Any, handler: Any) -> Route:
        return self.map(pattern, handler).via("GET")

    def post(self, pattern: Any, handler: Any) -> Route:
        return self.map(pattern, handler).via("POST")

    def put(self, pattern: Any, handler: Any) -> Route:
        return self.map(pattern, handler).via("PUT")

    def patch(self, pattern: Any, handler: Any) -> Route:
        return self.map(pattern, handler).via("PATCH")

    def delete(self, pattern: Any, handler: Any) -> Route:
        return self.map(pattern, handler).via("DELETE")

    def options(self, pattern: Any, handler: Any) -> Route:
        return self.map(pattern, handler).via("OPTIONS")

    def route(
        self,
        pattern: Any,
        *,
        methods: Iterable[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            pattern: Segmented path (``"/users/:id"``) or a matcher object.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name for ``url_for()``.
        """

        def decorator(func: Handler) -> Handler:
            route = self.map(pattern, func)
            if methods is not None:
                route.via(methods)
            if name is not None:
                route.name(name)
            return func

        return decorator

    def url_for(self, name: str, **params: object) -> str:
        """Build the path for the route registered under *name*.

        Raises ``KeyError`` for an unknown name and ``InvalidRouteError``
        if the route's matcher cannot build paths.
        """
        route = self._table.named(name)
        assemble = getattr(route.matcher, "assemble", None)
        if assemble is None:
            msg = f"Route {name!r} uses {route.matcher!r}, which cannot build paths"
            raise InvalidRouteError(msg)
        return assemble(**params)

    @property
    def wsgi_app(self) -> Callable[..., Any]:
        """A WSGI application serving this app."""
        from perch.server.wsgi import WSGIAdapter

        return WSGIAdapter(self)

    # -- Dispatch --

    def run(self) -> None:
        """Match the current request and invoke the route's handler.

        The handler is called as ``handler(params, app)``. Raises
        ``PageNotFoundError`` when nothing matches and
        ``InvalidControllerError`` when the handler can't be resolved.
        ``HaltSignal`` escapes when the handler halts; callers treat it
        as a finished response, not a failure.
        """
        request = self.request
        method = request.method.upper()
        self.state = DispatchState.MATCHING
        try:
            match = self._table.route(request, method)
            handler = match.route.handler
            self.params = match.params
            if isinstance(request, Request):
                request.path_params = match.params
            self.state = DispatchState.INVOKING
            handler(match.params, self)
        except HaltSignal:
            self.state = DispatchState.HALTED
            raise
        except Exception:
            self.state = DispatchState.ERRORED
            raise
        self.state = DispatchState.COMPLETED

    def halt(self, status: int, message: str = "") -> NoReturn:
        """Set the response status (and body, if *message*) and end dispatch."""
        response = self.response
        response.set_status(status)
        if message:
            response.set_body(message)
        logger.debug("Halted with status %d", status)
        raise HaltSignal(status)

    def stop(self) -> NoReturn:
        """End dispatch, leaving the response exactly as it is."""
        logger.debug("Stopped with status %d", self.response.status)
        raise HaltSignal(self.response.status)

    def redirect(self, url: str, status: int | None = None) -> NoReturn:
        """Redirect to *url* (302 unless configured otherwise) and end dispatch."""
        code = status if status is not None else self.config.redirect_status
        response = self.response
        response.set_status(code)
        response.set_header("Location", url)
        logger.debug("Redirecting to %s with status %d", url, code)
        raise HaltSignal(code)
