"""Route table with declaration-order matching.

Routes are kept in registration order. Per-method and per-name indexes
are rebuilt lazily: a route tells the table when its methods or name
change, and the next lookup refreshes the indexes.
"""

import logging
import re
from typing import Any

from perch.errors import InvalidRouteError, PageNotFoundError
from perch.http.request import Request
from perch.routing.matcher import Matcher, RegexMatcher, SegmentMatcher
from perch.routing.methods import MethodRegistry
from perch.routing.route import Route, RouteMatch

logger = logging.getLogger("perch.routing")


class RouteTable:
    """Owns every registered route.

    Usage::

        table = RouteTable()
        table.register("/users/:id", show_user).via("get").name("user")
        match = table.route(request, "GET")
        match.params  # {"id": "42"}
    """

    __slots__ = ("_all", "_by_method", "_by_name", "_dirty", "registry", "strict_slashes")

    def __init__(
        self,
        *,
        registry: MethodRegistry | None = None,
        strict_slashes: bool = False,
    ) -> None:
        self.registry = registry
        self.strict_slashes = strict_slashes
        self._all: list[Route] = []
        self._by_method: dict[str, list[Route]] = {}
        self._by_name: dict[str, Route] = {}
        self._dirty = False

    # -- Registration --

    def register(self, pattern: Any, handler: Any) -> Route:
        """Create a route for *pattern* and append it to the table.

        *pattern* is a segmented path string (``"/users/:id"``), a compiled
        regex, or any object implementing ``Matcher``. *handler* is a
        callable or a ``"module:attribute"`` string resolved at dispatch.

        Raises ``InvalidRouteError`` for anything else.
        """
        matcher = self._to_matcher(pattern)
        if not callable(handler) and not isinstance(handler, str):
            msg = f"Route handler must be callable or an import string, got {type(handler).__name__}"
            raise InvalidRouteError(msg)

        route = Route(matcher, handler, registry=self.registry)
        route._watch(self._route_changed)
        self._all.append(route)
        self._dirty = True
        logger.debug("Registered route %r", matcher)
        return route

    def _to_matcher(self, pattern: Any) -> Matcher:
        if isinstance(pattern, str):
            return SegmentMatcher(pattern, strict_slashes=self.strict_slashes)
        if isinstance(pattern, re.Pattern):
            return RegexMatcher(pattern)
        if isinstance(pattern, Matcher):
            return pattern
        msg = f"Route pattern must be a path string or a matcher, got {type(pattern).__name__}"
        raise InvalidRouteError(msg)

    def _route_changed(self, route: Route) -> None:
        self._dirty = True

    # -- Indexes --

    @property
    def routes(self) -> list[Route]:
        """All routes in registration order."""
        return list(self._all)

    @property
    def by_method(self) -> dict[str, list[Route]]:
        """Routes per method token, each list in registration order."""
        self._refresh()
        return self._by_method

    @property
    def by_name(self) -> dict[str, Route]:
        """Named routes. A later route with the same name wins."""
        self._refresh()
        return self._by_name

    def named(self, name: str) -> Route:
        """Return the route registered under *name*.

        Raises ``KeyError`` if no route has that name.
        """
        try:
            return self.by_name[name]
        except KeyError:
            msg = f"No route named {name!r}"
            raise KeyError(msg) from None

    def _refresh(self) -> None:
        if not self._dirty:
            return
        by_method: dict[str, list[Route]] = {}
        by_name: dict[str, Route] = {}
        for route in self._all:
            for method in sorted(route.methods):
                by_method.setdefault(method, []).append(route)
            name = route.name()
            if name is not None:
                by_name[name] = route
        self._by_method = by_method
        self._by_name = by_name
        self._dirty = False

    # -- Matching --

    def route(self, request: Request, method: str) -> RouteMatch:
        """Find the first route for *method* whose matcher accepts the request path.

        Raises ``PageNotFoundError`` if no route is registered for the
        method or none of them matches.
        """
        method = method.upper()
        candidates = self.by_method.get(method)
        if not candidates:
            raise PageNotFoundError(f"No routes for method {method}")

        path = request.path
        for route in candidates:
            params = route.match(path)
            if params is not None:
                logger.debug("Matched %s %s -> %r", method, path, route)
                return RouteMatch(route=route, params=params)

        raise PageNotFoundError(f"No route matches {method} {path!r}")

    def __len__(self) -> int:
        return len(self._all)
