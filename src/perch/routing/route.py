"""Route and RouteMatch."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from perch.errors import InvalidControllerError, InvalidMethodError
from perch.routing.matcher import Matcher
from perch.routing.methods import MethodRegistry, default_registry
from perch.routing.resolve import resolve_handler

DEFAULT_ROUTE_METHODS: frozenset[str] = frozenset({"GET"})


class Route:
    """A path matcher bound to a handler, plus allowed methods and a name.

    Created by ``RouteTable.register()``. Only ``methods`` (additive, via
    ``via()``) and the name change after creation. The handler is
    re-resolved on every access, so a bad reference only fails when the
    route is dispatched::

        route = app.map("/:controller", "myapp.views:dispatch")
        route.via("get", "post").name("controller")
    """

    __slots__ = ("_explicit_methods", "_handler", "_listener", "_matcher", "_methods", "_name", "_registry")

    def __init__(
        self,
        matcher: Matcher,
        handler: Any,
        *,
        registry: MethodRegistry | None = None,
    ) -> None:
        self._matcher = matcher
        self._handler = handler
        self._registry = registry
        self._methods: set[str] = set()
        self._explicit_methods = False
        self._name: str | None = None
        self._listener: Callable[[Route], None] | None = None

    # -- Pattern --

    @property
    def matcher(self) -> Matcher:
        """The matcher this route was registered with."""
        return self._matcher

    def set_matcher(self, matcher: Matcher) -> Route:
        self._matcher = matcher
        return self

    def match(self, path: str) -> dict[str, str] | None:
        """Return bound path parameters, or ``None`` if *path* doesn't match."""
        return self._matcher.match(path)

    # -- Handler --

    @property
    def handler(self) -> Callable[..., Any]:
        """The handler as a callable.

        String references are imported on each access. Raises
        ``InvalidControllerError`` if the stored handler is neither
        callable nor a resolvable reference.
        """
        handler = self._handler
        if callable(handler):
            return handler
        if isinstance(handler, str):
            return resolve_handler(handler)
        msg = f"Route handler {handler!r} is not callable"
        raise InvalidControllerError(msg)

    def set_handler(self, handler: Any) -> Route:
        """Replace the handler. Never validates; see ``handler``."""
        self._handler = handler
        return self

    # -- Methods --

    @property
    def registry(self) -> MethodRegistry:
        return self._registry if self._registry is not None else default_registry()

    @property
    def methods(self) -> frozenset[str]:
        """Allowed methods. ``{"GET"}`` until ``via()`` is first called."""
        if not self._explicit_methods:
            return DEFAULT_ROUTE_METHODS
        return frozenset(self._methods)

    def via(self, *methods: str | Iterable[str]) -> Route:
        """Allow additional HTTP methods.

        Accepts a single token, an iterable of tokens, or several
        arguments. All tokens are validated before any is added, so an
        unknown token raises ``InvalidMethodError`` and changes nothing.
        """
        tokens: list[str] = []
        for item in methods:
            if isinstance(item, str):
                tokens.append(item)
            elif isinstance(item, Iterable):
                tokens.extend(item)
            else:
                msg = f"HTTP method must be a string, got {type(item).__name__}"
                raise InvalidMethodError(msg)
        if not tokens:
            return self

        normalized = {self.registry.normalize(token) for token in tokens}
        self._methods |= normalized
        self._explicit_methods = True
        self._changed()
        return self

    def responds_to(self, method: str) -> bool:
        """Case-insensitive check against ``methods``."""
        return method.strip().upper() in self.methods

    @classmethod
    def allow_method(cls, method: str) -> None:
        """Teach the process-wide registry a new method token."""
        default_registry().allow(method)

    # -- Name --

    def name(self, value: str | None = None) -> Any:
        """Get the route name, or set it and return the route."""
        if value is None:
            return self._name
        self._name = value
        self._changed()
        return self

    # -- Internal --

    def _watch(self, listener: Callable[[Route], None]) -> None:
        """Register the owning table's change callback."""
        self._listener = listener

    def _changed(self) -> None:
        if self._listener is not None:
            self._listener(self)

    def __repr__(self) -> str:
        methods = ",".join(sorted(self.methods))
        return f"<Route {methods} {self._matcher!r} name={self._name!r}>"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]
