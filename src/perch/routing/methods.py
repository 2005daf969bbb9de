"""Known HTTP method tokens.

A registry is additive-only: tokens can be allowed but never removed.
Routes validate ``via()`` arguments against one, so a fresh registry
can be injected wherever isolation matters (tests, embedded apps).
"""

from collections.abc import Iterable, Iterator

from perch.errors import InvalidMethodError

DEFAULT_METHODS: frozenset[str] = frozenset(
    {"DELETE", "GET", "OPTIONS", "PATCH", "POST", "PUT"}
)


class MethodRegistry:
    """A mutable set of uppercase HTTP method tokens.

    Usage::

        registry = MethodRegistry()
        registry.allow("purge")
        registry.normalize("purge")   # -> "PURGE"
        registry.normalize("bogus")   # raises InvalidMethodError
    """

    __slots__ = ("_known",)

    def __init__(self, methods: Iterable[str] = DEFAULT_METHODS) -> None:
        self._known: set[str] = {m.upper() for m in methods}

    def allow(self, method: str) -> None:
        """Add *method* to the known tokens."""
        token = method.strip().upper()
        if not token:
            msg = "Method token cannot be empty"
            raise InvalidMethodError(msg)
        self._known.add(token)

    def normalize(self, method: str) -> str:
        """Return the uppercase token for *method*.

        Raises ``InvalidMethodError`` if the token is unknown or not a string.
        """
        if not isinstance(method, str):
            msg = f"HTTP method must be a string, got {type(method).__name__}"
            raise InvalidMethodError(msg)
        token = method.strip().upper()
        if token not in self._known:
            allowed = ", ".join(self)
            msg = f"Unknown HTTP method {method!r}. Known methods: {allowed}"
            raise InvalidMethodError(msg)
        return token

    def __contains__(self, method: object) -> bool:
        if not isinstance(method, str):
            return False
        return method.strip().upper() in self._known

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._known))

    def __len__(self) -> int:
        return len(self._known)

    def __repr__(self) -> str:
        return f"MethodRegistry({sorted(self._known)!r})"


_default: MethodRegistry | None = None


def default_registry() -> MethodRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default
    if _default is None:
        _default = MethodRegistry()
    return _default
