"""Path matchers.

A matcher turns a request path into a dict of bound parameters, or
``None`` when the path doesn't fit. Plain string patterns are wrapped
in ``SegmentMatcher``; any object with a compatible ``match()`` can be
registered as-is.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from perch.errors import InvalidRouteError

WILDCARD_PARAM = "wildcard"

_PARAM_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@runtime_checkable
class Matcher(Protocol):
    """Anything that can decide whether a path belongs to a route."""

    def match(self, path: str) -> dict[str, str] | None: ...


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a segmented pattern.

    Literal:   ``/users``     (is_param=False)
    Named:     ``/:id``       (is_param=True, param_name="id")
    Wildcard:  ``/*rest``     (is_wildcard=True, param_name="rest")
    """

    value: str
    is_param: bool = False
    is_wildcard: bool = False
    param_name: str | None = None


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a segmented pattern into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/:id"      -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/files/*path"    -> [PathSegment("files"), PathSegment("*path", is_wildcard=True, ...)]
        "/"               -> []
    """
    parts = [p for p in pattern.strip("/").split("/") if p]
    segments: list[PathSegment] = []
    seen: set[str] = set()

    for index, part in enumerate(parts):
        if part.startswith("*"):
            if index != len(parts) - 1:
                msg = f"Wildcard {part!r} must be the last segment in {pattern!r}"
                raise InvalidRouteError(msg)
            name = part[1:] or WILDCARD_PARAM
            segment = PathSegment(value=part, is_wildcard=True, param_name=name)
        elif part.startswith(":"):
            name = part[1:]
            if not _PARAM_NAME.match(name):
                msg = f"Invalid parameter name {part!r} in {pattern!r}"
                raise InvalidRouteError(msg)
            segment = PathSegment(value=part, is_param=True, param_name=name)
        else:
            segments.append(PathSegment(value=part))
            continue

        if segment.param_name in seen:
            msg = f"Duplicate parameter {segment.param_name!r} in {pattern!r}"
            raise InvalidRouteError(msg)
        seen.add(segment.param_name)
        segments.append(segment)

    return segments


class SegmentMatcher:
    """Left-to-right segment matcher for ``/:name`` style patterns.

    Usage::

        matcher = SegmentMatcher("/:controller/:id", constraints={"id": r"\\d+"})
        matcher.match("/widgets/42")   # -> {"controller": "widgets", "id": "42"}
        matcher.match("/widgets/abc")  # -> None
        matcher.assemble(controller="widgets", id=7)  # -> "/widgets/7"
    """

    __slots__ = ("_constraints", "_defaults", "_trailing_slash", "pattern", "segments", "strict_slashes")

    def __init__(
        self,
        pattern: str,
        *,
        constraints: Mapping[str, str] | None = None,
        defaults: Mapping[str, str] | None = None,
        strict_slashes: bool = False,
    ) -> None:
        if not pattern.startswith("/"):
            msg = f"Route pattern must start with '/', got {pattern!r}"
            raise InvalidRouteError(msg)

        self.pattern = pattern
        self.segments = parse_pattern(pattern)
        self.strict_slashes = strict_slashes
        self._trailing_slash = pattern != "/" and pattern.endswith("/")
        self._defaults: dict[str, str] = dict(defaults or {})
        self._constraints: dict[str, re.Pattern[str]] = {}

        names = set(self.parameters)
        for name, expr in (constraints or {}).items():
            if name not in names:
                msg = f"Constraint on unknown parameter {name!r} in {pattern!r}"
                raise InvalidRouteError(msg)
            try:
                self._constraints[name] = re.compile(expr)
            except re.error as exc:
                msg = f"Invalid constraint for {name!r} in {pattern!r}: {exc}"
                raise InvalidRouteError(msg) from exc

    @property
    def parameters(self) -> tuple[str, ...]:
        """Names bound by this pattern, in order."""
        return tuple(s.param_name for s in self.segments if s.param_name)

    def match(self, path: str) -> dict[str, str] | None:
        """Return bound parameters for *path*, or ``None`` if it doesn't match."""
        has_trailing = path != "/" and path.endswith("/")
        if self.strict_slashes and has_trailing != self._trailing_slash:
            return None

        stripped = path.strip("/")
        parts = stripped.split("/") if stripped else []
        params: dict[str, str] = {}

        for index, segment in enumerate(self.segments):
            if segment.is_wildcard:
                params[segment.param_name or WILDCARD_PARAM] = "/".join(parts[index:])
                return self._finish(params)

            if index >= len(parts):
                return None
            part = parts[index]

            if segment.is_param:
                if not part or not self._allowed(segment.param_name or "", part):
                    return None
                params[segment.param_name or ""] = part
            elif part != segment.value:
                return None

        if len(parts) != len(self.segments):
            return None
        return self._finish(params)

    def assemble(self, **params: object) -> str:
        """Build a path from *params*, the reverse of ``match()``.

        Raises ``KeyError`` if a named segment has no value.
        """
        values = {**self._defaults, **params}
        parts: list[str] = []
        for segment in self.segments:
            if segment.is_wildcard:
                rest = values.get(segment.param_name or WILDCARD_PARAM, "")
                if rest:
                    parts.append(str(rest).strip("/"))
            elif segment.is_param:
                parts.append(str(values[segment.param_name or ""]))
            else:
                parts.append(segment.value)

        path = "/" + "/".join(parts)
        if self._trailing_slash and path != "/":
            path += "/"
        return path

    def _allowed(self, name: str, value: str) -> bool:
        regex = self._constraints.get(name)
        return regex is None or regex.fullmatch(value) is not None

    def _finish(self, params: dict[str, str]) -> dict[str, str]:
        return {**self._defaults, **params}

    def __repr__(self) -> str:
        return f"SegmentMatcher({self.pattern!r})"


class RegexMatcher:
    """Full regular-expression matcher; named groups become parameters.

    The whole path must match (``fullmatch``)::

        RegexMatcher(r"/archive/(?P<year>\\d{4})").match("/archive/2024")
        # -> {"year": "2024"}
    """

    __slots__ = ("regex",)

    def __init__(self, regex: str | re.Pattern[str]) -> None:
        try:
            self.regex = re.compile(regex)
        except re.error as exc:
            msg = f"Invalid route regex {regex!r}: {exc}"
            raise InvalidRouteError(msg) from exc

    def match(self, path: str) -> dict[str, str] | None:
        found = self.regex.fullmatch(path)
        if found is None:
            return None
        return {k: v for k, v in found.groupdict().items() if v is not None}

    def __repr__(self) -> str:
        return f"RegexMatcher({self.regex.pattern!r})"
