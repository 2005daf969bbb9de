"""Tests for perch.routing.table — registration, indexes, and matching."""

import re

import pytest

from perch.errors import InvalidRouteError, PageNotFoundError
from perch.http.request import Request
from perch.routing.matcher import RegexMatcher, SegmentMatcher
from perch.routing.methods import MethodRegistry
from perch.routing.table import RouteTable


def _handler(params, app) -> None:
    return None


def _table() -> RouteTable:
    return RouteTable(registry=MethodRegistry())


class _PrefixMatcher:
    """Minimal third-party matcher: anything under a prefix."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def match(self, path: str) -> dict[str, str] | None:
        if path.startswith(self.prefix):
            return {"rest": path[len(self.prefix) :]}
        return None


class TestRegister:
    def test_string_is_wrapped_in_segment_matcher(self) -> None:
        route = _table().register("/:controller", _handler)
        assert isinstance(route.matcher, SegmentMatcher)

    def test_matcher_object_kept_verbatim(self) -> None:
        matcher = SegmentMatcher("/:controller")
        route = _table().register(matcher, _handler)
        assert route.matcher is matcher

    def test_custom_matcher_object(self) -> None:
        matcher = _PrefixMatcher("/static/")
        route = _table().register(matcher, _handler)
        assert route.matcher is matcher

    def test_compiled_regex_is_wrapped(self) -> None:
        route = _table().register(re.compile(r"/(?P<slug>[a-z-]+)"), _handler)
        assert isinstance(route.matcher, RegexMatcher)
        assert route.match("/hello-world") == {"slug": "hello-world"}

    def test_invalid_pattern(self) -> None:
        with pytest.raises(InvalidRouteError, match="path string or a matcher"):
            _table().register(object(), _handler)

    def test_invalid_handler_type(self) -> None:
        with pytest.raises(InvalidRouteError, match="handler"):
            _table().register("/foo", 42)

    def test_string_handler_accepted(self) -> None:
        route = _table().register("/foo", "bogus-callback")
        assert route.name() is None

    def test_preserves_order(self) -> None:
        table = _table()
        first = table.register("/a", _handler)
        second = table.register("/b", _handler)
        assert table.routes == [first, second]
        assert len(table) == 2

    def test_strict_slashes_passed_to_matcher(self) -> None:
        table = RouteTable(strict_slashes=True)
        route = table.register("/users", _handler)
        assert route.match("/users/") is None


class TestIndexes:
    def _setup(self) -> tuple[RouteTable, list]:
        table = _table()
        foo = table.register("/foo", _handler).via("get").name("foo")
        bar = table.register("/bar", _handler).via("get")
        bar_post = table.register("/bar", _handler).via("post").name("bar-post")
        bar_delete = table.register("/bar", _handler).via("delete")
        return table, [foo, bar, bar_post, bar_delete]

    def test_by_method(self) -> None:
        table, (foo, bar, bar_post, bar_delete) = self._setup()
        assert table.by_method == {
            "GET": [foo, bar],
            "POST": [bar_post],
            "DELETE": [bar_delete],
        }

    def test_by_name(self) -> None:
        table, (foo, _, bar_post, _) = self._setup()
        assert table.by_name == {"foo": foo, "bar-post": bar_post}

    def test_route_in_every_method_bucket(self) -> None:
        table = _table()
        route = table.register("/both", _handler).via("get", "post")
        assert route in table.by_method["GET"]
        assert route in table.by_method["POST"]
        assert "PUT" not in table.by_method

    def test_index_refreshes_after_via(self) -> None:
        table = _table()
        route = table.register("/late", _handler)
        assert table.by_method == {"GET": [route]}
        route.via("put")
        assert table.by_method == {"GET": [route], "PUT": [route]}

    def test_index_refreshes_after_rename(self) -> None:
        table = _table()
        route = table.register("/late", _handler).name("old")
        assert table.named("old") is route
        route.name("new")
        assert table.by_name == {"new": route}

    def test_relative_order_within_bucket(self) -> None:
        table = _table()
        first = table.register("/a", _handler).via("post")
        second = table.register("/b", _handler).via("get")
        third = table.register("/c", _handler)
        first.via("get")
        assert table.by_method["GET"] == [first, second, third]

    def test_duplicate_name_last_wins(self) -> None:
        table = _table()
        table.register("/a", _handler).name("dup")
        later = table.register("/b", _handler).name("dup")
        assert table.named("dup") is later

    def test_named_missing(self) -> None:
        with pytest.raises(KeyError, match="nope"):
            _table().named("nope")


class TestRoute:
    def test_matches_path_and_method(self) -> None:
        table = _table()
        table.register("/foo", _handler)
        bar = table.register("/bar", _handler).via("post")
        match = table.route(Request(method="POST", path="/bar"), "POST")
        assert match.route is bar
        assert match.params == {}

    def test_method_is_case_insensitive(self) -> None:
        table = _table()
        route = table.register("/foo", _handler)
        assert table.route(Request(path="/foo"), "get").route is route

    def test_binds_params(self) -> None:
        table = _table()
        table.register("/:controller", _handler)
        match = table.route(Request(path="/widgets"), "GET")
        assert match.params == {"controller": "widgets"}

    def test_first_declared_wins(self) -> None:
        table = _table()
        specific = table.register("/users/new", _handler)
        table.register("/users/:id", _handler)
        assert table.route(Request(path="/users/new"), "GET").route is specific

    def test_declaration_order_over_specificity(self) -> None:
        table = _table()
        generic = table.register("/users/:id", _handler)
        table.register("/users/new", _handler)
        assert table.route(Request(path="/users/new"), "GET").route is generic

    def test_no_bucket(self) -> None:
        table = _table()
        table.register("/foo", _handler)
        with pytest.raises(PageNotFoundError, match="No routes for method PUT"):
            table.route(Request(method="PUT", path="/foo"), "PUT")

    def test_no_match(self) -> None:
        table = _table()
        table.register("/foo", _handler)
        with pytest.raises(PageNotFoundError, match="/missing"):
            table.route(Request(path="/missing"), "GET")

    def test_empty_table(self) -> None:
        with pytest.raises(PageNotFoundError):
            _table().route(Request(), "GET")

    def test_wrong_method_is_not_found(self) -> None:
        table = _table()
        table.register("/foo", _handler).via("post")
        with pytest.raises(PageNotFoundError):
            table.route(Request(path="/foo"), "GET")

    def test_custom_matcher(self) -> None:
        table = _table()
        table.register(_PrefixMatcher("/static/"), _handler)
        match = table.route(Request(path="/static/css/site.css"), "GET")
        assert match.params == {"rest": "css/site.css"}
