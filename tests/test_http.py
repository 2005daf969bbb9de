"""Tests for perch.http — headers, request, and response."""

import io

import pytest

from perch.http.headers import MutableHeaders
from perch.http.request import Request
from perch.http.response import Response


class TestMutableHeaders:
    def test_case_insensitive_get(self) -> None:
        headers = MutableHeaders([("Content-Type", "text/html")])
        assert headers["content-type"] == "text/html"
        assert headers["CONTENT-TYPE"] == "text/html"

    def test_missing_raises_key_error(self) -> None:
        with pytest.raises(KeyError):
            MutableHeaders()["x-missing"]

    def test_get_default(self) -> None:
        assert MutableHeaders().get("x-missing", "fallback") == "fallback"

    def test_set_replaces_all_values(self) -> None:
        headers = MutableHeaders([("X-A", "1"), ("x-a", "2")])
        headers["X-A"] = "3"
        assert headers.get_list("x-a") == ["3"]

    def test_add_keeps_existing(self) -> None:
        headers = MutableHeaders()
        headers.add("Set-Cookie", "a=1")
        headers.add("Set-Cookie", "b=2")
        assert headers.get_list("set-cookie") == ["a=1", "b=2"]
        assert len(headers) == 1

    def test_delete(self) -> None:
        headers = MutableHeaders([("X-A", "1")])
        del headers["x-a"]
        assert "X-A" not in headers
        with pytest.raises(KeyError):
            del headers["x-a"]

    def test_contains_non_string(self) -> None:
        assert 1 not in MutableHeaders([("X-A", "1")])

    def test_iter_lowercase_unique(self) -> None:
        headers = MutableHeaders([("X-A", "1"), ("x-a", "2"), ("X-B", "3")])
        assert list(headers) == ["x-a", "x-b"]

    def test_raw_items_keep_spelling(self) -> None:
        headers = MutableHeaders([("X-Custom", "1")])
        assert headers.items_raw() == [("X-Custom", "1")]


class TestRequest:
    def test_defaults(self) -> None:
        request = Request()
        assert request.method == "GET"
        assert request.path == "/"
        assert request.path_params == {}
        assert request.url == "/"

    def test_query(self) -> None:
        request = Request(path="/search", query_string="q=perch&tag=a&tag=b&empty=")
        assert request.query == {"q": "perch", "tag": "a", "empty": ""}
        assert request.query_list("tag") == ["a", "b"]
        assert request.query_list("missing") == []
        assert request.url == "/search?q=perch&tag=a&tag=b&empty="

    def test_body_helpers(self) -> None:
        request = Request(body=b'{"a": 1}')
        assert request.text() == '{"a": 1}'
        assert request.json() == {"a": 1}

    def test_content_type(self) -> None:
        request = Request(headers=MutableHeaders([("Content-Type", "application/json")]))
        assert request.content_type == "application/json"

    def test_from_environ(self) -> None:
        environ = {
            "REQUEST_METHOD": "post",
            "PATH_INFO": "/widgets",
            "QUERY_STRING": "page=2",
            "CONTENT_TYPE": "text/plain",
            "CONTENT_LENGTH": "5",
            "HTTP_X_REQUEST_ID": "abc",
            "wsgi.input": io.BytesIO(b"hello"),
        }
        request = Request.from_environ(environ)
        assert request.method == "POST"
        assert request.path == "/widgets"
        assert request.query == {"page": "2"}
        assert request.headers["x-request-id"] == "abc"
        assert request.content_type == "text/plain"
        assert request.body == b"hello"

    def test_from_environ_defaults(self) -> None:
        request = Request.from_environ({"CONTENT_LENGTH": "bogus"})
        assert request.method == "GET"
        assert request.path == "/"
        assert request.body == b""


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.body == ""
        assert response.content_type.startswith("text/html")

    def test_chainable_setters(self) -> None:
        response = Response().set_status(201).set_body("created").set_header("X-Id", "7")
        assert response.status == 201
        assert response.text == "created"
        assert response.headers["x-id"] == "7"

    def test_write_appends(self) -> None:
        response = Response().write("foo").write(b" bar")
        assert response.text == "foo bar"

    def test_write_to_bytes_body(self) -> None:
        response = Response(body=b"foo").write(" bar")
        assert response.body == b"foo bar"

    def test_body_bytes(self) -> None:
        assert Response(body="héllo").body_bytes == "héllo".encode()

    def test_status_line(self) -> None:
        assert Response(status=404).status_line == "404 Not Found"
        assert Response(status=299).status_line == "299"

    def test_header_list_fills_defaults(self) -> None:
        response = Response(body="abc").set_header("X-A", "1")
        assert response.header_list() == [
            ("Content-Type", "text/html; charset=utf-8"),
            ("X-A", "1"),
            ("Content-Length", "3"),
        ]

    def test_header_list_respects_explicit_content_type(self) -> None:
        response = Response().set_header("Content-Type", "application/json")
        names = [name for name, _ in response.header_list()]
        assert names.count("Content-Type") == 1
