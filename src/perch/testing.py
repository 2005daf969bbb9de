"""Test client for perch applications.

Uses the same Request and Response types as production and runs
requests through ``handle_request()`` directly, with no HTTP involved.
"""

import json as json_module

from perch.app import App
from perch.http.headers import MutableHeaders
from perch.http.request import Request
from perch.http.response import Response
from perch.server.handler import handle_request


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Synchronous test client for perch applications.

    Usage::

        client = TestClient(app)
        response = client.get("/")
        assert response.status == 200
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
    ) -> Response:
        """Send a request with an arbitrary method."""
        path, _, query_string = path.partition("?")
        request = Request(
            method=method.upper(),
            path=path,
            headers=MutableHeaders((headers or {}).items()),
            query_string=query_string,
            body=body,
        )
        return handle_request(self.app, request)

    def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return self.request("GET", path, headers=headers)

    def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: object | None = None,
    ) -> Response:
        """Send a POST request. *json* is encoded and sets the content type."""
        extra_headers: dict[str, str] = {}
        request_body = body or b""

        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["Content-Type"] = "application/json"

        merged = {**extra_headers, **(headers or {})}
        return self.request("POST", path, headers=merged, body=request_body)

    def put(self, path: str, *, headers: dict[str, str] | None = None, body: bytes = b"") -> Response:
        return self.request("PUT", path, headers=headers, body=body)

    def patch(self, path: str, *, headers: dict[str, str] | None = None, body: bytes = b"") -> Response:
        return self.request("PATCH", path, headers=headers, body=body)

    def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return self.request("DELETE", path, headers=headers)

    def options(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return self.request("OPTIONS", path, headers=headers)
