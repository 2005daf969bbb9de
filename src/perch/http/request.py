"""Default HTTP request.

The dispatcher only reads ``method`` and ``path``; everything else is
here so handlers have something useful to work with. Any object with
those two attributes can stand in for it.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from perch.http.headers import MutableHeaders


@dataclass(slots=True)
class Request:
    """A mutable HTTP request.

    ``App.request`` default-constructs one (``GET /``) when nothing was
    injected; tests and adapters set ``method`` and ``path`` directly::

        request = app.request
        request.method = "POST"
        request.path = "/widgets"
    """

    method: str = "GET"
    path: str = "/"
    headers: MutableHeaders = field(default_factory=MutableHeaders)
    query_string: str = ""
    body: bytes = b""

    # Filled in by the dispatcher after a successful match
    path_params: dict[str, str] = field(default_factory=dict)

    # -- Computed properties --

    @property
    def query(self) -> dict[str, str]:
        """Query parameters, first value per key."""
        parsed = parse_qs(self.query_string, keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}

    def query_list(self, key: str) -> list[str]:
        """All query values for *key*."""
        return parse_qs(self.query_string, keep_blank_values=True).get(key, [])

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """The body parsed as JSON."""
        return json_module.loads(self.body)

    # -- Factory --

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any]) -> Request:
        """Create a Request from a WSGI environ."""
        headers = MutableHeaders()
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers.add(key[5:].replace("_", "-").title(), value)
        if environ.get("CONTENT_TYPE"):
            headers["Content-Type"] = environ["CONTENT_TYPE"]
        if environ.get("CONTENT_LENGTH"):
            headers["Content-Length"] = environ["CONTENT_LENGTH"]

        body = b""
        stream = environ.get("wsgi.input")
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        if stream is not None and length > 0:
            body = stream.read(length)

        # PEP 3333: PATH_INFO carries the raw bytes decoded as latin-1
        raw_path = environ.get("PATH_INFO") or "/"
        path = raw_path.encode("latin-1").decode("utf-8", "replace")

        return cls(
            method=str(environ.get("REQUEST_METHOD", "GET")).upper(),
            path=path,
            headers=headers,
            query_string=environ.get("QUERY_STRING", ""),
            body=body,
        )
