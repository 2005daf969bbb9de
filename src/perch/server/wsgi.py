"""WSGI entry point.

Thin adapter: environ -> ``Request``, ``handle_request()``, then the
``Response`` goes out through ``start_response``.
"""

from collections.abc import Callable, Iterable
from typing import Any

from perch.app import App
from perch.http.request import Request
from perch.server.handler import handle_request

StartResponse = Callable[[str, list[tuple[str, str]]], Any]


class WSGIAdapter:
    """Expose an ``App`` as a WSGI application::

        application = WSGIAdapter(app)
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    def __call__(self, environ: dict[str, Any], start_response: StartResponse) -> Iterable[bytes]:
        request = Request.from_environ(environ)
        response = handle_request(self.app, request)
        start_response(response.status_line, response.header_list())
        return [response.body_bytes]
