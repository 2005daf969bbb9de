"""Default HTTP response.

Handlers mutate the app's response in place; ``halt()``, ``stop()`` and
``redirect()`` finalize it. The dispatcher relies only on ``status``,
``body`` and ``set_header()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from http import HTTPStatus

from perch.http.headers import MutableHeaders


@dataclass(slots=True)
class Response:
    """A mutable HTTP response.

    Setters return the response so calls can be chained::

        app.response.set_status(201).set_body("created")
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: MutableHeaders = field(default_factory=MutableHeaders)

    # -- Chainable setters --

    def set_status(self, status: int) -> Response:
        self.status = status
        return self

    def set_body(self, body: str | bytes) -> Response:
        self.body = body
        return self

    def set_header(self, name: str, value: str) -> Response:
        """Set *name*, replacing any existing values."""
        self.headers[name] = value
        return self

    def write(self, chunk: str | bytes) -> Response:
        """Append *chunk* to the body."""
        if isinstance(self.body, bytes) and isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        elif isinstance(self.body, str) and isinstance(chunk, bytes):
            chunk = chunk.decode("utf-8")
        self.body += chunk  # type: ignore[operator]
        return self

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    @property
    def status_line(self) -> str:
        """``"404 Not Found"`` style status for WSGI ``start_response``."""
        try:
            phrase = HTTPStatus(self.status).phrase
        except ValueError:
            phrase = ""
        return f"{self.status} {phrase}".rstrip()

    def header_list(self) -> list[tuple[str, str]]:
        """Headers for the wire, with Content-Type and Content-Length filled in."""
        items = self.headers.items_raw()
        if "content-type" not in self.headers:
            items.insert(0, ("Content-Type", self.content_type))
        if "content-length" not in self.headers:
            items.append(("Content-Length", str(len(self.body_bytes))))
        return items
