"""Request handling pipeline.

The caller side of ``App.run()``: installs a request and a fresh
response, runs one dispatch cycle, and turns the outcome into a
finished ``Response``. ``HaltSignal`` is a normal way to finish;
perch errors become 404/500 responses.
"""

import logging

from perch.app import App
from perch.errors import HaltSignal, HTTPError, PerchError
from perch.http.request import Request
from perch.http.response import Response

logger = logging.getLogger("perch.server")


def handle_request(app: App, request: Request) -> Response:
    """Dispatch *request* through *app* and return the final response."""
    response = Response(content_type=app.config.default_content_type)
    app.set_request(request)
    app.set_response(response)

    try:
        app.run()
    except HaltSignal:
        logger.debug("%s %s halted with %d", request.method, request.path, app.response.status)
    except HTTPError as exc:
        logger.info("%s %s -> %d", request.method, request.path, exc.status)
        return _error_response(app, exc.status, exc.detail)
    except PerchError as exc:
        logger.exception("Error dispatching %s %s", request.method, request.path)
        return _error_response(app, 500, str(exc))

    return app.response


def _error_response(app: App, status: int, detail: str) -> Response:
    response = Response(status=status, content_type="text/plain; charset=utf-8")
    if app.config.debug and detail:
        response.set_body(detail)
    else:
        response.set_body(response.status_line)
    app.set_response(response)
    return response
