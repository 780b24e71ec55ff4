"""Request failure taxonomy and its mapping onto plain-text HTTP responses.

Every failure the adapter itself detects is terminal for the request and is
reported synchronously. Failures raised by the engine are not part of this
taxonomy and propagate to the hosting framework untouched.
"""
from __future__ import annotations

from starlette.responses import Response

TYPE_TEXT = "text/plain"


class AdapterError(Exception):
    """Base class for failures that end a request before the engine is consulted."""

    status_code: int = 500
    reason: str = "Internal error"


class PathUnmatched(AdapterError):
    status_code = 404
    reason = "Not found"

    def __init__(self, path: str):
        super().__init__(f"no endpoint at {path!r}")
        self.path = path


class BadMessage(AdapterError):
    """The request did not carry a usable protocol message."""

    status_code = 400
    reason = "Bad request"


class MessageAbsent(BadMessage):
    def __init__(self, detail: str = "no message supplied"):
        super().__init__(detail)


class MessageMalformed(BadMessage):
    def __init__(self, detail: str = "message is not valid JSON"):
        super().__init__(detail)


def error_response(exc: AdapterError) -> Response:
    """Build the plain-text response for an adapter failure."""
    body = exc.reason.encode("utf-8")
    headers = {
        "Content-Type": TYPE_TEXT,
        "Content-Length": str(len(body)),
    }
    return Response(content=body, status_code=exc.status_code, headers=headers)
