from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from starlette.requests import Request


@dataclass(frozen=True)
class RequestContext:
    """The parts of an HTTP request the adapter looks at.

    Built once per request; extraction works on this value rather than on the
    framework request so it can be exercised without an HTTP stack.
    """

    method: str
    path: str
    content_type: Optional[str] = None
    query_params: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    origin: Optional[str] = None

    @property
    def is_get(self) -> bool:
        return self.method.upper() == "GET"

    @classmethod
    async def from_request(cls, request: Request) -> "RequestContext":
        ctx = cls(
            method=request.method.upper(),
            path=request.url.path,
            content_type=request.headers.get("content-type"),
            query_params=dict(request.query_params),
            origin=request.headers.get("origin"),
        )
        # GET carries its message in the query string
        if ctx.is_get:
            return ctx
        return replace(ctx, body=await request.body())
