"""Serialise engine replies into HTTP responses.

POST replies are plain JSON. GET replies are JSONP: the JSON wrapped in a call
to the client-supplied (or default) callback, served as script and never
cached, since GET backs callback-polling.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from starlette.responses import Response

from bayeuxgate.config import JS_IDENTIFIER
from bayeuxgate.errors import MessageMalformed
from bayeuxgate.extract import TYPE_JSON, is_json
from bayeuxgate.schemas import RequestContext

TYPE_SCRIPT = "text/javascript"
JSONP_PARAM = "jsonp"
NO_CACHE = "no-cache, no-store"


def encode_json(replies: List[Dict[str, Any]]) -> str:
    return json.dumps(replies, separators=(",", ":"))


def cors_headers(ctx: RequestContext) -> Dict[str, str]:
    """Echo the request's Origin unless the request body was declared as JSON.

    A JSON content type means a same-origin XHR client, which does not ask for
    the header.
    """
    if ctx.origin and not is_json(ctx.content_type):
        return {"Access-Control-Allow-Origin": ctx.origin}
    return {}


def _response(body: bytes, content_type: str, extra: Optional[Dict[str, str]] = None, status_code: int = 200) -> Response:
    # explicit Content-Type stops starlette from appending a charset
    headers = {"Content-Type": content_type, "Content-Length": str(len(body))}
    if extra:
        headers.update(extra)
    return Response(content=body, status_code=status_code, headers=headers)


def jsonp_callback(ctx: RequestContext, default: str) -> str:
    """Callback name for a GET reply.

    The name is written into a script body, so anything that is not a plain
    (dotted) identifier is rejected.
    """
    callback = ctx.query_params.get(JSONP_PARAM) or default
    if not JS_IDENTIFIER.match(callback):
        raise MessageMalformed(f"invalid jsonp callback {callback!r}")
    return callback


def format_response(replies: List[Dict[str, Any]], ctx: RequestContext, default_callback: str) -> Response:
    extra = cors_headers(ctx)
    if ctx.is_get:
        callback = jsonp_callback(ctx, default_callback)
        body = f"{callback}({encode_json(replies)});".encode("utf-8")
        return _response(body, TYPE_SCRIPT, {"Cache-Control": NO_CACHE, **extra})
    return _response(encode_json(replies).encode("utf-8"), TYPE_JSON, extra)


def script_response(script: bytes) -> Response:
    return _response(script, TYPE_SCRIPT)
