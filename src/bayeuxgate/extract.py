"""Locate the raw message payload inside a request.

Where the payload lives depends on how the client sent it:

* ``GET``: the ``message`` query parameter (callback-polling / JSONP clients).
* a body declared as exactly ``application/json``: the whole body, verbatim.
* any other body, including one with no content type at all: form-encoded
  pairs, of which ``message`` carries the payload.

The choice is made once, by :func:`select_strategy`, and each strategy is a
plain function over :class:`RequestContext`.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional
from urllib.parse import parse_qsl

from bayeuxgate.errors import MessageAbsent, MessageMalformed
from bayeuxgate.schemas import RequestContext

MESSAGE_PARAM = "message"
TYPE_JSON = "application/json"


class ContentKind(str, Enum):
    QUERY = "query"
    JSON_BODY = "json-body"
    FORM_BODY = "form-body"


def media_type(content_type: Optional[str]) -> str:
    """Lower-cased media type with any parameters (charset etc.) removed."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json(content_type: Optional[str]) -> bool:
    return media_type(content_type) == TYPE_JSON


def classify_content_type(content_type: Optional[str]) -> ContentKind:
    if is_json(content_type):
        return ContentKind.JSON_BODY
    return ContentKind.FORM_BODY


def select_strategy(ctx: RequestContext) -> ContentKind:
    if ctx.is_get:
        return ContentKind.QUERY
    return classify_content_type(ctx.content_type)


def _decode_body(body: bytes) -> str:
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MessageMalformed("request body is not valid UTF-8") from exc


def parse_form(body: bytes) -> Dict[str, str]:
    """Decode a form-encoded body; the last occurrence of a key wins."""
    text = _decode_body(body)
    return dict(parse_qsl(text, keep_blank_values=True))


def _from_query(ctx: RequestContext) -> str:
    payload = ctx.query_params.get(MESSAGE_PARAM)
    if payload is None:
        raise MessageAbsent("missing 'message' query parameter")
    return payload


def _from_json_body(ctx: RequestContext) -> str:
    return _decode_body(ctx.body)


def _from_form_body(ctx: RequestContext) -> str:
    payload = parse_form(ctx.body).get(MESSAGE_PARAM)
    if payload is None:
        raise MessageAbsent("missing 'message' form field")
    return payload


STRATEGIES: Dict[ContentKind, Callable[[RequestContext], str]] = {
    ContentKind.QUERY: _from_query,
    ContentKind.JSON_BODY: _from_json_body,
    ContentKind.FORM_BODY: _from_form_body,
}


def extract_payload(ctx: RequestContext) -> str:
    """Return the raw message text for ``ctx``.

    Raises:
        MessageAbsent: the request names no message at all.
        MessageMalformed: the body bytes cannot be decoded as text.
    """
    return STRATEGIES[select_strategy(ctx)](ctx)
