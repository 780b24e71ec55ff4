from __future__ import annotations

from typing import Any, Dict, List, Optional

from starlette.requests import Request
from starlette.responses import Response

from bayeuxgate.bridge import ProtocolBridge
from bayeuxgate.client_script import load_client_script
from bayeuxgate.config import AdapterConfig
from bayeuxgate.engine import Engine, create_engine
from bayeuxgate.errors import AdapterError, PathUnmatched, error_response
from bayeuxgate.extract import extract_payload
from bayeuxgate.formatter import format_response, jsonp_callback, script_response
from bayeuxgate.parser import parse_message
from bayeuxgate.routing import Endpoint, route
from bayeuxgate.schemas import RequestContext
from bayeuxgate.utils.logger_util import get_logger

logger = get_logger(__name__)


class LocalClient:
    """In-process publisher talking to the engine without going through HTTP.

    Messages sent this way are flagged as local to the engine.
    """

    def __init__(self, bridge: ProtocolBridge):
        self._bridge = bridge

    async def send(self, message: Any) -> List[Dict[str, Any]]:
        return await self._bridge.dispatch(message, local=True)

    async def publish(self, channel: str, data: Any) -> List[Dict[str, Any]]:
        return await self.send({"channel": channel, "data": data})


class BayeuxAdapter:
    """HTTP transport for a Bayeux engine.

    Serves the protocol endpoint at ``config.mount`` and the browser client at
    ``config.mount + ".js"``; every other path is a 404. Usable as a request
    handler (:meth:`handle`) or directly as an ASGI application.
    """

    def __init__(self, engine: Optional[Engine] = None, config: Optional[AdapterConfig] = None):
        self.config = config or AdapterConfig()
        self.engine = engine if engine is not None else create_engine(self.config.engine, timeout=self.config.timeout)
        self.bridge = ProtocolBridge(self.engine)
        self.script = load_client_script(self.config.script_path)

    def get_client(self) -> LocalClient:
        return LocalClient(self.bridge)

    async def handle(self, request: Request) -> Response:
        path = request.url.path
        endpoint = route(path, self.config.mount)
        logger.debug("%s %s -> %s", request.method, path, endpoint.value)
        try:
            if endpoint is Endpoint.UNMATCHED:
                raise PathUnmatched(path)
            if endpoint is Endpoint.SCRIPT:
                return script_response(self.script)
            ctx = await RequestContext.from_request(request)
            message = parse_message(extract_payload(ctx))
            if ctx.is_get:
                # reject a bad callback before the engine sees the message
                jsonp_callback(ctx, self.config.jsonp_callback)
        except AdapterError as exc:
            logger.debug("rejected %s %s: %s (%s)", request.method, path, exc.status_code, exc)
            return error_response(exc)

        replies = await self.bridge.dispatch(message, flush=ctx.is_get)
        return format_response(replies, ctx, self.config.jsonp_callback)

    async def __call__(self, scope, receive, send) -> None:
        if scope["type"] != "http":
            raise RuntimeError(f"BayeuxAdapter only serves http scopes, got {scope['type']!r}")
        response = await self.handle(Request(scope, receive))
        await response(scope, receive, send)
