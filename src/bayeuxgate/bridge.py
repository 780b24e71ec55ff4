from __future__ import annotations

import asyncio
import inspect
from typing import Any, Dict, List

from bayeuxgate.engine import Engine
from bayeuxgate.utils.logger_util import get_logger

logger = get_logger(__name__)


class ProtocolBridge:
    """Hands a parsed message to the engine and waits for its single reply.

    The engine's callback is turned into an ``asyncio.Future`` so the request
    handler has one explicit suspension point. No timeout is applied here;
    a stalled engine is the engine's problem.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    async def _maybe_await(self, result: Any) -> None:
        if inspect.isawaitable(result):
            await result

    async def dispatch(self, message: Any, flush: bool = False, local: bool = False) -> List[Dict[str, Any]]:
        """Process ``message`` and return the engine's replies.

        With ``flush`` set, the engine is first told to release any connection
        it is holding for the sender (GET responses cannot stay open).
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future = loop.create_future()

        def _resolve(replies: Any) -> None:
            if future.cancelled():
                return
            if future.done():
                logger.warning("engine called back more than once; extra reply ignored")
                return
            future.set_result(list(replies or []))

        def _callback(replies: Any) -> None:
            loop.call_soon_threadsafe(_resolve, replies)

        if flush:
            await self._maybe_await(self.engine.flush_connection(message))
        logger.debug("dispatching message to engine local=%s flush=%s", local, flush)
        await self._maybe_await(self.engine.process(message, local, _callback))
        return await future
