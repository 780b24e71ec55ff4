from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union
import uuid

from bayeuxgate.utils.logger_util import get_logger

logger = get_logger(__name__)

ReplyCallback = Callable[[List[Dict[str, Any]]], None]


class Engine(Protocol):
    """Protocol engine interface consumed by the HTTP adapter.

    ``process`` must eventually invoke ``callback`` exactly once with the list
    of reply envelopes (possibly empty). It may do so synchronously, later on
    the event loop, or from another thread. Either method may be a coroutine
    function.
    """

    def process(self, message: Any, local: bool, callback: ReplyCallback) -> Union[None, Awaitable[None]]:
        ...

    def flush_connection(self, message: Any) -> Union[None, Awaitable[None]]:
        ...


class LoopbackEngine:
    """Stateless engine for local development and smoke tests.

    Acknowledges every envelope it is given as successful. It keeps no client
    registry and delivers nothing to subscribers.
    """

    VERSION = "1.0"
    CONNECTION_TYPES = ["long-polling", "callback-polling"]

    def __init__(self, timeout: float = 30):
        self.timeout = float(timeout)

    def _advice(self) -> Dict[str, Any]:
        return {"reconnect": "retry", "interval": 0, "timeout": int(self.timeout * 1000)}

    def _reply(self, envelope: Any) -> Dict[str, Any]:
        if not isinstance(envelope, dict):
            return {"channel": None, "successful": False, "error": "405::Invalid message"}
        channel = envelope.get("channel")
        reply: Dict[str, Any] = {"channel": channel, "successful": True}
        if "id" in envelope:
            reply["id"] = envelope["id"]
        if channel == "/meta/handshake":
            reply["version"] = self.VERSION
            reply["clientId"] = uuid.uuid4().hex
            reply["supportedConnectionTypes"] = list(self.CONNECTION_TYPES)
            reply["advice"] = self._advice()
        elif channel == "/meta/connect":
            reply["clientId"] = envelope.get("clientId")
            reply["advice"] = self._advice()
        elif channel in ("/meta/subscribe", "/meta/unsubscribe"):
            reply["clientId"] = envelope.get("clientId")
            reply["subscription"] = envelope.get("subscription")
        return reply

    def process(self, message: Any, local: bool, callback: ReplyCallback) -> None:
        envelopes = message if isinstance(message, list) else [message]
        replies = [self._reply(e) for e in envelopes]
        logger.debug("LoopbackEngine.process local=%s envelopes=%s replies=%s", local, len(envelopes), len(replies))
        callback(replies)

    def flush_connection(self, message: Any) -> None:
        # no held connections to release
        logger.debug("LoopbackEngine.flush_connection called")


def create_engine(name: Optional[str] = None, **kwargs) -> Engine:
    n = (name or "loopback").strip().lower()
    if n in ("loopback", "mock", "none"):
        return LoopbackEngine(**kwargs)
    raise ValueError(f"Unknown engine name: {name}")
