import asyncio
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from bayeuxgate.config import AdapterConfig
from bayeuxgate.main import create_app

# tests/conftest.py


class RecordingEngine:
    """Fake engine that records every call and answers with canned replies.

    ``calls`` holds ("flush", message) and ("process", message, local) tuples
    in the order they happened.
    """

    def __init__(self, replies: Optional[List[Dict[str, Any]]] = None):
        self.replies = list(replies or [])
        self.calls: List[tuple] = []

    @property
    def processed(self) -> List[tuple]:
        return [c[1:] for c in self.calls if c[0] == "process"]

    @property
    def flushed(self) -> List[Any]:
        return [c[1] for c in self.calls if c[0] == "flush"]

    def process(self, message, local, callback):
        self.calls.append(("process", message, local))
        callback(list(self.replies))

    def flush_connection(self, message):
        self.calls.append(("flush", message))


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine()


@pytest.fixture
def config() -> AdapterConfig:
    return AdapterConfig(mount="/bayeux", timeout=30)


@pytest.fixture
def app(engine, config):
    """FastAPI app wired to the recording engine."""
    return create_app(engine=engine, config=config)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    def _run(coro):
        return asyncio.run(coro)
    return _run
