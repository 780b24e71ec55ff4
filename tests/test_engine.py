import pytest

from bayeuxgate.engine import LoopbackEngine, create_engine


def _process(engine, message, local=False):
    out = []
    engine.process(message, local, out.append)
    assert len(out) == 1
    return out[0]


def test_handshake_reply_carries_client_id_and_advice():
    reply, = _process(LoopbackEngine(timeout=45), {"channel": "/meta/handshake", "id": "1"})
    assert reply["successful"] is True
    assert reply["id"] == "1"
    assert reply["clientId"]
    assert "long-polling" in reply["supportedConnectionTypes"]
    assert reply["advice"]["timeout"] == 45000


def test_each_envelope_in_a_batch_is_answered():
    replies = _process(LoopbackEngine(), [{"channel": "/meta/connect", "clientId": "abc"}, {"channel": "/meta/subscribe", "clientId": "abc", "subscription": "/foo"}])
    assert [r["channel"] for r in replies] == ["/meta/connect", "/meta/subscribe"]
    assert replies[1]["subscription"] == "/foo"


def test_empty_batch_gets_empty_reply():
    assert _process(LoopbackEngine(), []) == []


def test_non_object_envelope_is_unsuccessful():
    reply, = _process(LoopbackEngine(), [42])
    assert reply["successful"] is False


def test_create_engine_by_name():
    assert isinstance(create_engine("loopback", timeout=10), LoopbackEngine)
    assert isinstance(create_engine(" Mock "), LoopbackEngine)
    assert isinstance(create_engine(None), LoopbackEngine)


def test_create_engine_unknown_name():
    with pytest.raises(ValueError):
        create_engine("redis")
