import pytest

from bayeuxgate.config import AdapterConfig
from bayeuxgate.main import create_app
from fastapi.testclient import TestClient

ORIGIN = "http://example.com"
HANDSHAKE_REPLY = [{"channel": "/meta/handshake"}]


@pytest.fixture
def params():
    return {"message": '{"channel":"/foo"}', "jsonp": "callback"}


def test_forwards_message_param_after_flushing(client, engine, params):
    client.get("/bayeux", params=params)
    assert engine.calls == [
        ("flush", {"channel": "/foo"}),
        ("process", {"channel": "/foo"}, False),
    ]


def test_returns_response_as_javascript(client, engine, params):
    engine.replies = HANDSHAKE_REPLY
    r = client.get("/bayeux", params=params)
    assert r.status_code == 200
    assert r.headers["content-type"] == "text/javascript"
    assert r.headers["content-length"] == "42"
    assert r.text == 'callback([{"channel":"/meta/handshake"}]);'


def test_does_not_let_client_cache_response(client, engine, params):
    engine.replies = HANDSHAKE_REPLY
    r = client.get("/bayeux", params=params)
    assert r.headers["cache-control"] == "no-cache, no-store"


def test_empty_list_message_with_named_callback(client, engine):
    engine.replies = HANDSHAKE_REPLY
    r = client.get("/bayeux?message=%5B%5D&jsonp=callback")
    assert engine.flushed == [[]]
    assert engine.processed == [([], False)]
    assert r.text == 'callback([{"channel":"/meta/handshake"}]);'


def test_unknown_path_is_404(client, engine, params):
    r = client.get("/blah", params=params)
    assert r.status_code == 404
    assert r.headers["content-type"] == "text/plain"
    assert engine.calls == []


def test_missing_jsonp_uses_default_callback(client, engine, params):
    del params["jsonp"]
    engine.replies = HANDSHAKE_REPLY
    r = client.get("/bayeux", params=params)
    assert engine.flushed == [{"channel": "/foo"}]
    assert r.status_code == 200
    assert r.headers["content-type"] == "text/javascript"
    assert r.headers["content-length"] == "47"
    assert r.text == 'jsonpcallback([{"channel":"/meta/handshake"}]);'


def test_empty_jsonp_uses_default_callback(client, engine, params):
    params["jsonp"] = ""
    r = client.get("/bayeux", params=params)
    assert r.text == "jsonpcallback([]);"


def test_configured_default_callback(engine, params):
    del params["jsonp"]
    app = create_app(engine=engine, config=AdapterConfig(mount="/bayeux", jsonp_callback="Bayeux.receive"))
    r = TestClient(app).get("/bayeux", params=params)
    assert r.text == "Bayeux.receive([]);"


@pytest.mark.parametrize("message", ["[}", "", "{", "[Infinity]"])
def test_malformed_json_is_400_and_engine_not_called(client, engine, params, message):
    params["message"] = message
    r = client.get("/bayeux", params=params)
    assert r.status_code == 400
    assert r.headers["content-type"] == "text/plain"
    assert engine.calls == []


def test_missing_message_is_400_and_engine_not_called(client, engine, params):
    del params["message"]
    r = client.get("/bayeux", params=params)
    assert r.status_code == 400
    assert r.headers["content-type"] == "text/plain"
    assert engine.calls == []


def test_cross_origin_get_echoes_origin(client, params):
    r = client.get("/bayeux", params=params, headers={"Origin": ORIGIN})
    assert r.headers["access-control-allow-origin"] == ORIGIN
    assert r.headers["cache-control"] == "no-cache, no-store"


def test_same_origin_get_has_no_access_control_header(client, params):
    r = client.get("/bayeux", params=params)
    assert "access-control-allow-origin" not in r.headers


def test_client_script(client, engine):
    r = client.get("/bayeux.js")
    assert r.status_code == 200
    assert r.headers["content-type"] == "text/javascript"
    assert "function(){" in r.text
    assert r.headers["content-length"] == str(len(r.content))
    assert engine.calls == []


@pytest.mark.parametrize("method", ["post", "put", "delete"])
def test_client_script_for_any_method(client, engine, method):
    r = client.request(method.upper(), "/bayeux.js")
    assert r.status_code == 200
    assert r.headers["content-type"] == "text/javascript"
    assert engine.calls == []


@pytest.mark.parametrize("path", ["/", "/blah", "/bayeux/", "/bayeuxx", "/bayeux.json", "/bayeux/meta", "/BAYEUX", "/prefix/bayeux"])
@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE"])
def test_any_other_path_is_404(client, engine, path, method):
    r = client.request(method, path, params={"message": "[]"})
    assert r.status_code == 404
    assert r.headers["content-type"] == "text/plain"
    assert engine.calls == []


def test_repeated_get_is_byte_identical(client, engine, params):
    engine.replies = HANDSHAKE_REPLY
    first = client.get("/bayeux", params=params, headers={"Origin": ORIGIN})
    second = client.get("/bayeux", params=params, headers={"Origin": ORIGIN})
    assert first.content == second.content
    assert dict(first.headers) == dict(second.headers)


def test_deeply_nested_message_is_400(client, engine):
    r = client.get("/bayeux", params={"message": "[" * 8000})
    assert r.status_code == 400
    assert r.headers["content-type"] == "text/plain"
    assert engine.calls == []


@pytest.mark.parametrize("callback", ["alert(1);x", "a b", "</script>", "1abc", "cb;"])
def test_invalid_jsonp_callback_is_400_and_engine_not_called(client, engine, params, callback):
    params["jsonp"] = callback
    r = client.get("/bayeux", params=params)
    assert r.status_code == 400
    assert r.headers["content-type"] == "text/plain"
    assert engine.calls == []


@pytest.mark.parametrize("callback", ["cb", "$jsonp_1", "Bayeux.Client.receive"])
def test_valid_jsonp_callbacks_are_echoed(client, params, callback):
    params["jsonp"] = callback
    r = client.get("/bayeux", params=params)
    assert r.status_code == 200
    assert r.text == f"{callback}([]);"


def test_get_body_is_not_read_as_message(client, engine):
    r = client.request("GET", "/bayeux", content="message=%5B%5D", headers={"Content-Type": "text/plain"})
    assert r.status_code == 400
    assert engine.calls == []
