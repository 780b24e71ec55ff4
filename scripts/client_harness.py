"""Simple client harness that handshakes over POST, then polls over JSONP GET.

Start a server first (``python -m bayeuxgate.main``), then run:
    python scripts/client_harness.py [base_url]
"""
import asyncio
import json
import sys

import httpx

BASE = "http://127.0.0.1:8000"
MOUNT = "/bayeux"


async def run(base: str = BASE):
    async with httpx.AsyncClient(base_url=base) as client:
        handshake = [{"channel": "/meta/handshake", "version": "1.0", "supportedConnectionTypes": ["long-polling", "callback-polling"], "id": "1"}]
        r = await client.post(MOUNT, content=json.dumps(handshake), headers={"Content-Type": "application/json"})
        print("handshake", r.status_code, r.headers.get("content-type"), r.text)
        client_id = r.json()[0].get("clientId")

        # the "plain" binding: form field in a text/plain body, cross-origin
        subscribe = {"channel": "/meta/subscribe", "clientId": client_id, "subscription": "/chat", "id": "2"}
        r = await client.post(
            MOUNT,
            data={"message": json.dumps(subscribe)},
            headers={"Content-Type": "text/plain", "Origin": "http://example.com"},
        )
        print("subscribe", r.status_code, r.headers.get("access-control-allow-origin"), r.text)

        connect = {"channel": "/meta/connect", "clientId": client_id, "connectionType": "callback-polling", "id": "3"}
        r = await client.get(MOUNT, params={"message": json.dumps(connect), "jsonp": "harness"})
        print("connect", r.status_code, r.headers.get("cache-control"), r.text)

        r = await client.get(MOUNT + ".js")
        print("client script", r.status_code, len(r.content), "bytes")


if __name__ == '__main__':
    asyncio.run(run(sys.argv[1] if len(sys.argv) > 1 else BASE))
