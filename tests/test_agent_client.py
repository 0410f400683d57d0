import asyncio
import json

import httpx
import pytest

from agent.core.prompt import NO_RESPONSE_ERROR
from agent.models import ChatMessage
from client.agent_client import AgentClient, AgentRequestError


MESSAGES = [ChatMessage(role="user", content="hi")]


def run_with(handler, base_url="http://agent.test/"):
    async def scenario():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport) as http_client:
            return await AgentClient(base_url, http_client=http_client).request_reply(MESSAGES)

    return asyncio.run(scenario())


def test_posts_transcript_and_returns_text():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"text": "namaste"})

    assert run_with(handler) == "namaste"
    assert seen["url"] == "http://agent.test/api/agent"
    assert seen["content_type"] == "application/json"
    assert seen["body"] == {"messages": [{"role": "user", "content": "hi"}]}


def test_missing_text_is_blank():
    assert run_with(lambda request: httpx.Response(200, json={})) == ""


def test_error_field_of_failed_response():
    with pytest.raises(AgentRequestError, match="rate limited"):
        run_with(lambda request: httpx.Response(500, json={"error": "rate limited"}))


def test_failed_response_without_json_uses_generic_message():
    with pytest.raises(AgentRequestError) as excinfo:
        run_with(lambda request: httpx.Response(502, text="Bad Gateway"))

    assert str(excinfo.value) == NO_RESPONSE_ERROR


def test_transport_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AgentRequestError, match="connection refused"):
        run_with(handler)


class RecordingAsyncClient(httpx.AsyncClient):
    created = []

    def __init__(self, **kwargs):
        kwargs["transport"] = httpx.MockTransport(lambda request: httpx.Response(200, json={"text": "ok"}))
        super().__init__(**kwargs)
        RecordingAsyncClient.created.append(self)


def own_client_reply(monkeypatch, **client_kwargs):
    RecordingAsyncClient.created = []
    monkeypatch.setattr(httpx, "AsyncClient", RecordingAsyncClient)
    client = AgentClient("http://agent.test", **client_kwargs)
    return asyncio.run(client.request_reply(MESSAGES))


def test_own_client_has_no_timeout_by_default(monkeypatch):
    assert own_client_reply(monkeypatch) == "ok"

    timeout = RecordingAsyncClient.created[0].timeout
    assert timeout.read is None
    assert timeout.connect is None


def test_own_client_uses_configured_timeout(monkeypatch):
    own_client_reply(monkeypatch, timeout=30.0)

    assert RecordingAsyncClient.created[0].timeout.read == 30.0


def test_invalid_url_is_a_request_error():
    with pytest.raises(AgentRequestError):
        asyncio.run(AgentClient("http://[::1").request_reply(MESSAGES))
