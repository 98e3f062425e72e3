import json

import httpx
import pytest

from llm.providers.gemini_provider import GeminiProvider
from study_planner.config import GeminiConfig
from study_planner.errors import ConfigurationError, RemoteUnavailable

CONFIG = GeminiConfig(api_key="test-key", model="gemini-test", base_url="https://example.test/v1beta")


def _envelope(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _provider(handler, config=CONFIG):
    return GeminiProvider(config, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_sends_prompt_and_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_envelope('{"title": "x"}'))

    out = _provider(handler).generate("Parse this")

    assert out == '{"title": "x"}'
    assert seen["url"].path == "/v1beta/models/gemini-test:generateContent"
    assert seen["url"].params["key"] == "test-key"
    assert seen["body"] == {"contents": [{"parts": [{"text": "Parse this"}]}]}


def test_missing_key_fails_before_network():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json=_envelope("x"))

    with pytest.raises(ConfigurationError):
        _provider(handler, config=GeminiConfig(api_key="")).generate("hi")
    assert calls == []


@pytest.mark.parametrize("status", [400, 403, 429, 500, 503])
def test_non_success_status_is_unavailable(status):
    provider = _provider(lambda request: httpx.Response(status, json={"error": {"code": status}}))
    with pytest.raises(RemoteUnavailable) as exc:
        provider.generate("hi")
    assert exc.value.status_code == status


def test_transport_error_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    with pytest.raises(RemoteUnavailable):
        _provider(handler).generate("hi")


def test_unparsable_envelope_is_unavailable():
    provider = _provider(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    with pytest.raises(RemoteUnavailable):
        provider.generate("hi")


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"candidates": []},
        {"candidates": [{"content": {}}]},
        {"candidates": [{"content": {"parts": [{}]}}]},
        {"candidates": [{"content": {"parts": [{"text": 7}]}}]},
        [],
    ],
)
def test_reached_but_empty_returns_empty_text(body):
    provider = _provider(lambda request: httpx.Response(200, json=body))
    assert provider.generate("hi") == ""
