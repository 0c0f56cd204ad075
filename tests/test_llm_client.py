"""Tests for the chat-completion text generator (no network)."""
import json

import httpx
import pytest

from diva.exceptions import UpstreamProviderError
from diva.services.llm_client import OpenAITextGenerator


def _generator(handler, **kwargs) -> OpenAITextGenerator:
    kwargs.setdefault("api_key", "sk-test")
    return OpenAITextGenerator(
        base_url="https://llm.test/v1/",
        model="test-model",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
async def test_generate_returns_content():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("1 OVERVIEW\nHello"))

    text = await _generator(handler, temperature=0.2, max_tokens=500).generate("Write a guide")

    assert text == "1 OVERVIEW\nHello"
    assert seen["url"] == "https://llm.test/v1/chat/completions"
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["messages"] == [{"role": "user", "content": "Write a guide"}]
    assert seen["body"]["temperature"] == 0.2
    assert seen["body"]["max_tokens"] == 500


@pytest.mark.asyncio
async def test_no_auth_header_without_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=_completion("ok"))

    await _generator(handler, api_key="").generate("x")
    assert seen["auth"] is None


@pytest.mark.asyncio
async def test_non_200_raises():
    def handler(request):
        return httpx.Response(429, text="rate limited")

    with pytest.raises(UpstreamProviderError) as exc_info:
        await _generator(handler).generate("x")
    assert exc_info.value.message == "Text generation provider returned HTTP 429"
    assert exc_info.value.details == ["rate limited"]


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"choices": []}, _completion(None), _completion("   ")])
async def test_malformed_or_empty_body_raises(body):
    def handler(request):
        return httpx.Response(200, json=body)

    with pytest.raises(UpstreamProviderError):
        await _generator(handler).generate("x")


@pytest.mark.asyncio
async def test_invalid_json_raises():
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(UpstreamProviderError) as exc_info:
        await _generator(handler).generate("x")
    assert exc_info.value.message == "Malformed response from text generation provider"


@pytest.mark.asyncio
async def test_timeout_raises():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamProviderError) as exc_info:
        await _generator(handler).generate("x")
    assert exc_info.value.message == "Text generation timed out"


@pytest.mark.asyncio
async def test_connection_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamProviderError) as exc_info:
        await _generator(handler).generate("x")
    assert exc_info.value.message == "Text generation provider unreachable"
