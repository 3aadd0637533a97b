"""Tests for the Gemini REST client."""

import sys
from pathlib import Path

import aiohttp
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from gemini import GeminiClient, GeminiError, extract_text, image_part, text_part


class FakeResponse:
    def __init__(self, status=200, payload=None, body="", json_error=None):
        self.status = status
        self._payload = payload
        self._body = body
        self._json_error = json_error

    async def json(self, content_type=None):
        if self._json_error:
            raise self._json_error
        return self._payload

    async def text(self):
        return self._body


class FakeRequest:
    def __init__(self, response):
        self.response = response

    async def __aenter__(self):
        return self.response

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    closed = False

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, params=None, json=None):
        self.calls.append({"url": url, "params": params, "json": json})
        if self.error:
            raise self.error
        return FakeRequest(self.response)


def make_client(session):
    return GeminiClient(
        api_key="test-key",
        url="https://example.test/models/gemini:generateContent",
        generation_config={"temperature": 0.7, "topK": 40, "topP": 0.95, "maxOutputTokens": 800},
        session=session,
    )


GOOD_PAYLOAD = {"candidates": [{"content": {"parts": [{"text": "Hello there!"}]}}]}


class TestExtractText:
    def test_success_shape(self):
        assert extract_text(GOOD_PAYLOAD) == "Hello there!"

    @pytest.mark.parametrize("payload", [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {}}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inline_data": {}}]}}]},
        {"candidates": [{"content": {"parts": [{"text": "   "}]}}]},
        None,
        "nonsense",
    ])
    def test_unusable_shapes(self, payload):
        assert extract_text(payload) is None


class TestParts:
    def test_text_part(self):
        assert text_part("hi") == {"text": "hi"}

    def test_image_part(self):
        assert image_part("image/png", "QUJD") == {
            "inline_data": {"mime_type": "image/png", "data": "QUJD"}
        }


class TestGenerate:
    @pytest.mark.asyncio
    async def test_posts_contents_and_generation_config(self):
        session = FakeSession(FakeResponse(payload=GOOD_PAYLOAD))
        client = make_client(session)
        contents = [{"role": "user", "parts": [{"text": "hi"}]}]

        assert await client.generate(contents) == "Hello there!"

        call = session.calls[0]
        assert call["params"] == {"key": "test-key"}
        assert call["json"]["contents"] == contents
        assert call["json"]["generationConfig"] == {
            "temperature": 0.7, "topK": 40, "topP": 0.95, "maxOutputTokens": 800
        }

    @pytest.mark.asyncio
    async def test_malformed_response_returns_none(self):
        client = make_client(FakeSession(FakeResponse(payload={"promptFeedback": {}})))
        assert await client.generate([]) is None

    @pytest.mark.asyncio
    async def test_http_error_raises(self):
        client = make_client(FakeSession(FakeResponse(status=500, body="boom")))
        with pytest.raises(GeminiError, match="HTTP 500"):
            await client.generate([])

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        client = make_client(FakeSession(error=aiohttp.ClientConnectionError("refused")))
        with pytest.raises(GeminiError):
            await client.generate([])

    @pytest.mark.asyncio
    async def test_bad_json_raises(self):
        client = make_client(FakeSession(FakeResponse(json_error=ValueError("not json"))))
        with pytest.raises(GeminiError, match="Undecodable"):
            await client.generate([])
