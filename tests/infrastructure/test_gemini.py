"""Tests for GeminiClient request shape and reply handling."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from aacboard.infrastructure.gemini import ExternalServiceError, GeminiClient


def _client(handler: Any, **kwargs: Any) -> GeminiClient:
    return GeminiClient("secret-key", transport=httpx.MockTransport(handler), **kwargs)


def _reply(text: Any) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestRequest:
    def test_endpoint(self) -> None:
        client = GeminiClient("k", model="gemini-test", base_url="https://example.test/models/")
        assert client.endpoint == "https://example.test/models/gemini-test:generateContent"
        assert client.model == "gemini-test"

    def test_payload(self) -> None:
        client = GeminiClient("k", generation_config={"temperature": 0.1, "topK": 1})
        payload = client.build_payload("hello")
        assert payload["contents"] == [{"parts": [{"text": "hello"}]}]
        assert payload["generationConfig"] == {
            "temperature": 0.1,
            "topK": 1,
            "responseMimeType": "application/json",
        }

    def test_sends_key_header_and_body(self) -> None:
        seen: dict[str, Any] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["key"] = request.headers["x-goog-api-key"]
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_reply("{}"))

        _client(handler).generate("prompt text")
        assert seen["key"] == "secret-key"
        assert seen["url"].endswith(":generateContent")
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "prompt text"


class TestGenerate:
    def test_returns_first_candidate_text(self) -> None:
        client = _client(lambda request: httpx.Response(200, json=_reply('{"intent": "x"}')))
        assert client.generate("p") == '{"intent": "x"}'

    def test_error_status(self) -> None:
        client = _client(lambda request: httpx.Response(429, text="quota"))
        with pytest.raises(ExternalServiceError, match="429"):
            client.generate("p")

    def test_non_json_body(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(ExternalServiceError, match="not JSON"):
            client.generate("p")

    @pytest.mark.parametrize(
        "body",
        [{}, {"candidates": []}, {"candidates": [{"content": {}}]}, _reply(""), _reply(3)],
    )
    def test_missing_text(self, body: dict[str, Any]) -> None:
        client = _client(lambda request: httpx.Response(200, json=body))
        with pytest.raises(ExternalServiceError, match="Empty response"):
            client.generate("p")

    def test_transport_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(httpx.ConnectError):
            _client(handler).generate("p")
