"""Tests for GeminiClient (generateContent REST wrapper)."""

from __future__ import annotations

import json

import httpx
import pytest

from resume_insights.clients.gemini_client import (
    GeminiClient,
    GenerationSettings,
    classify_status,
)
from resume_insights.config import GeminiConfig
from resume_insights.errors import FailureKind


def _body(text: str, input_tokens: int = 120, output_tokens: int = 80) -> dict:
    return {
        "candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}],
        "usageMetadata": {"promptTokenCount": input_tokens, "candidatesTokenCount": output_tokens},
    }


def _client(handler, **config) -> GeminiClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiClient(GeminiConfig(**config), http_client=http)


class TestRequestShape:
    async def test_posts_prompt_with_key_as_query_param(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_body("{}"))

        client = _client(handler, model="gemini-test")
        await client.call("hello prompt", "secret-key", GenerationSettings(temperature=0.3))

        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/v1beta/models/gemini-test:generateContent"
        assert request.url.params["key"] == "secret-key"
        body = json.loads(request.content)
        assert body["contents"] == [{"parts": [{"text": "hello prompt"}]}]
        assert body["generationConfig"] == {
            "temperature": 0.3,
            "topK": 1,
            "topP": 0.8,
            "maxOutputTokens": 4096,
        }
        assert len(body["safetySettings"]) == 4
        assert all(s["threshold"] == "BLOCK_MEDIUM_AND_ABOVE" for s in body["safetySettings"])

    def test_payload_without_safety_settings(self):
        payload = GenerationSettings(safety_threshold=None, max_output_tokens=2048).to_payload("p")
        assert "safetySettings" not in payload
        assert payload["generationConfig"]["maxOutputTokens"] == 2048


class TestClassification:
    @pytest.mark.parametrize(
        "status, kind",
        [
            (200, None),
            (204, None),
            (429, FailureKind.RATE_LIMITED),
            (401, FailureKind.UNAUTHORIZED),
            (403, FailureKind.UNAUTHORIZED),
            (400, FailureKind.TRANSIENT),
            (500, FailureKind.TRANSIENT),
            (503, FailureKind.TRANSIENT),
        ],
    )
    def test_classify_status(self, status, kind):
        assert classify_status(status) is kind

    async def test_success(self):
        client = _client(lambda request: httpx.Response(200, json=_body('{"a": 1}')))
        response = await client.call("p", "k")
        assert response.ok
        assert response.text == '{"a": 1}'
        assert response.status_code == 200
        assert response.input_tokens == 120
        assert response.output_tokens == 80

    async def test_multiple_text_parts_joined(self):
        body = {"candidates": [{"content": {"parts": [{"text": '{"a":'}, {"text": " 1}"}]}}]}
        client = _client(lambda request: httpx.Response(200, json=body))
        response = await client.call("p", "k")
        assert response.text == '{"a": 1}'

    async def test_rate_limited(self):
        client = _client(
            lambda request: httpx.Response(429, json={"error": {"message": "Quota exceeded"}})
        )
        response = await client.call("p", "k")
        assert response.failure is FailureKind.RATE_LIMITED
        assert response.status_code == 429
        assert "Quota exceeded" in response.error

    @pytest.mark.parametrize("status", [401, 403])
    async def test_unauthorized(self, status):
        client = _client(lambda request: httpx.Response(status, text="denied"))
        response = await client.call("p", "k")
        assert response.failure is FailureKind.UNAUTHORIZED

    async def test_server_error_is_transient(self):
        client = _client(lambda request: httpx.Response(500, text="boom"))
        response = await client.call("p", "k")
        assert response.failure is FailureKind.TRANSIENT
        assert "HTTP 500" in response.error

    async def test_timeout_is_transient(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = _client(handler, timeout=5)
        response = await client.call("p", "k")
        assert response.failure is FailureKind.TRANSIENT
        assert response.status_code is None
        assert "timed out after 5s" in response.error

    async def test_network_error_is_transient_and_hides_key(self):
        def handler(request):
            raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

        client = _client(handler)
        response = await client.call("p", "very-secret")
        assert response.failure is FailureKind.TRANSIENT
        assert "very-secret" not in response.error

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": []},
            {"candidates": [{}]},
            {"candidates": [{"content": {"parts": []}}]},
            {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
            {"promptFeedback": {"blockReason": "SAFETY"}},
        ],
    )
    async def test_missing_candidate_text_is_malformed(self, body):
        client = _client(lambda request: httpx.Response(200, json=body))
        response = await client.call("p", "k")
        assert response.failure is FailureKind.MALFORMED_UPSTREAM

    async def test_non_json_body_is_malformed(self):
        client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
        response = await client.call("p", "k")
        assert response.failure is FailureKind.MALFORMED_UPSTREAM


class TestTokenSummary:
    async def test_token_log_accumulates_and_resets(self):
        client = _client(lambda request: httpx.Response(200, json=_body("{}", 10, 5)))
        await client.call("one", "k")
        await client.call("two", "k")

        summary = client.get_token_summary()
        assert summary["input"] == 20
        assert summary["output"] == 10
        assert summary["calls"] == [("gemini-1.5-flash", 10, 5), ("gemini-1.5-flash", 10, 5)]
        assert client.get_token_summary()["calls"] == []

    @pytest.mark.parametrize(
        "usage",
        [
            "n/a",
            ["promptTokenCount", 3],
            {"promptTokenCount": "many", "candidatesTokenCount": None},
            {"promptTokenCount": {"n": 1}, "candidatesTokenCount": True},
        ],
    )
    async def test_unusable_usage_metadata_counts_as_zero(self, usage):
        body = {**_body('{"a": 1}'), "usageMetadata": usage}
        client = _client(lambda request: httpx.Response(200, json=body))

        response = await client.call("p", "k")

        assert response.ok
        assert response.text == '{"a": 1}'
        assert (response.input_tokens, response.output_tokens) == (0, 0)
        assert client.get_token_summary()["calls"] == [("gemini-1.5-flash", 0, 0)]

    async def test_failures_not_logged(self):
        client = _client(lambda request: httpx.Response(429))
        await client.call("p", "k")
        assert client.get_token_summary()["input"] == 0


class TestLifecycle:
    async def test_owned_client_closed_on_exit(self):
        async with GeminiClient() as client:
            inner = client._client
        assert inner.is_closed

    async def test_injected_client_left_open(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        async with GeminiClient(http_client=http):
            pass
        assert not http.is_closed
        await http.aclose()
