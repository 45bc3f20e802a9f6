"""Async client for the Gemini generateContent REST endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from resume_insights.config import GeminiConfig
from resume_insights.errors import FailureKind
from resume_insights.models.response import ModelResponse

logger = logging.getLogger(__name__)

HARM_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


@dataclass(frozen=True)
class GenerationSettings:
    """Fixed sampling and safety parameters sent with every request of a task."""

    temperature: float = 0.1
    top_k: int = 1
    top_p: float = 0.8
    max_output_tokens: int = 4096
    safety_threshold: str | None = "BLOCK_MEDIUM_AND_ABOVE"
    safety_categories: tuple[str, ...] = HARM_CATEGORIES

    def to_payload(self, prompt: str) -> dict[str, Any]:
        body: dict[str, Any] = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "topK": self.top_k,
                "topP": self.top_p,
                "maxOutputTokens": self.max_output_tokens,
            },
        }
        if self.safety_threshold:
            body["safetySettings"] = [
                {"category": category, "threshold": self.safety_threshold}
                for category in self.safety_categories
            ]
        return body


def classify_status(status_code: int) -> FailureKind | None:
    """Map an HTTP status to a failure kind; None means 2xx."""
    if 200 <= status_code < 300:
        return None
    if status_code == 429:
        return FailureKind.RATE_LIMITED
    if status_code in (401, 403):
        return FailureKind.UNAUTHORIZED
    return FailureKind.TRANSIENT


class GeminiClient:
    """Issues single generateContent calls and classifies the outcome.

    ``call`` never raises for upstream problems: every outcome comes back as
    a ModelResponse, with ``failure`` set when the attempt should move on to
    the next credential. Cancellation of the awaiting task aborts the
    in-flight request.
    """

    def __init__(
        self,
        config: GeminiConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config or GeminiConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout),
            headers={"Content-Type": "application/json"},
        )
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @property
    def model(self) -> str:
        return self.config.model

    async def __aenter__(self) -> GeminiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def call(
        self,
        prompt: str,
        credential: str,
        generation: GenerationSettings | None = None,
    ) -> ModelResponse:
        """POST one prompt with one credential and classify the result."""
        payload = (generation or GenerationSettings()).to_payload(prompt)
        try:
            response = await self._client.post(
                self.config.endpoint,
                params={"key": credential},
                json=payload,
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException:
            return ModelResponse(
                failure=FailureKind.TRANSIENT,
                error=f"Request timed out after {self.config.timeout:g}s",
            )
        except httpx.HTTPError as exc:
            # httpx messages may echo the request URL, which carries the key
            return ModelResponse(
                failure=FailureKind.TRANSIENT,
                error=f"Network error: {type(exc).__name__}",
            )

        status = response.status_code
        failure = classify_status(status)
        if failure is not None:
            return ModelResponse(
                status_code=status,
                failure=failure,
                error=f"HTTP {status}: {_error_message(response)}",
            )

        try:
            data = response.json()
        except ValueError:
            return ModelResponse(
                status_code=status,
                failure=FailureKind.MALFORMED_UPSTREAM,
                error="Response body is not JSON",
            )

        text = _candidate_text(data)
        if text is None:
            return ModelResponse(
                status_code=status,
                failure=FailureKind.MALFORMED_UPSTREAM,
                error="Invalid response from Gemini API: no candidate text",
            )

        usage = data.get("usageMetadata")
        if not isinstance(usage, dict):
            usage = {}
        input_tokens = _token_count(usage.get("promptTokenCount"))
        output_tokens = _token_count(usage.get("candidatesTokenCount"))
        logger.debug("Gemini response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((self.model, input_tokens, output_tokens))
        return ModelResponse(
            text=text,
            status_code=status,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary


def _candidate_text(data: Any) -> str | None:
    """Pull candidates[0].content.parts[*].text, or None if the shape is wrong."""
    if not isinstance(data, dict):
        return None
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return None
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list):
        return None
    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    if not texts:
        return None
    return "".join(texts)


def _token_count(value: Any) -> int:
    """Usage metadata is informational; anything unusable counts as 0."""
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message", ""))[:200]
    return str(body)[:200]
