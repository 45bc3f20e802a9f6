"""Recover a JSON object from free-form model output."""

from __future__ import annotations

import json
import logging
import re

from resume_insights.errors import FailureKind, UpstreamAttemptError

logger = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^```[\w-]*[ \t]*\n?")
_CLOSE_FENCE = re.compile(r"\n?[ \t]*```$")


def recover_json(text: str) -> dict:
    """Extract a JSON object from an LLM reply, handling ```json blocks.

    Tries in order:
    1. Strip a leading fenced code block marker (with or without a language tag)
    2. Direct json.loads on the trimmed, unfenced text
    3. First '{' to last '}' of the raw reply

    Raises UpstreamAttemptError(no-json-found) when neither attempt yields an object.
    """
    raw = text or ""
    cleaned = raw.strip()

    if cleaned.startswith("```"):
        cleaned = _strip_code_fences(cleaned)

    result = _loads_object(cleaned)
    if result is not None:
        return result

    logger.debug("Direct JSON parse failed, falling back to brace search")
    result = _extract_braces(raw)
    if result is not None:
        return result

    raise UpstreamAttemptError(
        FailureKind.NO_JSON_FOUND,
        f"No valid JSON found in model response: {raw[:200]!r}",
    )


def _strip_code_fences(text: str) -> str:
    """Remove the opening and closing markdown fence markers."""
    text = _OPEN_FENCE.sub("", text, count=1)
    return _CLOSE_FENCE.sub("", text.rstrip(), count=1).strip()


def _extract_braces(text: str) -> dict | None:
    """Try to parse the span from the first '{' to the last '}'."""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return _loads_object(text[start : end + 1])
    return None


def _loads_object(text: str) -> dict | None:
    # ValueError also covers integers past the interpreter's digit limit
    try:
        value = json.loads(text)
    except (ValueError, TypeError, RecursionError):
        return None
    return value if isinstance(value, dict) else None
