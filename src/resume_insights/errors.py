"""Error taxonomy for the analysis gateway."""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    """Classification of a single failed upstream attempt."""

    RATE_LIMITED = "rate-limited"
    UNAUTHORIZED = "unauthorized"
    TRANSIENT = "transient"
    MALFORMED_UPSTREAM = "malformed-upstream"
    NO_JSON_FOUND = "no-json-found"


class GatewayError(Exception):
    """Base class for every error the gateway surfaces to its caller."""

    message = "Failed to process request. Please try again."

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.message
        super().__init__(self.detail)


class ConfigurationError(GatewayError):
    """Raised at startup when the gateway cannot be configured (e.g. no API keys)."""

    message = "AI service is not configured."


class RequestValidationError(GatewayError):
    """Raised before extraction for bad task kinds, missing context or bad uploads."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.message = detail


class ExtractionError(GatewayError):
    """Raised when text cannot be pulled out of an uploaded document."""

    PDF_PARSE = "pdf-parse-error"
    WORD_PARSE = "word-parse-error"
    UNSUPPORTED_TYPE = "unsupported-type"
    EMPTY = "empty-extraction"

    _MESSAGES = {
        PDF_PARSE: "Failed to extract text from resume. Please ensure the file is not corrupted.",
        WORD_PARSE: "Failed to extract text from resume. Please ensure the file is not corrupted.",
        UNSUPPORTED_TYPE: "Invalid file type. Please upload a PDF, DOC, DOCX, or TXT file.",
        EMPTY: "Could not extract text from the resume. Please try a different file.",
    }

    def __init__(self, reason: str, detail: str | None = None):
        self.reason = reason
        self.message = self._MESSAGES.get(reason, GatewayError.message)
        super().__init__(detail or f"{reason}: {self.message}")


class UpstreamAttemptError(GatewayError):
    """One attempt against the upstream service failed; the next credential may succeed."""

    message = "The AI service did not return a usable response."

    def __init__(self, kind: FailureKind, detail: str, status_code: int | None = None):
        self.kind = kind
        self.status_code = status_code
        super().__init__(f"[{kind.value}] {detail}")


class ExhaustionError(GatewayError):
    """Every credential in the pool was tried without producing a result."""

    message = "Failed to analyze with AI. Please try again later."

    def __init__(self, attempts: int, last_error: BaseException | None):
        self.attempts = attempts
        self.last_error = last_error
        last = str(last_error) if last_error is not None else "unknown error"
        super().__init__(
            f"Failed to analyze with AI after trying all {attempts} API keys. "
            f"Last error: {last}"
        )

    @property
    def last_kind(self) -> FailureKind | None:
        if isinstance(self.last_error, UpstreamAttemptError):
            return self.last_error.kind
        return None
