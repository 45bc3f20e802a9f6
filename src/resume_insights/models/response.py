"""Pydantic model for one round-trip to the generative-text service."""

from __future__ import annotations

from pydantic import BaseModel

from resume_insights.errors import FailureKind, UpstreamAttemptError


class ModelResponse(BaseModel):
    text: str = ""
    status_code: int | None = None
    failure: FailureKind | None = None
    error: str = ""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self) -> None:
        """Raise UpstreamAttemptError if this attempt was classified as failed."""
        if self.failure is not None:
            raise UpstreamAttemptError(self.failure, self.error, status_code=self.status_code)
