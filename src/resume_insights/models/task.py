"""Task kinds understood by the analysis gateway."""

from __future__ import annotations

from enum import Enum

from resume_insights.errors import RequestValidationError


class TaskKind(str, Enum):
    RESUME_PARSE = "resume-parse"
    RESUME_TIPS = "resume-tips"
    JOB_MATCHING = "job-matching"
    SUCCESS_PREDICTION = "success-prediction"
    JOB_DESCRIPTION_ANALYSIS = "job-description-analysis"

    @classmethod
    def parse(cls, value: str | TaskKind) -> TaskKind:
        """Resolve a task kind from its name or the camelCase API alias.

        Raises RequestValidationError for anything unrecognized.
        """
        if isinstance(value, TaskKind):
            return value
        key = (value or "").strip()
        for kind in cls:
            if key == kind.value or key == kind.alias:
                return kind
        valid = ", ".join(k.value for k in cls)
        raise RequestValidationError(f"Invalid analysis type. Must be one of: {valid}")

    @property
    def alias(self) -> str:
        head, *rest = self.value.split("-")
        return head + "".join(part.capitalize() for part in rest)

    @property
    def requires_document(self) -> bool:
        return self is not TaskKind.JOB_DESCRIPTION_ANALYSIS

    @property
    def requires_job(self) -> bool:
        return self is not TaskKind.RESUME_PARSE
