"""Pydantic model returned to the caller for a completed analysis."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from resume_insights.models.task import TaskKind


class AnalysisResult(BaseModel):
    task: TaskKind
    data: dict[str, Any]  # canonical structure for the task, always fully populated
    attempts: int
    model: str = ""
    job_title: str | None = None
    company: str | None = None
    analyzed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
