"""Pydantic models for the caller-supplied side of an analysis."""

from __future__ import annotations

from pydantic import BaseModel

from resume_insights.models.document import ExtractedDocument
from resume_insights.models.task import TaskKind


class JobContext(BaseModel):
    """Job record fields, fetched and authorized by the caller before analysis."""

    title: str = ""
    company: str = ""
    location: str | None = None
    description: str | None = None


class AnalysisRequest(BaseModel):
    task: TaskKind
    document: ExtractedDocument | None = None
    job: JobContext | None = None
