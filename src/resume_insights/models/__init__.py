"""Data models for the resume insights gateway."""

from resume_insights.models.document import ExtractedDocument
from resume_insights.models.request import AnalysisRequest, JobContext
from resume_insights.models.response import ModelResponse
from resume_insights.models.result import AnalysisResult
from resume_insights.models.task import TaskKind

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "ExtractedDocument",
    "JobContext",
    "ModelResponse",
    "TaskKind",
]
