"""Analysis orchestrator - validates, extracts, prompts and rotates API keys."""

from __future__ import annotations

import logging

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from resume_insights.clients.credential_pool import CredentialPool
from resume_insights.clients.gemini_client import GeminiClient, GenerationSettings
from resume_insights.config import AppConfig, UploadConfig
from resume_insights.errors import ExhaustionError, RequestValidationError, UpstreamAttemptError
from resume_insights.models.request import AnalysisRequest, JobContext
from resume_insights.models.result import AnalysisResult
from resume_insights.models.task import TaskKind
from resume_insights.parsers.document_extractor import extract_document, validate_upload
from resume_insights.pipeline.prompt_builder import build_prompt, generation_for
from resume_insights.pipeline.schema_normalizer import normalize
from resume_insights.utils.json_parser import recover_json

logger = logging.getLogger(__name__)


class AnalysisOrchestrator:
    """Facade over the whole gateway.

    Each request tries at most ``pool.size()`` credentials, one at a time.
    Worst-case latency is therefore ``pool.size() * timeout`` seconds.
    """

    def __init__(
        self,
        client: GeminiClient,
        pool: CredentialPool,
        *,
        upload: UploadConfig | None = None,
        retry_wait_seconds: float = 0.0,
    ):
        self.client = client
        self.pool = pool
        self.upload = upload or UploadConfig()
        self.retry_wait_seconds = retry_wait_seconds

    @classmethod
    def from_config(cls, config: AppConfig) -> AnalysisOrchestrator:
        """Build a client and a key pool from configuration and the environment."""
        pool = CredentialPool.from_env(config.credentials)
        return cls(
            GeminiClient(config.gemini),
            pool,
            upload=config.upload,
            retry_wait_seconds=config.gemini.retry_wait_seconds,
        )

    async def analyze(
        self,
        task: TaskKind | str,
        *,
        file_bytes: bytes | None = None,
        mime_type: str | None = None,
        job: JobContext | None = None,
    ) -> AnalysisResult:
        """Run one analysis end to end.

        Raises RequestValidationError or ExtractionError without calling the
        upstream service, and ExhaustionError when every key failed.
        """
        kind = TaskKind.parse(task)
        self._validate(kind, file_bytes, mime_type, job)

        document = None
        if kind.requires_document:
            document = extract_document(file_bytes, mime_type)

        return await self.run(AnalysisRequest(task=kind, document=document, job=job))

    async def parse_resume(self, file_bytes: bytes, mime_type: str) -> AnalysisResult:
        return await self.analyze(TaskKind.RESUME_PARSE, file_bytes=file_bytes, mime_type=mime_type)

    async def analyze_job(self, job: JobContext) -> AnalysisResult:
        return await self.analyze(TaskKind.JOB_DESCRIPTION_ANALYSIS, job=job)

    async def run(self, request: AnalysisRequest) -> AnalysisResult:
        """Drive the credential loop for an already validated request."""
        document_text = request.document.content if request.document else None
        prompt = build_prompt(request.task, document_text, request.job)
        generation = generation_for(request.task)

        attempts = 0
        data: dict = {}
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.pool.size()),
            wait=wait_fixed(self.retry_wait_seconds),
            retry=retry_if_exception_type(UpstreamAttemptError),
        )
        try:
            async for attempt in retrying:
                with attempt:
                    attempts = attempt.retry_state.attempt_number
                    data = await self._attempt(request.task, prompt, generation, attempts)
        except RetryError as exc:
            last_error = exc.last_attempt.exception()
            logger.error("All API keys failed for %s after %d attempts", request.task.value, attempts)
            raise ExhaustionError(attempts, last_error) from last_error

        job = request.job
        return AnalysisResult(
            task=request.task,
            data=data,
            attempts=attempts,
            model=self.client.model,
            job_title=job.title if job else None,
            company=job.company if job else None,
        )

    async def _attempt(
        self,
        task: TaskKind,
        prompt: str,
        generation: GenerationSettings,
        attempt_number: int,
    ) -> dict:
        index, credential = self.pool.acquire()
        logger.info("%s attempt %d: using API key index %d", task.value, attempt_number, index)
        try:
            response = await self.client.call(prompt, credential, generation)
            response.raise_for_failure()
            parsed = recover_json(response.text)
        except UpstreamAttemptError as exc:
            logger.warning(
                "%s attempt %d failed (key index %d): %s", task.value, attempt_number, index, exc
            )
            raise
        logger.info("%s succeeded with API key index %d", task.value, index)
        return normalize(task, parsed)

    def _validate(
        self,
        kind: TaskKind,
        file_bytes: bytes | None,
        mime_type: str | None,
        job: JobContext | None,
    ) -> None:
        if kind.requires_document:
            if not file_bytes:
                raise RequestValidationError("No resume file uploaded")
            validate_upload(file_bytes, mime_type or "", self.upload)

        if kind.requires_job:
            if job is None or not job.title.strip() or not job.company.strip():
                raise RequestValidationError("Job title and company are required")
            if kind is TaskKind.JOB_DESCRIPTION_ANALYSIS and not (job.description or "").strip():
                raise RequestValidationError("Job description is required for analysis")
