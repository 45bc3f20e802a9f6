"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from resume_insights.clients.credential_pool import CredentialPool
from resume_insights.config import AppConfig, load_config
from resume_insights.errors import GatewayError
from resume_insights.models.request import JobContext
from resume_insights.models.result import AnalysisResult
from resume_insights.models.task import TaskKind
from resume_insights.parsers.document_extractor import guess_mime_type
from resume_insights.pipeline.orchestrator import AnalysisOrchestrator

app = typer.Typer(
    name="resume-insights",
    help="AI resume parsing and job-fit insights",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


async def _analyze(
    config: AppConfig,
    task: TaskKind,
    file_bytes: bytes | None,
    mime_type: str | None,
    job: JobContext | None,
) -> AnalysisResult:
    orchestrator = AnalysisOrchestrator.from_config(config)
    async with orchestrator.client:
        return await orchestrator.analyze(task, file_bytes=file_bytes, mime_type=mime_type, job=job)


def _run(task: TaskKind, resume: Path | None, job: JobContext | None, config_path: Path | None) -> None:
    config = load_config(config_path)

    file_bytes = None
    mime_type = None
    if resume is not None:
        if not resume.exists():
            console.print(f"[red]File not found: {resume}[/red]")
            raise typer.Exit(1)
        file_bytes = resume.read_bytes()

    try:
        if resume is not None:
            mime_type = guess_mime_type(resume)
        with console.status(f"Running {task.value}..."):
            result = asyncio.run(_analyze(config, task, file_bytes, mime_type, job))
    except GatewayError as exc:
        console.print(f"[red]{exc.message}[/red]")
        console.print(f"[dim]{escape(str(exc))}[/dim]")
        raise typer.Exit(1)

    console.print_json(json.dumps(result.data, ensure_ascii=False))
    console.print(f"[dim]{result.model} · {result.attempts} attempt(s)[/dim]")


@app.command()
def parse(
    resume: Path = typer.Argument(help="Resume file (PDF/DOC/DOCX/TXT)"),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Parse a resume into structured profile data."""
    _setup_logging(verbose)
    _run(TaskKind.RESUME_PARSE, resume, None, config)


@app.command()
def analyze(
    resume: Path = typer.Argument(help="Resume file (PDF/DOC/DOCX/TXT)"),
    task: str = typer.Option(
        "resume-tips", "--task", "-t",
        help="resume-tips, job-matching or success-prediction",
    ),
    title: str = typer.Option(..., "--title", help="Job title"),
    company: str = typer.Option(..., "--company", help="Company name"),
    location: str = typer.Option(None, "--location", help="Job location"),
    description: str = typer.Option(None, "--description", help="Job description text"),
    description_file: Path = typer.Option(None, "--description-file", help="File with the job description"),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Analyze a resume against a job posting."""
    _setup_logging(verbose)
    try:
        kind = TaskKind.parse(task)
    except GatewayError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1)
    if not kind.requires_document or not kind.requires_job:
        console.print(f"[red]{kind.value} is not a resume-vs-job analysis[/red]")
        raise typer.Exit(1)

    if description_file is not None:
        description = description_file.read_text(encoding="utf-8")
    job = JobContext(title=title, company=company, location=location, description=description)
    _run(kind, resume, job, config)


@app.command("analyze-job")
def analyze_job(
    title: str = typer.Option(..., "--title", help="Job title"),
    company: str = typer.Option(..., "--company", help="Company name"),
    description: str = typer.Option(None, "--description", help="Job description text"),
    description_file: Path = typer.Option(None, "--description-file", help="File with the job description"),
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Extract requirements from a job description."""
    _setup_logging(verbose)
    if description_file is not None:
        description = description_file.read_text(encoding="utf-8")
    job = JobContext(title=title, company=company, description=description)
    _run(TaskKind.JOB_DESCRIPTION_ANALYSIS, None, job, config)


@app.command()
def keys(
    config: Path = typer.Option(None, "--config", help="Path to config.yaml"),
) -> None:
    """Show how many API keys are configured."""
    settings = load_config(config)
    try:
        pool = CredentialPool.from_env(settings.credentials)
    except GatewayError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        console.print(
            f"[dim]Set {settings.credentials.env_prefix}1..{settings.credentials.slots} "
            f"or {settings.credentials.list_var} in the environment or .env[/dim]"
        )
        raise typer.Exit(1)
    console.print(f"[green]{pool.size()} Gemini API key(s) configured[/green]")


if __name__ == "__main__":
    app()
