"""Application configuration loaded from config.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

import yaml

MAX_UPLOAD_BYTES = 10 * 1024 * 1024

PDF_MIME = "application/pdf"
DOC_MIME = "application/msword"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME = "text/plain"


@dataclass(frozen=True)
class GeminiConfig:
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    model: str = "gemini-1.5-flash"
    timeout: float = 30.0
    retry_wait_seconds: float = 0.0

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 300:
            raise ValueError(f"gemini.timeout must be between 1 and 300, got {self.timeout}")
        if self.retry_wait_seconds < 0:
            raise ValueError(
                f"gemini.retry_wait_seconds must not be negative, got {self.retry_wait_seconds}"
            )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"


@dataclass(frozen=True)
class UploadConfig:
    max_bytes: int = MAX_UPLOAD_BYTES
    allowed_types: tuple[str, ...] = (PDF_MIME, DOC_MIME, DOCX_MIME, TEXT_MIME)

    def __post_init__(self) -> None:
        if self.max_bytes <= 0:
            raise ValueError(f"upload.max_bytes must be positive, got {self.max_bytes}")
        # YAML hands us lists
        object.__setattr__(self, "allowed_types", tuple(self.allowed_types))


@dataclass(frozen=True)
class CredentialsConfig:
    env_prefix: str = "GEMINI_API_KEY_"
    slots: int = 5
    list_var: str = "GEMINI_API_KEYS"

    def __post_init__(self) -> None:
        if not 1 <= self.slots <= 50:
            raise ValueError(f"credentials.slots must be between 1 and 50, got {self.slots}")

    def read_keys(self, environ: Mapping[str, str] | None = None) -> list[str]:
        """Collect API keys from the environment, in slot order.

        ``GEMINI_API_KEYS`` (comma separated) wins over the numbered slots.
        Blank entries are dropped.
        """
        env = os.environ if environ is None else environ
        listed = env.get(self.list_var, "")
        if listed.strip():
            keys = listed.split(",")
        else:
            keys = [env.get(f"{self.env_prefix}{i}", "") for i in range(1, self.slots + 1)]
        return [k.strip() for k in keys if k and k.strip()]


@dataclass(frozen=True)
class AppConfig:
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        gemini=GeminiConfig(**raw.get("gemini", {})),
        upload=UploadConfig(**raw.get("upload", {})),
        credentials=CredentialsConfig(**raw.get("credentials", {})),
    )
