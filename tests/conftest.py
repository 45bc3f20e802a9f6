"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from resume_insights.clients.credential_pool import CredentialPool
from resume_insights.clients.gemini_client import GeminiClient
from resume_insights.models.request import JobContext
from resume_insights.models.response import ModelResponse


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.com | +1 555 0100 | Berlin, Germany
linkedin.com/in/janedoe | github.com/janedoe

Senior Backend Engineer

Experience
- Acme Cloud (2021-03 - present) - Senior Backend Engineer
  - Built Python/FastAPI services handling 2M requests per day
  - Cut p99 latency by 40% with Redis caching

- Widget Labs (2018-06 - 2021-02) - Backend Developer
  - Django REST APIs, PostgreSQL, AWS

Education
- TU Berlin, BSc Computer Science (2014 - 2018), GPA 3.7

Skills: Python, Go, PostgreSQL, Redis, Docker, Kubernetes
"""


@pytest.fixture
def sample_job() -> JobContext:
    return JobContext(
        title="Staff Backend Engineer",
        company="Northwind",
        location="Remote (EU)",
        description="Own the payments platform. Python, Kafka and Kubernetes required.",
    )


@pytest.fixture
def sample_parse_json() -> dict:
    return {
        "personalInfo": {
            "phone": "+1 555 0100",
            "location": "Berlin, Germany",
            "socialLinks": {"linkedin": "linkedin.com/in/janedoe", "github": "github.com/janedoe"},
        },
        "professional": {
            "title": "Senior Backend Engineer",
            "summary": "",
            "skills": ["Python", "Go", "PostgreSQL"],
        },
        "experience": [
            {
                "title": "Senior Backend Engineer",
                "company": "Acme Cloud",
                "startDate": "2021-03",
                "endDate": "",
                "current": True,
                "description": "Built Python/FastAPI services",
            }
        ],
        "education": [{"degree": "BSc Computer Science", "school": "TU Berlin", "gpa": 3.7}],
    }


@pytest.fixture
def pool() -> CredentialPool:
    return CredentialPool(["key-a", "key-b", "key-c"])


@pytest.fixture
def mock_gemini_client() -> GeminiClient:
    """Create a mock Gemini client."""
    client = AsyncMock(spec=GeminiClient)
    client.model = "gemini-1.5-flash"
    client.call = AsyncMock(return_value=ModelResponse(text="{}", status_code=200))
    return client

