"""Resume parsing and job-fit insights over the Gemini generateContent API."""

__version__ = "0.1.0"
