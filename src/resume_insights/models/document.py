"""Pydantic models for uploaded and extracted documents."""

from __future__ import annotations

from pydantic import BaseModel


class ExtractedDocument(BaseModel):
    content: str
    mime_type: str
    byte_length: int

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()
