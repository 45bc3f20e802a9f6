"""Pull plain text out of uploaded resume documents (PDF, DOC/DOCX, TXT)."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from resume_insights.config import (
    DOC_MIME,
    DOCX_MIME,
    PDF_MIME,
    TEXT_MIME,
    UploadConfig,
)
from resume_insights.errors import ExtractionError, RequestValidationError
from resume_insights.models.document import ExtractedDocument

logger = logging.getLogger(__name__)

SUFFIX_MIME_TYPES = {
    ".pdf": PDF_MIME,
    ".doc": DOC_MIME,
    ".docx": DOCX_MIME,
    ".txt": TEXT_MIME,
}


def validate_upload(data: bytes, mime_type: str, config: UploadConfig | None = None) -> None:
    """Reject uploads that are oversize or of an unsupported type.

    Runs before any parser is touched.
    """
    config = config or UploadConfig()
    if mime_type not in config.allowed_types:
        raise RequestValidationError(
            f"Unsupported file type {mime_type!r}. Please upload a PDF, DOC, DOCX, or TXT file."
        )
    if len(data) > config.max_bytes:
        limit_mb = config.max_bytes / (1024 * 1024)
        raise RequestValidationError(
            f"File size too large. Please upload a file smaller than {limit_mb:g}MB."
        )


def extract_document(data: bytes, mime_type: str) -> ExtractedDocument:
    """Extract text from ``data`` according to its declared MIME type.

    Raises ExtractionError with reason pdf-parse-error, word-parse-error,
    unsupported-type, or empty-extraction when the parser succeeded but
    produced only whitespace.
    """
    if mime_type == PDF_MIME:
        text = _extract_pdf(data)
    elif mime_type in (DOC_MIME, DOCX_MIME):
        text = _extract_word(data)
    elif mime_type == TEXT_MIME:
        text = data.decode("utf-8", errors="replace").lstrip("\ufeff")
    else:
        raise ExtractionError(ExtractionError.UNSUPPORTED_TYPE, f"Unsupported file type: {mime_type}")

    document = ExtractedDocument(content=text, mime_type=mime_type, byte_length=len(data))
    if document.is_blank:
        raise ExtractionError(ExtractionError.EMPTY)
    logger.debug("Extracted %d chars from %d-byte %s", len(text), len(data), mime_type)
    return document


def guess_mime_type(path: str | Path) -> str:
    """Map a file suffix to one of the accepted upload MIME types."""
    suffix = Path(path).suffix.lower()
    try:
        return SUFFIX_MIME_TYPES[suffix]
    except KeyError:
        raise RequestValidationError(
            f"Unsupported file format: {suffix or '(none)'}. Please upload a PDF, DOC, DOCX, or TXT file."
        ) from None


def _extract_pdf(data: bytes) -> str:
    import fitz  # pymupdf

    try:
        doc = fitz.open(stream=data, filetype="pdf")
        try:
            return "\n".join(page.get_text() for page in doc)
        finally:
            doc.close()
    except Exception as exc:
        logger.warning("PDF parsing error: %s", exc)
        raise ExtractionError(ExtractionError.PDF_PARSE, "Failed to parse PDF file") from exc


def _extract_word(data: bytes) -> str:
    from docx import Document

    try:
        doc = Document(io.BytesIO(data))
    except Exception as exc:
        logger.warning("Word document parsing error: %s", exc)
        raise ExtractionError(ExtractionError.WORD_PARSE, "Failed to parse Word document") from exc

    lines = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)
