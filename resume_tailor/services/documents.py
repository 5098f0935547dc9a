from __future__ import annotations

import logging
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import PurePath

from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".txt", ".pdf", ".docx")

PDF_MAGIC = b"%PDF-"
ZIP_MAGIC = b"PK\x03\x04"


class DocumentError(ValueError):
    """Upload could not be turned into resume text."""


@dataclass
class ExtractedDocument:
    source_type: str
    text: str
    warnings: list[str] = field(default_factory=list)


def _extract_txt(content: bytes) -> tuple[str, list[str]]:
    return content.decode("utf-8", errors="replace"), []


def _extract_pdf(content: bytes) -> tuple[str, list[str]]:
    if not content.startswith(PDF_MAGIC):
        raise DocumentError("File content is not a valid PDF.")
    warnings: list[str] = []
    try:
        reader = PdfReader(BytesIO(content))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except Exception as exc:  # noqa: BLE001 - pypdf raises many error types
        raise DocumentError(f"PDF parsing failed: {exc}") from exc
    text_parts = [page for page in pages if page]
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), warnings


def _extract_docx(content: bytes) -> tuple[str, list[str]]:
    if not content.startswith(ZIP_MAGIC):
        raise DocumentError("File content is not a valid DOCX.")
    warnings: list[str] = []
    try:
        document = Document(BytesIO(content))
    except Exception as exc:  # noqa: BLE001 - python-docx raises many error types
        raise DocumentError(f"DOCX parsing failed: {exc}") from exc
    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), warnings


def extract_document_text(filename: str, content: bytes, max_bytes: int | None = None) -> ExtractedDocument:
    extension = PurePath(filename or "").suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        raise DocumentError(f"Unsupported file type '{extension or filename}'. Use .txt, .pdf or .docx.")
    if not content:
        raise DocumentError("Uploaded file is empty.")
    if max_bytes is not None and len(content) > max_bytes:
        raise DocumentError(f"Uploaded file exceeds {max_bytes} bytes.")

    if extension == ".pdf":
        text, warnings = _extract_pdf(content)
    elif extension == ".docx":
        text, warnings = _extract_docx(content)
    else:
        text, warnings = _extract_txt(content)

    for warning in warnings:
        logger.info("document_extract_warning type=%s: %s", extension, warning)
    return ExtractedDocument(source_type=extension.lstrip("."), text=text, warnings=warnings)
