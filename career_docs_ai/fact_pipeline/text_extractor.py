"""Turn uploaded files (PDF, DOCX, plain text) into candidate documents. In-memory only."""

import re
import unicodedata
from io import BytesIO
from pathlib import PurePath
from typing import Optional

import pdfplumber
from docx import Document

from career_docs_ai.config import SUPPORTED_UPLOAD_SUFFIXES, UPLOAD_MAX_CHARS
from career_docs_ai.schemas.candidate import CandidateDocument, DocumentType
from career_docs_ai.utils.logger import get_logger

logger = get_logger(__name__)


def clean_document_text(text: str, max_chars: int = UPLOAD_MAX_CHARS) -> str:
    """NFC-normalize, collapse runs of spaces and blank lines, cap length."""
    if not text or not text.strip():
        return ""
    t = unicodedata.normalize("NFC", text)
    t = re.sub(r"[ \t]+", " ", t)
    t = re.sub(r"\n\s*\n\s*\n", "\n\n", t)
    t = t.strip()
    if len(t) > max_chars:
        t = t[:max_chars] + "\n\n[Content truncated.]"
    return t


def _extract_pdf(bytes_io: BytesIO) -> Optional[str]:
    try:
        with pdfplumber.open(bytes_io) as pdf:
            parts = []
            for page in pdf.pages:
                ptext = page.extract_text()
                if ptext:
                    parts.append(ptext)
            return "\n\n".join(parts) if parts else None
    except Exception as e:
        logger.exception("PDF extraction failed: %s", e)
        return None


def _extract_docx(bytes_io: BytesIO) -> Optional[str]:
    try:
        doc = Document(bytes_io)
        parts = [p.text for p in doc.paragraphs if p.text.strip()]
        return "\n\n".join(parts) if parts else None
    except Exception as e:
        logger.exception("DOCX extraction failed: %s", e)
        return None


def _decode_text(file_bytes: bytes) -> Optional[str]:
    for encoding in ("utf-8-sig", "cp1252"):
        try:
            return file_bytes.decode(encoding)
        except UnicodeDecodeError:
            continue
    logger.warning("Could not decode plain text upload")
    return None


def extract_text_from_file(file_bytes: bytes, filename: str) -> Optional[str]:
    """
    Extract and clean text from an uploaded file.
    Returns None for unsupported types or when nothing could be read.
    """
    suffix = PurePath((filename or "").strip().lower()).suffix
    if suffix not in SUPPORTED_UPLOAD_SUFFIXES:
        logger.warning("Unsupported file type: %s", filename)
        return None

    if suffix == ".pdf":
        raw = _extract_pdf(BytesIO(file_bytes))
    elif suffix == ".docx":
        raw = _extract_docx(BytesIO(file_bytes))
    else:
        raw = _decode_text(file_bytes)

    if not raw or not raw.strip():
        return None
    return clean_document_text(raw)


def document_from_upload(
    file_bytes: bytes,
    filename: str,
    doc_type: DocumentType = "cv",
    name: Optional[str] = None,
) -> Optional[CandidateDocument]:
    """Build a CandidateDocument from an upload; the file stem is the default name."""
    text = extract_text_from_file(file_bytes, filename)
    if not text:
        return None
    return CandidateDocument(name=name or PurePath(filename).stem, type=doc_type, content=text)
