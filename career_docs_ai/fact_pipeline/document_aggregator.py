"""Combine the candidate's profile summary and documents into labeled text blocks."""

from typing import List, NamedTuple, Optional, Sequence

from career_docs_ai.schemas.candidate import CandidateDocument

PROFILE_SUMMARY_LABEL = "Professional Summary"


class DocumentBuckets(NamedTuple):
    """Documents grouped the way the writing prompts present them."""

    resume: List[CandidateDocument]
    interview_transcripts: List[CandidateDocument]
    supporting_experience: List[CandidateDocument]


def _has_text(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def aggregate_documents(
    profile_summary: Optional[str],
    documents: Optional[Sequence[CandidateDocument]],
) -> str:
    """
    Build the extraction input: one ``--- label ---`` header per non-empty source.
    Whitespace-only sources are skipped. Returns "" when nothing has content;
    callers must not run extraction on that.
    """
    parts: List[str] = []
    if _has_text(profile_summary):
        parts.append(f"--- {PROFILE_SUMMARY_LABEL} ---\n{profile_summary}\n\n")
    for doc in documents or []:
        if _has_text(doc.content):
            parts.append(f"--- {doc.name} ({doc.type}) ---\n{doc.content}\n\n")
    return "".join(parts)


def is_interview_transcript(doc: CandidateDocument) -> bool:
    return doc.type == "experience" and "interview" in doc.name.lower()


def categorize_documents(documents: Optional[Sequence[CandidateDocument]]) -> DocumentBuckets:
    """Split documents into resume / interview transcripts / supporting experience."""
    docs = list(documents or [])
    resume = [d for d in docs if d.type == "cv"]
    interviews = [d for d in docs if is_interview_transcript(d)]
    supporting = [d for d in docs if d.type == "experience" and not is_interview_transcript(d)]
    supporting += [d for d in docs if d.type == "other"]
    return DocumentBuckets(resume, interviews, supporting)


def format_document_section(documents: Sequence[CandidateDocument]) -> str:
    """Join documents as ``--- name ---`` blocks for prompt sections."""
    return "\n\n".join(f"--- {doc.name} ---\n{doc.content}" for doc in documents)
