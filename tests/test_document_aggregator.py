from __future__ import annotations

from career_docs_ai.fact_pipeline.document_aggregator import (
    aggregate_documents,
    categorize_documents,
    format_document_section,
)
from career_docs_ai.schemas.candidate import CandidateDocument


def test_aggregate_labels_summary_and_each_document() -> None:
    docs = [
        CandidateDocument(name="CV 2024", type="cv", content="Python developer"),
        CandidateDocument(name="Side projects", type="other", content="Built a CLI"),
    ]
    text = aggregate_documents("Backend engineer", docs)
    assert text == (
        "--- Professional Summary ---\nBackend engineer\n\n"
        "--- CV 2024 (cv) ---\nPython developer\n\n"
        "--- Side projects (other) ---\nBuilt a CLI\n\n"
    )


def test_aggregate_skips_blank_sources() -> None:
    docs = [
        CandidateDocument(name="Empty", type="cv", content="  \n\t"),
        CandidateDocument(name="Notes", type="experience", content="Led migrations"),
    ]
    text = aggregate_documents("   ", docs)
    assert "Professional Summary" not in text
    assert "Empty" not in text
    assert text.startswith("--- Notes (experience) ---")


def test_aggregate_of_nothing_is_empty() -> None:
    assert aggregate_documents(None, None) == ""
    assert aggregate_documents("", [CandidateDocument(name="x", type="cv", content=" ")]) == ""


def test_categorize_documents_into_prompt_buckets() -> None:
    docs = [
        CandidateDocument(name="Resume", type="cv", content="a"),
        CandidateDocument(name="Mock Interview March", type="experience", content="b"),
        CandidateDocument(name="Project write-up", type="experience", content="c"),
        CandidateDocument(name="Reference letter", type="other", content="d"),
    ]
    buckets = categorize_documents(docs)
    assert [d.name for d in buckets.resume] == ["Resume"]
    assert [d.name for d in buckets.interview_transcripts] == ["Mock Interview March"]
    assert [d.name for d in buckets.supporting_experience] == ["Project write-up", "Reference letter"]


def test_format_document_section() -> None:
    docs = [
        CandidateDocument(name="A", type="cv", content="one"),
        CandidateDocument(name="B", type="cv", content="two"),
    ]
    assert format_document_section(docs) == "--- A ---\none\n\n--- B ---\ntwo"
