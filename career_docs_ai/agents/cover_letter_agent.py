"""Claim-constrained writing: cover letter and executive summary grounded in the fact inventory."""

from typing import AsyncIterator, List

from career_docs_ai.config import (
    COVER_LETTER_MAX_TOKENS,
    COVER_LETTER_TEMPERATURE,
    SUMMARY_MAX_TOKENS,
    SUMMARY_TEMPERATURE,
)
from career_docs_ai.fact_pipeline.document_aggregator import categorize_documents, format_document_section
from career_docs_ai.fact_pipeline.inventory_formatter import format_fact_inventory
from career_docs_ai.prompts.generation import (
    COVER_LETTER_SYSTEM_PROMPT,
    GENERATION_PROMPT_VERSION,
    SUMMARY_SYSTEM_PROMPT,
    cover_letter_task,
    language_instruction,
    summary_task,
)
from career_docs_ai.schemas.fact_inventory import CandidateFactInventory
from career_docs_ai.schemas.generation import GenerationRequest
from career_docs_ai.services.llm_client import TextGenerator
from career_docs_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _tag(name: str, body: str) -> str:
    return f"<{name}>\n{body}\n</{name}>"


def _job_block(request: GenerationRequest) -> str:
    company = request.company_name.strip() or "Not specified"
    return _tag(
        "job_description",
        f"Job Title: {request.job_title}\nCompany: {company}\n\n{request.job_description}",
    )


def _candidate_profile_block(request: GenerationRequest) -> str:
    profile = request.profile
    sections: List[str] = []
    if profile.summary.strip():
        header = f"Name: {profile.name}"
        if profile.location:
            header += f"\nLocation: {profile.location}"
        sections.append(_tag("professional_summary", f"{header}\n\n{profile.summary}"))
    elif profile.name:
        sections.append(f"Name: {profile.name}")

    buckets = categorize_documents(request.documents)
    for tag, docs in (
        ("resume", buckets.resume),
        ("interview_transcripts", buckets.interview_transcripts),
        ("supporting_experience", buckets.supporting_experience),
    ):
        if docs:
            sections.append(_tag(tag, format_document_section(docs)))
    return _tag("candidate_profile", "\n\n".join(sections))


def build_cover_letter_message(request: GenerationRequest, inventory: CandidateFactInventory) -> str:
    """User turn for the cover letter: job, inventory, bucketed documents, instructions, task."""
    instructions = [language_instruction(request.language, "cover letter")]
    if request.custom_instructions and request.custom_instructions.strip():
        instructions.append(request.custom_instructions.strip())
    return "\n\n".join(
        [
            _job_block(request),
            _tag("fact_inventory", format_fact_inventory(inventory)),
            _candidate_profile_block(request),
            _tag("user_instructions", "\n".join(instructions)),
            _tag("task", cover_letter_task(request.job_title)),
        ]
    )


def build_summary_message(request: GenerationRequest, inventory: CandidateFactInventory) -> str:
    """User turn for the executive summary; same evidence as the cover letter."""
    return "\n\n".join(
        [
            _job_block(request),
            _tag("fact_inventory", format_fact_inventory(inventory)),
            _candidate_profile_block(request),
            summary_task(request.job_title, request.language, request.custom_instructions),
        ]
    )


async def stream_cover_letter(
    generator: TextGenerator,
    request: GenerationRequest,
    inventory: CandidateFactInventory,
) -> AsyncIterator[str]:
    """Open the streamed cover letter call; raises if the stream cannot be opened."""
    logger.info("Writing cover letter (prompt v%s, language=%s)", GENERATION_PROMPT_VERSION, request.language)
    return await generator.generate_streaming(
        COVER_LETTER_SYSTEM_PROMPT,
        [{"role": "user", "content": build_cover_letter_message(request, inventory)}],
        COVER_LETTER_MAX_TOKENS,
        temperature=COVER_LETTER_TEMPERATURE,
    )


async def stream_executive_summary(
    generator: TextGenerator,
    request: GenerationRequest,
    inventory: CandidateFactInventory,
) -> AsyncIterator[str]:
    """Open the streamed executive summary call."""
    logger.info("Writing executive summary (prompt v%s, language=%s)", GENERATION_PROMPT_VERSION, request.language)
    return await generator.generate_streaming(
        SUMMARY_SYSTEM_PROMPT,
        [{"role": "user", "content": build_summary_message(request, inventory)}],
        SUMMARY_MAX_TOKENS,
        temperature=SUMMARY_TEMPERATURE,
    )
