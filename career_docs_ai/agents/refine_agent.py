"""Refinement Agent: apply a user's edit request to an existing cover letter or executive summary, streamed."""

from typing import AsyncIterator, List, Union

from career_docs_ai.config import REFINE_MAX_TOKENS, REFINE_TEMPERATURE, SUMMARY_REFINE_MAX_TOKENS
from career_docs_ai.prompts.generation import language_instruction
from career_docs_ai.prompts.refinement import (
    REFINEMENT_PROMPT_VERSION,
    build_refinement_system_prompt,
    build_summary_refinement_system_prompt,
)
from career_docs_ai.schemas.generation import RefinementRequest, SummaryRefinementRequest
from career_docs_ai.services.llm_client import Message, TextGenerator
from career_docs_ai.utils.logger import get_logger

logger = get_logger(__name__)

AnyRefinementRequest = Union[RefinementRequest, SummaryRefinementRequest]


def _contact_block(request: AnyRefinementRequest) -> str:
    p = request.profile
    fields = [("Name", p.name), ("Email", p.email), ("Phone", p.phone), ("Location", p.location)]
    return "\n".join(f"{label}: {value}" for label, value in fields if value)


def _documents_block(request: AnyRefinementRequest) -> str:
    return "\n\n".join(
        f"### {doc.name} ({doc.type})\n{doc.content}" for doc in request.documents if doc.content.strip()
    )


def build_refinement_messages(request: AnyRefinementRequest) -> List[Message]:
    """Prior turns followed by the new user request."""
    messages: List[Message] = [
        {"role": m.role, "content": m.content} for m in request.conversation_history
    ]
    messages.append({"role": "user", "content": request.user_request})
    return messages


def build_refinement_prompt(request: RefinementRequest) -> str:
    return build_refinement_system_prompt(
        candidate_name=request.profile.name,
        contact_block=_contact_block(request),
        documents_block=_documents_block(request),
        job_description=request.job_description,
        current_letter=request.current_letter,
        language_line=language_instruction(request.language, "response"),
    )


def build_summary_refinement_prompt(request: SummaryRefinementRequest) -> str:
    return build_summary_refinement_system_prompt(
        candidate_name=request.profile.name,
        job_title=request.job_title,
        contact_block=_contact_block(request),
        documents_block=_documents_block(request),
        job_description=request.job_description,
        current_summary=request.current_summary,
        language_line=language_instruction(request.language, "response"),
    )


async def stream_refinement(generator: TextGenerator, request: RefinementRequest) -> AsyncIterator[str]:
    """Open the streamed refinement call."""
    logger.info(
        "Refining cover letter (prompt v%s, %d prior turns)",
        REFINEMENT_PROMPT_VERSION,
        len(request.conversation_history),
    )
    return await generator.generate_streaming(
        build_refinement_prompt(request),
        build_refinement_messages(request),
        REFINE_MAX_TOKENS,
        temperature=REFINE_TEMPERATURE,
    )


async def stream_summary_refinement(
    generator: TextGenerator,
    request: SummaryRefinementRequest,
) -> AsyncIterator[str]:
    """Open the streamed executive summary refinement call."""
    logger.info(
        "Refining executive summary (prompt v%s, %d prior turns)",
        REFINEMENT_PROMPT_VERSION,
        len(request.conversation_history),
    )
    return await generator.generate_streaming(
        build_summary_refinement_prompt(request),
        build_refinement_messages(request),
        SUMMARY_REFINE_MAX_TOKENS,
        temperature=REFINE_TEMPERATURE,
    )
