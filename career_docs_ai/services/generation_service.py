"""
Per-request generation pipeline: fact extraction, then streamed claim-constrained writing.

Extraction is fail-soft (any failure yields the empty inventory and writing
falls back to the raw documents). Writing is fail-loud: an error before any
output reaches the consumer raises GenerationError; an error after output has
started is appended to the stream as a terminal ``error`` event.
"""

from contextlib import aclosing
from typing import AsyncIterator, Awaitable, Callable, Dict, Optional, Tuple

from career_docs_ai.agents.cover_letter_agent import stream_cover_letter, stream_executive_summary
from career_docs_ai.agents.refine_agent import stream_refinement, stream_summary_refinement
from career_docs_ai.config import EXTRACTION_MODEL_NAME, GENERATION_MODEL_NAME
from career_docs_ai.errors import GenerationError, InputValidationError
from career_docs_ai.fact_pipeline.fact_extractor import run_fact_extraction
from career_docs_ai.schemas.fact_inventory import CandidateFactInventory
from career_docs_ai.schemas.generation import (
    GenerationRequest,
    GenerationStage,
    RefinementRequest,
    StreamEvent,
    StreamEventType,
    SummaryRefinementRequest,
)
from career_docs_ai.services.llm_client import TextGenerator, get_text_generator
from career_docs_ai.utils.logger import get_logger

logger = get_logger(__name__)

StreamOpener = Callable[[], Awaitable[AsyncIterator[str]]]


def validate_generation_request(request: GenerationRequest) -> None:
    """Reject requests that cannot produce a grounded letter, before any model call."""
    if not request.job_description or not request.job_description.strip():
        raise InputValidationError("Job description is required")
    has_documents = any(d.content.strip() for d in request.documents)
    if not has_documents and not request.profile.summary.strip():
        raise InputValidationError("At least one candidate document or a profile summary is required")


def validate_refinement_request(request: RefinementRequest) -> None:
    if not request.current_letter.strip():
        raise InputValidationError("Current cover letter is required")
    if not request.user_request.strip():
        raise InputValidationError("Refinement request is required")


def validate_summary_refinement_request(request: SummaryRefinementRequest) -> None:
    if not request.current_summary.strip():
        raise InputValidationError("Current executive summary is required")
    if not request.user_request.strip():
        raise InputValidationError("Refinement request is required")


def _extraction_key(request: GenerationRequest) -> Tuple:
    """The inputs fact extraction reads; job fields and writing options do not affect the inventory."""
    return (
        request.profile.summary,
        tuple((d.name, d.type, d.content) for d in request.documents),
    )


async def _relay(open_stream: StreamOpener, event_type: StreamEventType) -> AsyncIterator[StreamEvent]:
    chunks = await open_stream()
    async with aclosing(chunks):
        async for text in chunks:
            yield StreamEvent(type=event_type, text=text)


class CoverLetterPipeline:
    """
    One generation request. Holds only request-scoped state: the current
    stage and the finalized inventory (exposed for persistence/debugging).
    """

    def __init__(self, extraction_generator: TextGenerator, writing_generator: TextGenerator) -> None:
        self.extraction_generator = extraction_generator
        self.writing_generator = writing_generator
        self.stage = GenerationStage.PENDING
        self.inventory: Optional[CandidateFactInventory] = None
        self._extraction_key: Optional[Tuple] = None

    def _advance(self, stage: GenerationStage) -> None:
        logger.info("Generation stage: %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    async def prepare(self, request: GenerationRequest) -> CandidateFactInventory:
        """Run fact extraction for ``request``; always returns an inventory."""
        validate_generation_request(request)
        self._advance(GenerationStage.EXTRACTING)
        result = await run_fact_extraction(
            self.extraction_generator, request.profile.summary, request.documents
        )
        self.inventory = result.inventory
        self._extraction_key = _extraction_key(request)
        self._advance(
            GenerationStage.EXTRACTION_FAILED_SOFT if result.failed else GenerationStage.EXTRACTION_OK
        )
        if self.inventory.is_empty():
            logger.info("Fact inventory is empty; writing will fall back to source documents")
        return self.inventory

    async def _inventory_for(self, request: GenerationRequest) -> CandidateFactInventory:
        # An inventory from prepare() is only valid for the inputs it was extracted from
        if self.inventory is not None and self._extraction_key == _extraction_key(request):
            return self.inventory
        if self.inventory is not None:
            logger.info("Candidate material changed since prepare(); extracting facts again")
        return await self.prepare(request)

    async def stream(self, request: GenerationRequest) -> AsyncIterator[StreamEvent]:
        """
        Yield cover letter chunks, ``cover_letter_done``, summary chunks, then ``done``.
        Raises GenerationError if writing fails before the first event.
        """
        validate_generation_request(request)
        inventory = await self._inventory_for(request)
        self._advance(GenerationStage.GENERATING)

        delivered = False
        try:
            async with aclosing(
                _relay(lambda: stream_cover_letter(self.writing_generator, request, inventory), "cover_letter")
            ) as letter_events:
                async for event in letter_events:
                    if not delivered:
                        self._advance(GenerationStage.STREAMING)
                        delivered = True
                    yield event
            delivered = True
            yield StreamEvent(type="cover_letter_done")

            if request.include_summary:
                async with aclosing(
                    _relay(lambda: stream_executive_summary(self.writing_generator, request, inventory), "summary")
                ) as summary_events:
                    async for event in summary_events:
                        yield event
        except Exception as e:
            logger.exception("Generation failed: %s", e)
            self._advance(GenerationStage.FAILED)
            if not delivered:
                raise GenerationError(str(e) or "Generation failed") from e
            yield StreamEvent(type="error", error=str(e) or "Generation failed")
            return

        self._advance(GenerationStage.COMPLETE)
        yield StreamEvent(type="done")


def build_pipeline(
    extraction_generator: Optional[TextGenerator] = None,
    writing_generator: Optional[TextGenerator] = None,
) -> CoverLetterPipeline:
    """New pipeline for one request; providers default to the configured models."""
    return CoverLetterPipeline(
        extraction_generator or get_text_generator(EXTRACTION_MODEL_NAME),
        writing_generator or get_text_generator(GENERATION_MODEL_NAME),
    )


async def _stream_revision(
    open_stream: StreamOpener,
    event_type: StreamEventType,
    label: str,
) -> AsyncIterator[StreamEvent]:
    delivered = False
    try:
        async with aclosing(_relay(open_stream, event_type)) as events:
            async for event in events:
                delivered = True
                yield event
    except Exception as e:
        logger.exception("%s failed: %s", label, e)
        if not delivered:
            raise GenerationError(str(e) or f"{label} failed") from e
        yield StreamEvent(type="error", error=str(e) or f"{label} failed")
        return
    yield StreamEvent(type="done")


async def stream_refined_letter(
    request: RefinementRequest,
    generator: Optional[TextGenerator] = None,
) -> AsyncIterator[StreamEvent]:
    """Stream a revised cover letter with the same upfront/terminal error split."""
    validate_refinement_request(request)
    generator = generator or get_text_generator(GENERATION_MODEL_NAME)
    async with aclosing(
        _stream_revision(lambda: stream_refinement(generator, request), "refinement", "Refinement")
    ) as events:
        async for event in events:
            yield event


async def stream_refined_summary(
    request: SummaryRefinementRequest,
    generator: Optional[TextGenerator] = None,
) -> AsyncIterator[StreamEvent]:
    """Stream a revised executive summary with the same upfront/terminal error split."""
    validate_summary_refinement_request(request)
    generator = generator or get_text_generator(GENERATION_MODEL_NAME)
    async with aclosing(
        _stream_revision(
            lambda: stream_summary_refinement(generator, request), "summary_refinement", "Summary refinement"
        )
    ) as events:
        async for event in events:
            yield event


async def collect_text(events: AsyncIterator[StreamEvent]) -> Dict[str, str]:
    """
    Drain a stream into final text per event type (e.g. ``cover_letter``, ``summary``).
    A terminal error raises GenerationError so partial output is never treated as final.
    """
    collected: Dict[str, str] = {}
    async for event in events:
        if event.type == "error":
            raise GenerationError(event.error or "Generation failed")
        if event.text:
            collected[event.type] = collected.get(event.type, "") + event.text
    return collected
