"""LLM-based extraction of the candidate fact inventory from profile and documents."""

from typing import List, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from career_docs_ai.config import EXTRACTION_MAX_TOKENS, EXTRACTION_TEMPERATURE
from career_docs_ai.fact_pipeline.document_aggregator import aggregate_documents
from career_docs_ai.fact_pipeline.inventory_sanitizer import parse_inventory_json, sanitize_inventory_data
from career_docs_ai.prompts.extraction import (
    EXTRACTION_PROMPT_VERSION,
    EXTRACTION_SYSTEM_PROMPT,
    build_extraction_user_message,
)
from career_docs_ai.schemas.candidate import CandidateDocument
from career_docs_ai.schemas.fact_inventory import CandidateFactInventory, empty_inventory
from career_docs_ai.services.llm_client import TextGenerator
from career_docs_ai.utils.logger import get_logger

logger = get_logger(__name__)

ExtractionStatus = Literal["ok", "skipped", "failed_soft"]


class FactExtractionResult(BaseModel):
    """Inventory plus how it was obtained; ``skipped`` means there was no input text."""

    inventory: CandidateFactInventory = Field(default_factory=empty_inventory)
    status: ExtractionStatus = "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed_soft"


async def run_fact_extraction(
    generator: TextGenerator,
    profile_summary: Optional[str],
    documents: Optional[Sequence[CandidateDocument]],
) -> FactExtractionResult:
    """
    Aggregate the candidate's sources, call the extraction model once, sanitize.
    Never raises: provider errors and unusable output give the empty inventory
    with status ``failed_soft``. Empty input skips the model call entirely.
    """
    docs: List[CandidateDocument] = list(documents or [])
    document_text = aggregate_documents(profile_summary, docs)
    if not document_text.strip():
        logger.info("No document content to extract facts from; skipping extraction")
        return FactExtractionResult(status="skipped")

    logger.info(
        "Extracting facts (prompt v%s): documents=%s with_content=%s summary=%s chars=%s",
        EXTRACTION_PROMPT_VERSION,
        len(docs),
        sum(1 for d in docs if d.content.strip()),
        bool(profile_summary and profile_summary.strip()),
        len(document_text),
    )
    try:
        raw = await generator.generate(
            EXTRACTION_SYSTEM_PROMPT,
            [{"role": "user", "content": build_extraction_user_message(document_text)}],
            EXTRACTION_MAX_TOKENS,
            temperature=EXTRACTION_TEMPERATURE,
        )
    except Exception as e:
        logger.exception("Fact extraction call failed: %s", e)
        return FactExtractionResult(status="failed_soft")

    if not raw or not raw.strip():
        logger.warning("Extraction response contained no text")
        return FactExtractionResult(status="failed_soft")

    parsed = parse_inventory_json(raw)
    if parsed is None:
        logger.warning("Extraction response is not a JSON object (first 500 chars): %s", raw[:500])
        return FactExtractionResult(status="failed_soft")

    inventory = sanitize_inventory_data(parsed)
    logger.info("Fact extraction succeeded: %s", inventory.counts())
    return FactExtractionResult(inventory=inventory, status="ok")


async def extract_facts(
    generator: TextGenerator,
    profile_summary: Optional[str],
    documents: Optional[Sequence[CandidateDocument]],
) -> CandidateFactInventory:
    """Fact inventory for the candidate; the empty inventory on any failure."""
    result = await run_fact_extraction(generator, profile_summary, documents)
    return result.inventory
