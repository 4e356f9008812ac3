"""Fact inventory pipeline: aggregate documents, extract with an LLM, sanitize, format."""

from .document_aggregator import aggregate_documents, categorize_documents
from .fact_extractor import FactExtractionResult, extract_facts, run_fact_extraction
from .inventory_formatter import format_fact_inventory
from .inventory_sanitizer import sanitize_inventory, sanitize_inventory_data
from .text_extractor import document_from_upload, extract_text_from_file

__all__ = [
    "aggregate_documents",
    "categorize_documents",
    "FactExtractionResult",
    "extract_facts",
    "run_fact_extraction",
    "format_fact_inventory",
    "sanitize_inventory",
    "sanitize_inventory_data",
    "document_from_upload",
    "extract_text_from_file",
]
