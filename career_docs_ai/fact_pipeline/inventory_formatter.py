"""Serialize a fact inventory for prompt context."""

import json

from career_docs_ai.schemas.fact_inventory import CandidateFactInventory


def format_fact_inventory(inventory: CandidateFactInventory) -> str:
    """Pretty-printed JSON; deterministic, keeps list order, omits unset metrics."""
    return json.dumps(inventory.to_dict(), indent=2, ensure_ascii=False)
