from __future__ import annotations

import json

from career_docs_ai.fact_pipeline.inventory_formatter import format_fact_inventory
from career_docs_ai.schemas.fact_inventory import (
    CandidateFactInventory,
    ExtractedAchievement,
    ExtractedSkill,
    empty_inventory,
)


def _inventory() -> CandidateFactInventory:
    return CandidateFactInventory(
        skills=[
            ExtractedSkill(skill="Docker", source="CV", context="Built containers", confidence="demonstrated"),
            ExtractedSkill(skill="Ærø logistics", source="CV", context="", confidence="mentioned"),
        ],
        achievements=[ExtractedAchievement(description="Shipped v2", source="CV")],
        companies=["Acme Corp"],
    )


def test_format_is_deterministic_pretty_json() -> None:
    inventory = _inventory()
    text = format_fact_inventory(inventory)
    assert text == format_fact_inventory(inventory.model_copy(deep=True))
    assert text.startswith("{\n  ")
    assert "Ærø" in text


def test_format_preserves_order_and_omits_unset_metrics() -> None:
    data = json.loads(format_fact_inventory(_inventory()))
    assert [s["skill"] for s in data["skills"]] == ["Docker", "Ærø logistics"]
    assert data["achievements"] == [{"description": "Shipped v2", "source": "CV"}]
    assert data["credentials"] == []


def test_empty_inventory_formats_as_four_empty_lists() -> None:
    assert json.loads(format_fact_inventory(empty_inventory())) == {
        "skills": [],
        "achievements": [],
        "credentials": [],
        "companies": [],
    }
