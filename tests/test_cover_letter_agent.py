from __future__ import annotations

import asyncio
import logging

from career_docs_ai.agents.cover_letter_agent import (
    build_cover_letter_message,
    build_summary_message,
    stream_cover_letter,
)
from career_docs_ai.fact_pipeline.inventory_formatter import format_fact_inventory
from career_docs_ai.prompts.generation import (
    COVER_LETTER_SYSTEM_PROMPT,
    GENERATION_PROMPT_VERSION,
    SUMMARY_SYSTEM_PROMPT,
)
from career_docs_ai.schemas.candidate import CandidateDocument
from career_docs_ai.schemas.fact_inventory import CandidateFactInventory, ExtractedSkill, empty_inventory
from career_docs_ai.schemas.generation import GenerationRequest


def _docker_inventory() -> CandidateFactInventory:
    return CandidateFactInventory(
        skills=[
            ExtractedSkill(
                skill="Docker",
                source="CV",
                context="Built containerized applications",
                confidence="demonstrated",
            )
        ]
    )


def _request(profile, **overrides) -> GenerationRequest:
    fields = dict(
        profile=profile,
        documents=[
            CandidateDocument(name="CV", type="cv", content="Built containerized applications"),
            CandidateDocument(name="Interview notes", type="experience", content="Told the outage story"),
            CandidateDocument(name="Portfolio", type="other", content="Open source work"),
        ],
        job_title="Platform Engineer",
        job_description="Kubernetes expertise required.",
    )
    fields.update(overrides)
    return GenerationRequest(**fields)


def test_cover_letter_message_embeds_inventory_and_buckets(profile) -> None:
    inventory = _docker_inventory()
    message = build_cover_letter_message(_request(profile), inventory)

    assert "<job_description>\nJob Title: Platform Engineer\nCompany: Not specified" in message
    assert f"<fact_inventory>\n{format_fact_inventory(inventory)}\n</fact_inventory>" in message
    assert "<resume>\n--- CV ---\nBuilt containerized applications\n</resume>" in message
    assert "<interview_transcripts>\n--- Interview notes ---" in message
    assert "<supporting_experience>\n--- Portfolio ---" in message
    assert "Location: Aarhus" in message
    assert message.index("<fact_inventory>") < message.index("<candidate_profile>")
    assert message.rstrip().endswith("</task>")


def test_cover_letter_message_language_and_custom_instructions(profile) -> None:
    message = build_cover_letter_message(
        _request(profile, language="da", custom_instructions="  Keep it under 250 words. "),
        empty_inventory(),
    )
    assert "<user_instructions>\nWrite the cover letter in Danish (Dansk).\nKeep it under 250 words.\n</user_instructions>" in message


def test_empty_inventory_still_carries_documents_for_fallback(profile) -> None:
    message = build_cover_letter_message(_request(profile), empty_inventory())
    assert '"skills": []' in message
    assert "Built containerized applications" in message


def test_system_prompts_carry_claim_rules() -> None:
    for prompt in (COVER_LETTER_SYSTEM_PROMPT, SUMMARY_SYSTEM_PROMPT):
        assert "<fact_inventory>" in prompt
        assert "verbatim" in prompt
        assert "Never claim a degree, certification or title" in prompt
        assert "Never write a bridging claim" in prompt
        assert "Kubernetes" in prompt
    assert "override these style rules, never the claim rules" in COVER_LETTER_SYSTEM_PROMPT


def test_summary_message_targets_role(profile) -> None:
    message = build_summary_message(_request(profile, company_name="Globex"), _docker_inventory())
    assert "Company: Globex" in message
    assert "tailored for the Platform Engineer role" in message
    assert "Write the headline and summary in English." in message


def test_stream_cover_letter_uses_generation_settings(make_generator, profile) -> None:
    generator = make_generator(streams=[["Dear team,", " hello"]])

    async def run() -> list[str]:
        chunks = await stream_cover_letter(generator, _request(profile), _docker_inventory())
        return [c async for c in chunks]

    assert asyncio.run(run()) == ["Dear team,", " hello"]
    call = generator.stream_calls[0]
    assert call["system"] == COVER_LETTER_SYSTEM_PROMPT
    assert call["temperature"] == 0.35
    assert call["max_output_tokens"] == 4096
    assert call["messages"][0]["role"] == "user"


def test_stream_cover_letter_logs_prompt_version(make_generator, profile, caplog) -> None:
    caplog.set_level(logging.INFO, logger="career_docs_ai.agents.cover_letter_agent")
    asyncio.run(stream_cover_letter(make_generator(streams=[["x"]]), _request(profile), _docker_inventory()))
    assert f"prompt v{GENERATION_PROMPT_VERSION}" in caplog.text
