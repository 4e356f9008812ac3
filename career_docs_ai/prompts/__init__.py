"""Versioned prompt templates, one module per model role."""

from .extraction import EXTRACTION_PROMPT_VERSION, EXTRACTION_SYSTEM_PROMPT, build_extraction_user_message
from .generation import (
    COVER_LETTER_SYSTEM_PROMPT,
    GENERATION_PROMPT_VERSION,
    SUMMARY_SYSTEM_PROMPT,
    language_instruction,
)
from .refinement import (
    REFINEMENT_PROMPT_VERSION,
    build_refinement_system_prompt,
    build_summary_refinement_system_prompt,
)

__all__ = [
    "EXTRACTION_PROMPT_VERSION",
    "EXTRACTION_SYSTEM_PROMPT",
    "build_extraction_user_message",
    "GENERATION_PROMPT_VERSION",
    "COVER_LETTER_SYSTEM_PROMPT",
    "SUMMARY_SYSTEM_PROMPT",
    "language_instruction",
    "REFINEMENT_PROMPT_VERSION",
    "build_refinement_system_prompt",
    "build_summary_refinement_system_prompt",
]
