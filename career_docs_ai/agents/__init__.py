"""Agent exports."""

from .cover_letter_agent import (
    build_cover_letter_message,
    build_summary_message,
    stream_cover_letter,
    stream_executive_summary,
)
from .refine_agent import (
    build_refinement_messages,
    build_refinement_prompt,
    build_summary_refinement_prompt,
    stream_refinement,
    stream_summary_refinement,
)

__all__ = [
    "build_cover_letter_message",
    "build_summary_message",
    "stream_cover_letter",
    "stream_executive_summary",
    "build_refinement_messages",
    "build_refinement_prompt",
    "build_summary_refinement_prompt",
    "stream_refinement",
    "stream_summary_refinement",
]
