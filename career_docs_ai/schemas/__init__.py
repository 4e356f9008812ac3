"""Schema exports."""

from .candidate import CandidateDocument, Profile
from .fact_inventory import (
    CandidateFactInventory,
    ExtractedAchievement,
    ExtractedCredential,
    ExtractedSkill,
    empty_inventory,
)
from .generation import (
    ChatMessage,
    GenerationRequest,
    GenerationStage,
    RefinementRequest,
    StreamEvent,
    SummaryRefinementRequest,
)

__all__ = [
    "CandidateDocument",
    "Profile",
    "CandidateFactInventory",
    "ExtractedSkill",
    "ExtractedAchievement",
    "ExtractedCredential",
    "empty_inventory",
    "ChatMessage",
    "GenerationRequest",
    "GenerationStage",
    "RefinementRequest",
    "StreamEvent",
    "SummaryRefinementRequest",
]
