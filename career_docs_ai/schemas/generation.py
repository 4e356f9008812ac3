"""Request, state and stream-event schemas for prose generation."""

import json
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from career_docs_ai.config import DEFAULT_LANGUAGE
from career_docs_ai.schemas.candidate import CandidateDocument, Profile

Language = Literal["en", "da"]


class GenerationStage(str, Enum):
    """Lifecycle of one generation request."""

    PENDING = "pending"
    EXTRACTING = "extracting"
    EXTRACTION_OK = "extraction_ok"
    EXTRACTION_FAILED_SOFT = "extraction_failed_soft"
    GENERATING = "generating"
    STREAMING = "streaming"
    COMPLETE = "complete"
    FAILED = "failed"


class GenerationRequest(BaseModel):
    """Everything needed to write a cover letter (and summary) for one job."""

    profile: Profile = Field(default_factory=Profile)
    documents: List[CandidateDocument] = Field(default_factory=list)
    job_title: str = Field(default="", description="Target job title")
    company_name: str = Field(default="", description="Hiring company, if known")
    job_description: str = Field(..., description="Full job posting text")
    language: Language = Field(default=DEFAULT_LANGUAGE)
    custom_instructions: Optional[str] = Field(
        default=None, description="User style requests; never override claim rules"
    )
    include_summary: bool = Field(default=True, description="Also stream an executive summary")


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class RefinementRequest(BaseModel):
    """A user's follow-up edit request on an already generated cover letter."""

    current_letter: str
    user_request: str
    conversation_history: List[ChatMessage] = Field(default_factory=list)
    profile: Profile = Field(default_factory=Profile)
    documents: List[CandidateDocument] = Field(default_factory=list)
    job_description: str = ""
    language: Language = Field(default=DEFAULT_LANGUAGE)


class SummaryRefinementRequest(BaseModel):
    """A user's follow-up edit request on an already generated executive summary."""

    current_summary: str
    user_request: str
    conversation_history: List[ChatMessage] = Field(default_factory=list)
    profile: Profile = Field(default_factory=Profile)
    documents: List[CandidateDocument] = Field(default_factory=list)
    job_title: str = ""
    job_description: str = ""
    language: Language = Field(default=DEFAULT_LANGUAGE)


StreamEventType = Literal[
    "cover_letter",
    "cover_letter_done",
    "summary",
    "refinement",
    "summary_refinement",
    "done",
    "error",
]


class StreamEvent(BaseModel):
    """One item on a generation stream. ``done`` and ``error`` are terminal."""

    type: StreamEventType
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.type in ("done", "error")

    def to_sse(self) -> str:
        """Render as a server-sent-events ``data:`` frame."""
        if self.type == "done":
            return "data: [DONE]\n\n"
        if self.type == "error":
            payload = {"type": "error", "error": self.error or "Generation failed"}
        else:
            payload = self.model_dump(exclude_none=True)
        return f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"
