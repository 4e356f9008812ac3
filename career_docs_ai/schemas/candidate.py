"""Candidate inputs: profile record and uploaded documents."""

from typing import Literal

from pydantic import BaseModel, Field

DocumentType = Literal["cv", "experience", "other"]


class CandidateDocument(BaseModel):
    """One document from the candidate's profile (CV, experience write-up, transcript...)."""

    name: str = Field(..., description="Display name of the document, used as provenance")
    type: DocumentType = Field(default="other", description="cv, experience or other")
    content: str = Field(default="", description="Plain text content")


class Profile(BaseModel):
    """Candidate profile; only name and summary matter to fact extraction."""

    name: str = Field(default="", description="Candidate full name")
    summary: str = Field(default="", description="Free-text professional summary")
    email: str = Field(default="", description="Contact email")
    phone: str = Field(default="", description="Contact phone")
    location: str = Field(default="", description="Candidate location")
