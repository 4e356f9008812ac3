"""Fact inventory: the only claims writing steps may make about a candidate."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Confidence = Literal["explicit", "demonstrated", "mentioned"]
CredentialType = Literal["degree", "certification", "title"]

CONFIDENCE_LEVELS: tuple = ("explicit", "demonstrated", "mentioned")
CREDENTIAL_TYPES: tuple = ("degree", "certification", "title")

# Weakest member of each closed set; used whenever the model's value is unusable
MOST_CONSERVATIVE_CONFIDENCE: Confidence = "mentioned"
MOST_CONSERVATIVE_CREDENTIAL_TYPE: CredentialType = "title"


class ExtractedSkill(BaseModel):
    """A skill with the document it came from and how strongly it is evidenced."""

    skill: str = Field(..., description="Skill name")
    source: str = Field(..., description="Name of the source document")
    context: str = Field(default="", description="Quote or paraphrase proving the skill")
    confidence: Confidence = Field(default=MOST_CONSERVATIVE_CONFIDENCE, description="Evidence tier")


class ExtractedAchievement(BaseModel):
    """An accomplishment; metrics only when the source states them."""

    description: str = Field(..., description="What was achieved")
    metrics: Optional[str] = Field(default=None, description="Exact figures from the source, if any")
    source: str = Field(..., description="Name of the source document")


class ExtractedCredential(BaseModel):
    """A degree, certification or job title."""

    type: CredentialType = Field(default=MOST_CONSERVATIVE_CREDENTIAL_TYPE, description="Credential class")
    name: str = Field(..., description="Credential name")
    source: str = Field(..., description="Name of the source document")


class CandidateFactInventory(BaseModel):
    """Sanitized record of everything the candidate's documents support."""

    skills: List[ExtractedSkill] = Field(default_factory=list)
    achievements: List[ExtractedAchievement] = Field(default_factory=list)
    credentials: List[ExtractedCredential] = Field(default_factory=list)
    companies: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.skills or self.achievements or self.credentials or self.companies)

    def to_dict(self) -> dict:
        """Plain dict without unset optional fields (no ``metrics: null``)."""
        return self.model_dump(exclude_none=True)

    def counts(self) -> dict:
        return {
            "skills": len(self.skills),
            "achievements": len(self.achievements),
            "credentials": len(self.credentials),
            "companies": len(self.companies),
        }


def empty_inventory() -> CandidateFactInventory:
    """The canonical empty inventory: four empty lists, never None."""
    return CandidateFactInventory()
