"""
Request Schemas for API Payload Validation.

Pydantic models for the JSON bodies accepted by the API. Field types are
validated here; whether enough content was provided is checked by the agents
so that the API can answer with the same ``{"error": ...}`` shape as any other
failure.

Key Models:
    - ListingRequest: Pasted job listing sections plus optional source labels
    - ResearchRequest: Role / experience / sector / company research criteria
    - CharacterCountRequest: Text whose length is checked against the limit
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class ListingRequest(BaseModel):
    """
    A pasted job listing.

    Example:
        {
            "company": "Acme",
            "role": "Product Manager",
            "responsibilities": "Own the roadmap...",
            "qualifications": "5+ years of..."
        }
    """

    company: Optional[str] = None
    role: Optional[str] = None
    responsibilities: Optional[str] = None
    qualifications: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ResearchRequest(BaseModel):
    """
    Market research criteria for the auto-generate flow.

    ``role`` and ``experience`` are required by the research agent; they are
    optional here so a missing value is reported as a 400 with an error message.
    """

    role: Optional[str] = None
    experience: Optional[str] = None
    sector: Optional[str] = None
    company: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("role", "experience", "sector", "company", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        """Treat whitespace-only criteria as not provided."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CharacterCountRequest(BaseModel):
    text: str = ""
