"""
Term Schemas.

Pydantic models describing the term records produced by the analysis agents and
stored in cloud sessions. These models document the API responses; the merge
and view helpers work on the plain ``dict`` form (``model_dump()``) so they can
also accept terms that came straight from a client.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Category = Literal["responsibilities", "qualifications"]


class TermSource(BaseModel):
    """Where a term was observed: a (company, role) pair."""

    company: str
    role: str


class Term(BaseModel):
    """
    A weighted skill or responsibility phrase.

    Identity is the verbatim ``term`` string.
    """

    term: str
    count: int = Field(1, ge=0)
    category: Category = "qualifications"
    sources: List[TermSource] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "term": "React development",
                "count": 8,
                "category": "qualifications",
                "sources": [{"company": "Meta", "role": "Frontend Engineer"}],
            }
        },
    )


class TermsResponse(BaseModel):
    """Response body of the analysis endpoints."""

    terms: List[Term] = Field(default_factory=list)
    # Only returned by the research flow
    totalListings: Optional[int] = None
