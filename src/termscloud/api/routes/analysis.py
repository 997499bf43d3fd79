"""
Analysis API Routes.

Stateless endpoints: each call analyzes one listing (or one research query)
and returns the extracted terms. Clients that keep their own state merge the
results themselves; see routes/clouds.py for server-held state.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from termscloud.agents.analyzer import ListingAnalyzerAgent
from termscloud.agents.researcher import MarketResearcherAgent
from termscloud.config.request_schemas import (
    CharacterCountRequest,
    ListingRequest,
    ResearchRequest,
)
from termscloud.config.term_schemas import TermsResponse
from termscloud.utils.logger import get_logger
from termscloud.utils.views import character_count_status

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post("/analyze-skills")
def analyze_skills(payload: ListingRequest) -> JSONResponse:
    """Extract terms from a pasted job listing.

    Args:
        payload: ListingRequest with responsibilities and/or qualifications,
            plus optional company and role used as the terms' source.

    Returns:
        JSONResponse: {"terms": [{term, count, category, sources}]}

    Raises:
        InputValidationError (400): Both sections are blank.
        UpstreamAPIError: The Groq call failed (upstream status).
        ResponseParsingError (500): The reply held no JSON object.
    """
    result = ListingAnalyzerAgent().analyze(payload)
    return JSONResponse(TermsResponse(**result).model_dump(exclude_none=True))


@router.post("/auto-generate")
def auto_generate(payload: ResearchRequest) -> JSONResponse:
    """Research current job listings for a role.

    Args:
        payload: ResearchRequest with role and experience (required) and
            optional sector and company.

    Returns:
        JSONResponse: {"terms": [...], "totalListings": int}

    Raises:
        InputValidationError (400): Role or experience is missing.
        UpstreamAPIError: The Perplexity call failed (upstream status).
        ResponseParsingError (500): The reply held no usable JSON object.
    """
    result = MarketResearcherAgent().research(payload)
    return JSONResponse(TermsResponse(**result).model_dump(exclude_none=True))


@router.post("/character-count")
def character_count(payload: CharacterCountRequest) -> JSONResponse:
    """Length of a pasted section against the per-section character limit."""
    return JSONResponse(character_count_status(payload.text))
