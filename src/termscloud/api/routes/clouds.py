"""
Cloud Session API Routes.

A cloud accumulates terms across listings for one user: listings and research
runs are merged into it, and the table / cloud / autocomplete views are read
from it. Each cloud allows one analysis at a time.
"""

from typing import Optional

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from termscloud.agents.analyzer import ListingAnalyzerAgent, validate_listing
from termscloud.agents.researcher import MarketResearcherAgent
from termscloud.config import settings
from termscloud.config.request_schemas import ListingRequest, ResearchRequest
from termscloud.config.validation_constants import (
    CATEGORY_FILTER_ALL,
    ROLE_FILTER_ALL,
    VALID_CATEGORY_FILTERS,
    VALID_CLOUD_VARIANTS,
    VALID_SORT_ORDERS,
    VALID_SUGGESTION_FIELDS,
)
from termscloud.utils import state_manager
from termscloud.utils.logger import get_logger, set_correlation_id
from termscloud.utils.term_merging import category_counts, total_mentions
from termscloud.utils.views import cloud_view, suggestions, table_view

logger = get_logger(__name__)

router = APIRouter(prefix="/api/clouds", tags=["clouds"])


def _one_of(values) -> str:
    """Anchored regex matching exactly one of values."""
    return "^(" + "|".join(sorted(values)) + ")$"


CATEGORY_PATTERN = _one_of(VALID_CATEGORY_FILTERS)
ORDER_PATTERN = _one_of(VALID_SORT_ORDERS)
VARIANT_PATTERN = _one_of(VALID_CLOUD_VARIANTS)
FIELD_PATTERN = _one_of(VALID_SUGGESTION_FIELDS)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_cloud() -> JSONResponse:
    """Create an empty cloud.

    Returns:
        JSONResponse (201): {"cloud_id": "uuid-string"}
    """
    cloud_id = state_manager.create_cloud()
    return JSONResponse({"cloud_id": cloud_id}, status_code=status.HTTP_201_CREATED)


@router.get("/{cloud_id}")
def get_cloud(cloud_id: str) -> JSONResponse:
    """Summary of a cloud.

    Returns:
        JSONResponse: {cloud_id, term_count, total_mentions, total_listings,
            is_analyzing, category_counts}

    Raises:
        CloudNotFoundError (404): Unknown cloud_id.
    """
    state = state_manager.get_cloud(cloud_id)
    return JSONResponse(
        {
            "cloud_id": cloud_id,
            "term_count": len(state["terms"]),
            "total_mentions": total_mentions(state["terms"]),
            "total_listings": state["total_listings"],
            "is_analyzing": state["is_analyzing"],
            "category_counts": category_counts(state["terms"]),
        }
    )


@router.delete("/{cloud_id}")
def delete_cloud(cloud_id: str) -> JSONResponse:
    """Drop a cloud and everything in it."""
    state_manager.delete_cloud(cloud_id)
    return JSONResponse({"deleted": True})


@router.post("/{cloud_id}/listings")
def add_listing(cloud_id: str, payload: ListingRequest) -> JSONResponse:
    """Analyze a pasted listing and merge its terms into the cloud.

    Each section must fit within the character limit. Terms are attributed to
    the listing's company and role ("Unknown Company" / "Unknown Role" when
    left blank).

    Returns:
        JSONResponse: {"added": int, "terms": [...merged terms...]}

    Raises:
        InputValidationError (400): No content, or a section is over the limit.
        CloudNotFoundError (404): Unknown cloud_id.
        AnalysisInProgressError (409): The cloud is already analyzing.
        UpstreamAPIError / ResponseParsingError: As for /api/analyze-skills.
    """
    set_correlation_id(cloud_id=cloud_id)
    state_manager.get_cloud(cloud_id)
    validate_listing(payload, enforce_limit=True)

    with state_manager.analysis_slot(cloud_id):
        result = ListingAnalyzerAgent().analyze(
            payload,
            default_company=settings.UNKNOWN_COMPANY,
            default_role=settings.UNKNOWN_ROLE,
            enforce_limit=True,
        )
        terms = state_manager.add_terms(cloud_id, result["terms"])

    logger.info(
        f"Added {len(result['terms'])} terms to cloud",
        extra={"extra_fields": {"term_count": len(terms)}},
    )
    return JSONResponse({"added": len(result["terms"]), "terms": terms})


@router.post("/{cloud_id}/auto-generate")
def add_research(cloud_id: str, payload: ResearchRequest) -> JSONResponse:
    """Research a role and merge the found terms into the cloud.

    Returns:
        JSONResponse: {"added": int, "totalListings": int,
            "total_listings": int (running total), "terms": [...]}

    Raises:
        InputValidationError (400): Role or experience is missing.
        CloudNotFoundError (404): Unknown cloud_id.
        AnalysisInProgressError (409): The cloud is already analyzing.
        UpstreamAPIError / ResponseParsingError: As for /api/auto-generate.
    """
    set_correlation_id(cloud_id=cloud_id)

    with state_manager.analysis_slot(cloud_id):
        result = MarketResearcherAgent().research(payload)
        terms = state_manager.add_terms(
            cloud_id, result["terms"], total_listings=result["totalListings"]
        )

    state = state_manager.get_cloud(cloud_id)
    return JSONResponse(
        {
            "added": len(result["terms"]),
            "totalListings": result["totalListings"],
            "total_listings": state["total_listings"],
            "terms": terms,
        }
    )


@router.delete("/{cloud_id}/terms")
def reset_cloud(cloud_id: str) -> JSONResponse:
    """Clear the cloud's terms.

    Returns:
        JSONResponse: {"reset": bool}; false when the cloud was already empty.
    """
    return JSONResponse({"reset": state_manager.reset_cloud(cloud_id)})


@router.get("/{cloud_id}/table")
def get_table(
    cloud_id: str,
    search: str = "",
    category: str = Query(CATEGORY_FILTER_ALL, pattern=CATEGORY_PATTERN),
    order: str = Query("desc", pattern=ORDER_PATTERN),
) -> JSONResponse:
    """Filtered, sorted table rows.

    Returns:
        JSONResponse: {"terms": [...], "showing": int, "total": int}
    """
    state = state_manager.get_cloud(cloud_id)
    return JSONResponse(table_view(state["terms"], search, category, order))


@router.get("/{cloud_id}/cloud")
def get_cloud_words(
    cloud_id: str,
    category: str = Query(CATEGORY_FILTER_ALL, pattern=CATEGORY_PATTERN),
    role: str = ROLE_FILTER_ALL,
    variant: str = Query("fixed", pattern=VARIANT_PATTERN),
) -> JSONResponse:
    """Weighted words for the word cloud.

    Returns:
        JSONResponse: {"words": [...], "available_roles": [...],
            "category_counts": {...}, "empty_message": str | null}
    """
    state = state_manager.get_cloud(cloud_id)
    return JSONResponse(cloud_view(state["terms"], category, role, variant))


@router.get("/{cloud_id}/suggestions")
def get_suggestions(
    cloud_id: str,
    field: str = Query(..., pattern=FIELD_PATTERN),
    q: Optional[str] = "",
) -> JSONResponse:
    """Autocomplete values for the company / role inputs.

    Returns:
        JSONResponse: {"suggestions": [...]}
    """
    state = state_manager.get_cloud(cloud_id)
    return JSONResponse({"suggestions": suggestions(state["terms"], field, q)})
