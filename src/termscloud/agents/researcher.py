"""
Researches current job listings for a role and extracts weighted terms.

CLASSES:
    MarketResearcherAgent

FUNCTIONS:
    build_search_query     (public)
    build_research_prompt  (public)
"""

from typing import Any, Dict, Optional

from termscloud.config import settings
from termscloud.config.prompts import RESEARCH_CRITERIA_TEMPLATE, RESEARCH_PROMPT
from termscloud.config.request_schemas import ResearchRequest
from termscloud.config.validation_constants import JOB_BOARD_SITES, PROVIDER_PERPLEXITY
from termscloud.utils.exceptions import InputValidationError
from termscloud.utils.json_extraction import parse_llm_json
from termscloud.utils.llms import call_llm, provider_name
from termscloud.utils.logger import get_logger
from termscloud.utils.normalization import normalize_count, normalize_terms

logger = get_logger(__name__)


def build_search_query(
    role: str,
    experience: str,
    sector: Optional[str] = None,
    company: Optional[str] = None,
) -> str:
    """Web search query describing the research criteria."""
    query = f"{role} {experience} job listings responsibilities qualifications requirements"
    if company:
        query += f" at {company}"
    if sector:
        query += f" in {sector} industry"
    query += " " + " OR ".join(f"site:{site}" for site in JOB_BOARD_SITES)
    return query


def build_research_prompt(
    role: str,
    experience: str,
    sector: Optional[str] = None,
    company: Optional[str] = None,
) -> str:
    """Fill the research prompt. Company and sector lines only appear when given."""
    criteria = RESEARCH_CRITERIA_TEMPLATE.format(
        role=role,
        experience=experience,
        company_line=f"- Company: {company}" if company else "",
        sector_line=f"- Sector: {sector}" if sector else "",
    )
    return RESEARCH_PROMPT.format(criteria=criteria, role=role)


class MarketResearcherAgent:
    """Researches current job listings for a role with an online LLM.

    Responsibilities:
    1. Build the research prompt from the criteria
    2. Call the research LLM provider
    3. Repair and parse the reply; coerce terms, sources and totalListings

    Args:
        provider (str): LLM provider to call (default: "perplexity").
    """

    def __init__(self, provider: str = PROVIDER_PERPLEXITY):
        self.provider = provider

    # ------------------------------
    # Public interface
    # ------------------------------
    def research(self, request: ResearchRequest) -> Dict[str, Any]:
        """Research a role.

        Args:
            request: Research criteria; role and experience are required.

        Returns:
            Dict: {"terms": [...], "totalListings": int}

        Raises:
            InputValidationError: If role or experience is missing.
            UpstreamAPIError: If the LLM call fails.
            ResponseParsingError: If the reply holds no usable JSON object.
        """
        if not request.role or not request.experience:
            raise InputValidationError("Role and experience level are required")

        query = build_search_query(
            request.role, request.experience, request.sector, request.company
        )
        logger.info("Researching job listings", extra={"extra_fields": {"query": query}})

        prompt = build_research_prompt(
            request.role, request.experience, request.sector, request.company
        )
        raw_response = call_llm(self.provider, prompt)

        parsed = parse_llm_json(raw_response, provider_name(self.provider), repair=True)

        fallback_source = {
            "company": settings.MARKET_RESEARCH_COMPANY,
            "role": f"{request.role} ({request.experience})",
        }
        terms = normalize_terms(
            parsed.get("terms"),
            default_sources=[fallback_source],
            clamp=True,
            keep_sources=True,
        )

        total_listings = normalize_count(parsed.get("totalListings"), default=0)

        logger.info(
            f"Extracted {len(terms)} terms from {total_listings} listings",
            extra={"extra_fields": {"provider": self.provider, "role": request.role}},
        )
        return {"terms": terms, "totalListings": total_listings}
