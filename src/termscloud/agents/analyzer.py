"""
Extracts weighted terms from a pasted job listing.

CLASSES:
    ListingAnalyzerAgent

FUNCTIONS:
    build_listing_prompt   (public)
    validate_listing       (public)
"""

from typing import Any, Dict, Optional

from termscloud.config import settings
from termscloud.config.prompts import LISTING_ANALYSIS_PROMPT, LISTING_CONTENT_TEMPLATE
from termscloud.config.request_schemas import ListingRequest
from termscloud.config.validation_constants import PROVIDER_GROQ
from termscloud.utils.exceptions import InputValidationError
from termscloud.utils.json_extraction import parse_llm_json
from termscloud.utils.llms import call_llm, provider_name
from termscloud.utils.logger import get_logger
from termscloud.utils.normalization import normalize_terms, source_label

logger = get_logger(__name__)


def build_listing_prompt(
    responsibilities: Optional[str], qualifications: Optional[str]
) -> str:
    """Fill the listing analysis prompt. Empty sections read "None provided"."""
    content = LISTING_CONTENT_TEMPLATE.format(
        responsibilities=responsibilities or "None provided",
        qualifications=qualifications or "None provided",
    )
    return LISTING_ANALYSIS_PROMPT.format(content=content)


def validate_listing(request: ListingRequest, enforce_limit: bool = False) -> None:
    """Check that a listing has content to analyze.

    Args:
        request: The pasted listing.
        enforce_limit: Also reject sections longer than CHARACTER_LIMIT.

    Raises:
        InputValidationError: If both sections are blank, or a section is too long.
    """
    responsibilities = request.responsibilities or ""
    qualifications = request.qualifications or ""

    if not responsibilities.strip() and not qualifications.strip():
        raise InputValidationError("No content provided")

    if enforce_limit and (
        len(responsibilities) > settings.CHARACTER_LIMIT
        or len(qualifications) > settings.CHARACTER_LIMIT
    ):
        raise InputValidationError("Character limit exceeded")


class ListingAnalyzerAgent:
    """Extracts weighted terms from a pasted job listing.

    Responsibilities:
    1. Build the analysis prompt from the pasted sections
    2. Call the listing LLM provider
    3. Parse the reply and stamp every term with the listing's (company, role)

    Args:
        provider (str): LLM provider to call (default: "groq").
    """

    def __init__(self, provider: str = PROVIDER_GROQ):
        self.provider = provider

    # ------------------------------
    # Public interface
    # ------------------------------
    def analyze(
        self,
        request: ListingRequest,
        default_company: str = settings.UNSPECIFIED_COMPANY,
        default_role: str = settings.UNSPECIFIED_ROLE,
        enforce_limit: bool = False,
    ) -> Dict[str, Any]:
        """Analyze a listing.

        Args:
            request: The pasted listing.
            default_company: Source company when the request has none.
            default_role: Source role when the request has none.
            enforce_limit: Reject sections longer than CHARACTER_LIMIT.

        Returns:
            Dict: {"terms": [...]}; every term carries a single source.

        Raises:
            InputValidationError: If there is nothing to analyze.
            UpstreamAPIError: If the LLM call fails.
            ResponseParsingError: If the reply holds no JSON object.
        """
        validate_listing(request, enforce_limit=enforce_limit)

        prompt = build_listing_prompt(request.responsibilities, request.qualifications)
        raw_response = call_llm(self.provider, prompt)

        # Listing replies are parsed as-is, without repair
        parsed = parse_llm_json(raw_response, provider_name(self.provider))

        source = {
            "company": source_label(request.company, default_company),
            "role": source_label(request.role, default_role),
        }
        terms = normalize_terms(parsed.get("terms"), default_sources=[source])

        logger.info(
            f"Extracted {len(terms)} terms from listing",
            extra={"extra_fields": {"provider": self.provider, **source}},
        )
        return {"terms": terms}
