"""
Configuration Module for Terms & Skills Cloud.

Re-exports the schemas and constants most modules need:

- request_schemas.py: API request bodies
- term_schemas.py: Term / TermSource / TermsResponse
- validation_constants.py: All VALID_* constants
- prompts.py: LLM prompt templates
- settings.py: Environment-driven settings and fixed constants

For new code, import directly from the focused modules:
    from termscloud.config.term_schemas import Term
    from termscloud.config.validation_constants import VALID_CATEGORIES
"""

from termscloud.config.request_schemas import (
    ListingRequest,
    ResearchRequest,
    CharacterCountRequest,
)

from termscloud.config.term_schemas import (
    Category,
    Term,
    TermSource,
    TermsResponse,
)

from termscloud.config.validation_constants import (
    VALID_CATEGORIES,
    VALID_CATEGORY_FILTERS,
    VALID_SORT_ORDERS,
    VALID_CLOUD_VARIANTS,
    VALID_SUGGESTION_FIELDS,
    VALID_PROVIDERS,
)

__all__ = [
    # Request schemas
    "ListingRequest",
    "ResearchRequest",
    "CharacterCountRequest",
    # Term schemas
    "Category",
    "Term",
    "TermSource",
    "TermsResponse",
    # Validation constants
    "VALID_CATEGORIES",
    "VALID_CATEGORY_FILTERS",
    "VALID_SORT_ORDERS",
    "VALID_CLOUD_VARIANTS",
    "VALID_SUGGESTION_FIELDS",
    "VALID_PROVIDERS",
]
