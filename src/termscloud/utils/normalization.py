# ---------- TERM NORMALIZATION FUNCTIONS ----------

import math
from typing import Any, Dict, List, Optional

from termscloud.config import settings
from termscloud.config.validation_constants import (
    CATEGORY_QUALIFICATIONS,
    CATEGORY_RESPONSIBILITIES,
)


def is_count(value: Any) -> bool:
    """True for finite real numbers usable as a count (bools excluded)."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def normalize_count(value: Any, default: int = 1, clamp: bool = False) -> int:
    """
    Coerce an untrusted count to a non-negative integer.

    Args:
        value: Count as reported by the model or client.
        default: Used when value is not a finite number.
        clamp: Clamp to [MIN_TERM_COUNT, MAX_TERM_COUNT].

    Returns:
        count:
    """

    if not is_count(value):
        return default
    if clamp:
        value = max(settings.MIN_TERM_COUNT, min(settings.MAX_TERM_COUNT, value))
    return max(0, int(value))


def normalize_category(value: Any) -> str:
    """Anything other than "responsibilities" is a qualification."""
    if value == CATEGORY_RESPONSIBILITIES:
        return CATEGORY_RESPONSIBILITIES
    return CATEGORY_QUALIFICATIONS


def source_label(value: Optional[str], default: str) -> str:
    """Trimmed label, or default when blank."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def normalize_sources(raw_sources: Any) -> Optional[List[Dict[str, str]]]:
    """
    Coerce a model-reported sources list.

    Args:
        raw_sources: Value of a term's "sources" key.

    Returns:
        List of {company, role} dicts, or None when raw_sources is not a list.
    """

    if not isinstance(raw_sources, list):
        return None

    sources = []
    for source in raw_sources:
        if not isinstance(source, dict):
            continue
        sources.append(
            {
                "company": str(source.get("company") or settings.UNKNOWN_COMPANY),
                "role": str(source.get("role") or settings.UNKNOWN_ROLE),
            }
        )
    return sources


def normalize_terms(
    raw_terms: Any,
    default_sources: List[Dict[str, str]],
    clamp: bool = False,
    keep_sources: bool = False,
) -> List[Dict[str, Any]]:
    """
    Coerce the "terms" value of a model reply into term dicts.

    Args:
        raw_terms: The reply's "terms" value; anything but a list yields [].
        default_sources: Sources for terms that bring none of their own
            (or for every term when keep_sources is False).
        clamp: Clamp counts to the 1-10 scale used by the research flow.
        keep_sources: Keep a term's own sources when it reports a list.

    Returns:
        normalized:
    """

    if not isinstance(raw_terms, list):
        return []

    normalized = []
    for raw in raw_terms:
        if not isinstance(raw, dict):
            continue

        sources = normalize_sources(raw.get("sources")) if keep_sources else None
        if sources is None:
            sources = [dict(source) for source in default_sources]

        normalized.append(
            {
                "term": str(raw.get("term") or settings.UNKNOWN_TERM),
                "count": normalize_count(raw.get("count"), clamp=clamp),
                "category": normalize_category(raw.get("category")),
                "sources": sources,
            }
        )

    return normalized
