"""
View Models for the Table, Cloud and Input Widgets.

The browser renders whatever these functions return; no layout, styling or
animation is decided here. Every function is pure and works on term dicts.
"""

from typing import Any, Dict, List, Optional

from termscloud.config import settings
from termscloud.config.validation_constants import (
    CATEGORY_FILTER_ALL,
    CATEGORY_RESPONSIBILITIES,
    CATEGORY_QUALIFICATIONS,
    ROLE_FILTER_ALL,
)
from termscloud.utils.normalization import is_count
from termscloud.utils.term_merging import category_counts

EMPTY_CLOUD_MESSAGE = "No terms to display. Add job listings to build your cloud."


def _count(term: Dict[str, Any]) -> int:
    return term["count"] if is_count(term.get("count")) else 1


def _matches_category(term: Dict[str, Any], category: str) -> bool:
    return category == CATEGORY_FILTER_ALL or term.get("category") == category


def _matches_role(term: Dict[str, Any], role: str) -> bool:
    if role == ROLE_FILTER_ALL:
        return True
    return any(
        isinstance(source, dict) and str(source.get("role")) == role
        for source in term.get("sources") or []
    )


def table_view(
    terms: List[Dict[str, Any]],
    search: str = "",
    category: str = CATEGORY_FILTER_ALL,
    order: str = "desc",
) -> Dict[str, Any]:
    """Filter and sort terms for the table.

    Args:
        terms: Accumulated terms.
        search: Case-insensitive substring the term must contain.
        category: "all" or one of VALID_CATEGORIES.
        order: "desc" or "asc" by count.

    Returns:
        {"terms": [...], "showing": int, "total": int}
    """
    needle = (search or "").lower()
    rows = [
        term
        for term in terms
        if needle in str(term.get("term", "")).lower()
        and _matches_category(term, category)
    ]
    rows = sorted(rows, key=_count, reverse=(order != "asc"))
    return {"terms": rows, "showing": len(rows), "total": len(terms)}


def available_roles(terms: List[Dict[str, Any]]) -> List[str]:
    """Sorted unique roles across all term sources."""
    roles = {
        str(source.get("role") or settings.UNKNOWN_ROLE)
        for term in terms
        for source in term.get("sources") or []
        if isinstance(source, dict)
    }
    return sorted(roles)


def _font_size(weight: float, variant: str) -> str:
    if variant == "responsive":
        vw = round(weight * settings.CLOUD_RESPONSIVE_VW_SCALE, 4)
        return f"calc({settings.CLOUD_RESPONSIVE_BASE_PX}px + {vw}vw)"
    px = settings.CLOUD_MIN_FONT_PX + weight * (
        settings.CLOUD_MAX_FONT_PX - settings.CLOUD_MIN_FONT_PX
    )
    return f"{round(px, 2)}px"


def _empty_message(category: str, role: str) -> str:
    if category == CATEGORY_FILTER_ALL and role == ROLE_FILTER_ALL:
        return EMPTY_CLOUD_MESSAGE
    label = {
        CATEGORY_RESPONSIBILITIES: "responsibilities",
        CATEGORY_QUALIFICATIONS: "skills",
    }.get(category, "terms")
    message = f"No {label} found"
    if role != ROLE_FILTER_ALL:
        message += f" for role: {role}"
    return message + "."


def cloud_view(
    terms: List[Dict[str, Any]],
    category: str = CATEGORY_FILTER_ALL,
    role: str = ROLE_FILTER_ALL,
    variant: str = "fixed",
) -> Dict[str, Any]:
    """Weighted words for the cloud.

    Only the first CLOUD_MAX_TERMS matching terms are placed; weights are
    relative to the largest count among all matching terms.

    Args:
        terms: Accumulated terms, already sorted by descending count.
        category: "all" or one of VALID_CATEGORIES.
        role: "all" or a role from available_roles().
        variant: "fixed" pixel sizes or "responsive" viewport-relative sizes.

    Returns:
        {"words": [...], "available_roles": [...], "category_counts": {...},
         "empty_message": str or None}
    """
    matching = [
        term
        for term in terms
        if _matches_category(term, category) and _matches_role(term, role)
    ]

    words = []
    if matching:
        max_count = max(_count(term) for term in matching) or 1
        for term in matching[: settings.CLOUD_MAX_TERMS]:
            weight = _count(term) / max_count
            words.append(
                {
                    "term": str(term.get("term") or settings.UNKNOWN_TERM),
                    "count": _count(term),
                    "category": term.get("category") or CATEGORY_QUALIFICATIONS,
                    "weight": round(weight, 4),
                    "font_size": _font_size(weight, variant),
                }
            )

    return {
        "words": words,
        "available_roles": available_roles(terms),
        "category_counts": category_counts(terms),
        "empty_message": None if words else _empty_message(category, role),
    }


def suggestions(
    terms: List[Dict[str, Any]], field: str, query: Optional[str] = ""
) -> List[str]:
    """Autocomplete values for a source field seen in the accumulated terms.

    Args:
        terms: Accumulated terms.
        field: "company" or "role".
        query: Case-insensitive substring filter; empty returns every value.

    Returns:
        Sorted distinct values.
    """
    values = {
        str(source[field])
        for term in terms
        for source in term.get("sources") or []
        if isinstance(source, dict) and source.get(field)
    }
    needle = (query or "").lower()
    return sorted(value for value in values if needle in value.lower())


def character_count_status(text: Optional[str]) -> Dict[str, Any]:
    """Length of a pasted section against CHARACTER_LIMIT.

    Returns:
        {"count", "limit", "remaining", "over_limit", "level", "progress"} where
        level is "over" past the limit, "warning" when under 10% of the limit
        remains, else "ok"; progress is the capped fill percentage.
    """
    count = len(text or "")
    limit = settings.CHARACTER_LIMIT
    remaining = limit - count

    if remaining < 0:
        level = "over"
    elif remaining < limit * settings.CHARACTER_WARNING_RATIO:
        level = "warning"
    else:
        level = "ok"

    return {
        "count": count,
        "limit": limit,
        "remaining": remaining,
        "over_limit": count > limit,
        "level": level,
        "progress": min(count / limit * 100, 100),
    }
