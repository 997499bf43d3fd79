"""
Term Aggregation.

Merges freshly analyzed terms into accumulated state. Terms are keyed by their
verbatim term string: counts are summed and sources are unioned on the
(company, role) pair, keeping first-seen order. Results are sorted by
descending count (stable, so ties keep first-seen order).

FUNCTIONS:
    merge_terms      (public use)
    total_mentions   (public use)
    category_counts  (public use)
"""

from typing import Any, Dict, List

from termscloud.config.validation_constants import VALID_CATEGORIES
from termscloud.utils.normalization import is_count


def _source_key(source: Dict[str, Any]):
    return (source.get("company"), source.get("role"))


def _union_sources(
    sources: List[Dict[str, Any]], extra: List[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """Sources followed by the (company, role) pairs of extra not yet present."""
    merged = []
    seen = set()
    for source in list(sources) + list(extra):
        if _source_key(source) not in seen:
            merged.append(source)
            seen.add(_source_key(source))
    return merged


def merge_terms(
    existing_terms: List[Dict[str, Any]], new_terms: List[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """Merge new terms into existing terms.

    Neither input is mutated.

    Args:
        existing_terms: Accumulated terms.
        new_terms: Terms to fold in.

    Returns:
        Merged terms sorted by descending count.

    Example:
        merge_terms(
            [{"term": "react", "count": 2, "sources": [{"company": "A", "role": "X"}]}],
            [{"term": "react", "count": 3, "sources": [{"company": "A", "role": "X"},
                                                       {"company": "B", "role": "Y"}]}],
        )
        -> [{"term": "react", "count": 5, "sources": [{"company": "A", "role": "X"},
                                                      {"company": "B", "role": "Y"}]}]
    """
    term_map: Dict[str, Dict[str, Any]] = {}

    for term in existing_terms:
        term_map[term["term"]] = {
            **term,
            "count": term["count"] if is_count(term.get("count")) else 1,
        }

    for new_term in new_terms:
        key = new_term["term"]
        existing = term_map.get(key)

        if existing is None:
            term_map[key] = {
                **new_term,
                "count": new_term["count"] if is_count(new_term.get("count")) else 1,
                "sources": _union_sources([], new_term.get("sources") or []),
            }
            continue

        existing_count = existing["count"] if is_count(existing.get("count")) else 0
        new_count = new_term["count"] if is_count(new_term.get("count")) else 1

        term_map[key] = {
            **existing,
            "count": existing_count + new_count,
            "sources": _union_sources(
                existing.get("sources") or [], new_term.get("sources") or []
            ),
        }

    return sorted(term_map.values(), key=lambda t: t["count"], reverse=True)


def total_mentions(terms: List[Dict[str, Any]]) -> int:
    """Sum of all counts; non-numeric counts contribute nothing."""
    return sum(t["count"] for t in terms if is_count(t.get("count")))


def category_counts(terms: List[Dict[str, Any]]) -> Dict[str, int]:
    """Number of terms per category, plus the overall "all" count."""
    counts = {category: 0 for category in VALID_CATEGORIES}
    for term in terms:
        if term.get("category") in counts:
            counts[term["category"]] += 1
    counts["all"] = len(terms)
    return counts
