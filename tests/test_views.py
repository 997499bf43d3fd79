# ---------- TESTS FOR VIEW MODELS ----------

import pytest

from termscloud.utils.views import (
    EMPTY_CLOUD_MESSAGE,
    available_roles,
    character_count_status,
    cloud_view,
    suggestions,
    table_view,
)

mock_terms = [
    {
        "term": "React development",
        "count": 8,
        "category": "qualifications",
        "sources": [
            {"company": "Meta", "role": "Frontend Engineer"},
            {"company": "Netflix", "role": "Senior Software Engineer"},
        ],
    },
    {
        "term": "team collaboration",
        "count": 4,
        "category": "responsibilities",
        "sources": [{"company": "Google", "role": "Software Engineer II"}],
    },
    {
        "term": "code review",
        "count": 2,
        "category": "responsibilities",
        "sources": [{"company": "Meta", "role": "Frontend Engineer"}],
    },
]


def test_table_view_defaults():
    """Test that the default table lists every term by descending count."""
    view = table_view(mock_terms)
    assert [t["term"] for t in view["terms"]] == [
        "React development",
        "team collaboration",
        "code review",
    ]
    assert view["showing"] == 3
    assert view["total"] == 3


def test_table_view_search_is_case_insensitive():
    """Test substring search ignoring case."""
    view = table_view(mock_terms, search="REACT")
    assert [t["term"] for t in view["terms"]] == ["React development"]
    assert view["showing"] == 1
    assert view["total"] == 3


def test_table_view_category_and_ascending():
    """Test the category filter with ascending order."""
    view = table_view(mock_terms, category="responsibilities", order="asc")
    assert [t["term"] for t in view["terms"]] == ["code review", "team collaboration"]


def test_table_view_no_results():
    """Test that an unmatched search returns no rows."""
    view = table_view(mock_terms, search="kubernetes")
    assert view["terms"] == []
    assert view["showing"] == 0


def test_available_roles_sorted_unique():
    """Test that roles are collected once and sorted."""
    assert available_roles(mock_terms) == [
        "Frontend Engineer",
        "Senior Software Engineer",
        "Software Engineer II",
    ]


def test_cloud_view_fixed_font_sizes():
    """Test that font sizes scale linearly between 14px and 42px."""
    view = cloud_view(mock_terms)
    words = {w["term"]: w for w in view["words"]}
    assert words["React development"]["weight"] == 1.0
    assert words["React development"]["font_size"] == "42.0px"
    assert words["team collaboration"]["font_size"] == "28.0px"
    assert words["code review"]["font_size"] == "21.0px"
    assert view["empty_message"] is None
    assert view["category_counts"]["all"] == 3


def test_cloud_view_responsive_font_sizes():
    """Test viewport-relative sizing for the responsive cloud."""
    view = cloud_view(mock_terms, variant="responsive")
    assert view["words"][0]["font_size"] == "calc(6px + 2.5vw)"
    assert view["words"][1]["font_size"] == "calc(6px + 1.25vw)"


def test_cloud_view_role_filter():
    """Test that the role filter keeps terms seen in that role."""
    view = cloud_view(mock_terms, role="Frontend Engineer")
    assert [w["term"] for w in view["words"]] == ["React development", "code review"]
    # Roles are listed from all terms, not just the filtered ones
    assert len(view["available_roles"]) == 3


def test_cloud_view_weights_relative_to_filtered_max():
    """Test that weights use the largest count among the filtered terms."""
    view = cloud_view(mock_terms, category="responsibilities")
    assert view["words"][0]["weight"] == 1.0
    assert view["words"][1]["weight"] == 0.5


def test_cloud_view_caps_at_100_terms():
    """Test that at most 100 words are placed."""
    terms = [
        {"term": f"term {i}", "count": 200 - i, "category": "qualifications", "sources": []}
        for i in range(150)
    ]
    view = cloud_view(terms)
    assert len(view["words"]) == 100
    assert view["words"][-1]["term"] == "term 99"


def test_cloud_view_empty_messages():
    """Test the messages shown when nothing matches."""
    assert cloud_view([])["empty_message"] == EMPTY_CLOUD_MESSAGE
    assert (
        cloud_view(mock_terms, category="qualifications", role="Software Engineer II")[
            "empty_message"
        ]
        == "No skills found for role: Software Engineer II."
    )
    assert (
        cloud_view(mock_terms, role="Designer")["empty_message"]
        == "No terms found for role: Designer."
    )


def test_suggestions():
    """Test autocomplete values from term sources."""
    assert suggestions(mock_terms, "company") == ["Google", "Meta", "Netflix"]
    assert suggestions(mock_terms, "company", "e") == ["Google", "Meta", "Netflix"]
    assert suggestions(mock_terms, "company", "NET") == ["Netflix"]
    assert suggestions(mock_terms, "role", "senior") == ["Senior Software Engineer"]


@pytest.mark.parametrize(
    "length,level,over",
    [(0, "ok", False), (585, "ok", False), (586, "warning", False), (650, "warning", False), (651, "over", True)],
)
def test_character_count_status(length, level, over):
    """Test the counter levels around the 650 character limit."""
    status = character_count_status("x" * length)
    assert status["count"] == length
    assert status["remaining"] == 650 - length
    assert status["level"] == level
    assert status["over_limit"] is over
    assert status["progress"] <= 100
