# ---------- TESTS FOR LISTING ANALYZER AGENT ----------

import pytest
from unittest.mock import patch

from termscloud.agents.analyzer import (
    ListingAnalyzerAgent,
    build_listing_prompt,
    validate_listing,
)
from termscloud.config.request_schemas import ListingRequest
from termscloud.utils.exceptions import InputValidationError, ResponseParsingError

mock_llm_response = """
Here is the analysis:
{
  "terms": [
    {"term": "product roadmap", "count": 3, "category": "responsibilities"},
    {"term": "SQL", "count": "several", "category": "qualification"}
  ]
}
"""


@pytest.fixture
def analyzer():
    """Create a ListingAnalyzerAgent instance for testing."""
    return ListingAnalyzerAgent()


def test_build_listing_prompt_fills_sections():
    """Test that both sections are placed in the prompt."""
    prompt = build_listing_prompt("Own the roadmap", None)
    assert "RESPONSIBILITIES:\nOwn the roadmap" in prompt
    assert "QUALIFICATIONS:\nNone provided" in prompt
    assert '"terms": [' in prompt


def test_build_listing_prompt_keeps_braces_in_user_text():
    """Test that user text with braces is inserted verbatim."""
    prompt = build_listing_prompt("Write {templated} configs", "")
    assert "Write {templated} configs" in prompt


def test_validate_listing_requires_content():
    """Test that blank sections are rejected."""
    with pytest.raises(InputValidationError) as exc_info:
        validate_listing(ListingRequest(responsibilities="  ", qualifications=None))
    assert exc_info.value.public_message == "No content provided"


def test_validate_listing_character_limit():
    """Test that the limit only applies when enforced."""
    request = ListingRequest(responsibilities="x" * 651)
    validate_listing(request)
    with pytest.raises(InputValidationError) as exc_info:
        validate_listing(request, enforce_limit=True)
    assert exc_info.value.public_message == "Character limit exceeded"


@patch("termscloud.agents.analyzer.call_llm", return_value=mock_llm_response)
def test_analyze_stamps_source_and_coerces(mock_call_llm, analyzer):
    """Test that terms get the listing's source and coerced fields."""
    result = analyzer.analyze(
        ListingRequest(
            company=" Acme ", role="Product Manager", responsibilities="Own the roadmap"
        )
    )

    assert mock_call_llm.call_args.args[0] == "groq"
    # Company and role stay out of the prompt
    assert "Acme" not in mock_call_llm.call_args.args[1]

    source = {"company": "Acme", "role": "Product Manager"}
    assert result == {
        "terms": [
            {"term": "product roadmap", "count": 3, "category": "responsibilities", "sources": [source]},
            {"term": "SQL", "count": 1, "category": "qualifications", "sources": [source]},
        ]
    }


@patch("termscloud.agents.analyzer.call_llm", return_value=mock_llm_response)
def test_analyze_default_source_labels(mock_call_llm, analyzer):
    """Test the labels used when company and role are blank."""
    result = analyzer.analyze(ListingRequest(qualifications="SQL"))
    assert result["terms"][0]["sources"] == [
        {"company": "Unspecified Company", "role": "Unspecified Role"}
    ]

    result = analyzer.analyze(
        ListingRequest(qualifications="SQL"),
        default_company="Unknown Company",
        default_role="Unknown Role",
    )
    assert result["terms"][0]["sources"] == [
        {"company": "Unknown Company", "role": "Unknown Role"}
    ]


@patch("termscloud.agents.analyzer.call_llm", return_value="Sorry, nothing to extract.")
def test_analyze_reply_without_json(mock_call_llm, analyzer):
    """Test that a reply without JSON yields no terms."""
    assert analyzer.analyze(ListingRequest(qualifications="SQL")) == {"terms": []}


@patch("termscloud.agents.analyzer.call_llm", return_value='{"terms": [{"term": "SQL",}]}')
def test_analyze_malformed_json_is_not_repaired(mock_call_llm, analyzer):
    """Test that listing replies are parsed without repair."""
    with pytest.raises(ResponseParsingError) as exc_info:
        analyzer.analyze(ListingRequest(qualifications="SQL"))
    assert exc_info.value.public_message == "Error parsing Groq response"


@patch("termscloud.agents.analyzer.call_llm")
def test_analyze_validates_before_calling(mock_call_llm, analyzer):
    """Test that the LLM is not called for empty listings."""
    with pytest.raises(InputValidationError):
        analyzer.analyze(ListingRequest())
    mock_call_llm.assert_not_called()
