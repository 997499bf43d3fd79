# ---------- TESTS FOR API SERVER ----------

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from termscloud.api.server import app
from termscloud.utils.exceptions import LLMConfigurationError, UpstreamAPIError

client = TestClient(app)

mock_listing_reply = """{
  "terms": [
    {"term": "product roadmap", "count": 3, "category": "responsibilities"},
    {"term": "SQL", "count": 2, "category": "qualifications"}
  ]
}"""

mock_research_reply = """{
  "terms": [
    {"term": "React development", "count": 8, "category": "qualifications",
     "sources": [{"company": "Meta", "role": "Frontend Engineer"}]}
  ],
  "totalListings": 12
}"""


def test_health():
    """Test the health endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@patch("termscloud.agents.analyzer.call_llm", return_value=mock_listing_reply)
def test_analyze_skills_success(mock_call_llm):
    """Test a successful listing analysis."""
    response = client.post(
        "/api/analyze-skills",
        json={"company": "Acme", "role": "PM", "responsibilities": "Own the roadmap"},
    )

    assert response.status_code == 200
    terms = response.json()["terms"]
    assert [t["term"] for t in terms] == ["product roadmap", "SQL"]
    assert all(t["sources"] == [{"company": "Acme", "role": "PM"}] for t in terms)
    assert "X-Request-ID" in response.headers


@patch(
    "termscloud.agents.analyzer.call_llm",
    return_value='{"terms": [{"term": "sql", "count": 1e400, "category": "qualifications"}]}',
)
def test_analyze_skills_overflowing_count(mock_call_llm):
    """Test that a count too large for a float is coerced instead of failing."""
    response = client.post("/api/analyze-skills", json={"qualifications": "SQL"})

    assert response.status_code == 200
    assert response.json()["terms"][0]["count"] == 1


@patch("termscloud.agents.analyzer.call_llm")
def test_analyze_skills_no_content(mock_call_llm):
    """Test that a listing without content is rejected."""
    response = client.post("/api/analyze-skills", json={"responsibilities": " "})

    assert response.status_code == 400
    assert response.json() == {"error": "No content provided"}
    mock_call_llm.assert_not_called()


@patch(
    "termscloud.agents.analyzer.call_llm",
    side_effect=UpstreamAPIError("Groq", 503, "service unavailable"),
)
def test_analyze_skills_upstream_error(mock_call_llm):
    """Test that the upstream status is passed through."""
    response = client.post("/api/analyze-skills", json={"qualifications": "SQL"})

    assert response.status_code == 503
    assert response.json() == {"error": "Error calling Groq API"}


@patch("termscloud.agents.analyzer.call_llm", return_value='{"terms": [,,]}')
def test_analyze_skills_parse_error(mock_call_llm):
    """Test the response when the reply holds broken JSON."""
    response = client.post("/api/analyze-skills", json={"qualifications": "SQL"})

    assert response.status_code == 500
    assert response.json() == {"error": "Error parsing Groq response"}


@patch(
    "termscloud.agents.analyzer.call_llm",
    side_effect=LLMConfigurationError("GROQ_API_KEY not found"),
)
def test_analyze_skills_missing_key(mock_call_llm):
    """Test that configuration details are not leaked."""
    response = client.post("/api/analyze-skills", json={"qualifications": "SQL"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


@patch("termscloud.agents.analyzer.call_llm", side_effect=RuntimeError("boom"))
def test_analyze_skills_unexpected_error(mock_call_llm):
    """Test the generic error for unexpected failures."""
    unsafe_client = TestClient(app, raise_server_exceptions=False)
    response = unsafe_client.post("/api/analyze-skills", json={"qualifications": "SQL"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_analyze_skills_validation_error():
    """Test validation error handling for wrongly typed fields."""
    response = client.post("/api/analyze-skills", json={"responsibilities": 123})

    assert response.status_code == 422
    data = response.json()
    assert "detail" in data
    assert "message" in data
    assert data["detail"][0]["field"] == "body -> responsibilities"


@patch("termscloud.agents.researcher.call_llm", return_value=mock_research_reply)
def test_auto_generate_success(mock_call_llm):
    """Test a successful research run."""
    response = client.post(
        "/api/auto-generate",
        json={"role": "Frontend Engineer", "experience": "Senior", "sector": "Media"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["totalListings"] == 12
    assert data["terms"][0]["sources"] == [{"company": "Meta", "role": "Frontend Engineer"}]
    assert "- Sector: Media" in mock_call_llm.call_args.args[1]


@patch("termscloud.agents.researcher.call_llm")
def test_auto_generate_missing_fields(mock_call_llm):
    """Test that role and experience are required."""
    response = client.post("/api/auto-generate", json={"role": "Frontend Engineer"})

    assert response.status_code == 400
    assert response.json() == {"error": "Role and experience level are required"}
    mock_call_llm.assert_not_called()


@patch(
    "termscloud.agents.researcher.call_llm",
    side_effect=UpstreamAPIError("Perplexity", 401, "invalid key"),
)
def test_auto_generate_upstream_error(mock_call_llm):
    """Test the research flow's upstream error message."""
    response = client.post(
        "/api/auto-generate", json={"role": "Frontend Engineer", "experience": "Senior"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Error calling Perplexity API"}


@patch("termscloud.agents.researcher.call_llm", return_value='["not", "an", "object"]')
def test_auto_generate_reply_without_object(mock_call_llm):
    """Test that a reply holding no JSON object yields no terms."""
    response = client.post(
        "/api/auto-generate", json={"role": "Frontend Engineer", "experience": "Senior"}
    )

    assert response.status_code == 200
    assert response.json() == {"terms": [], "totalListings": 0}


def test_character_count():
    """Test the character counter endpoint."""
    response = client.post("/api/character-count", json={"text": "x" * 700})

    assert response.status_code == 200
    data = response.json()
    assert data["over_limit"] is True
    assert data["remaining"] == -50
    assert data["level"] == "over"
