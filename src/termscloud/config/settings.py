"""
Runtime Settings for Terms & Skills Cloud.

Values that deployments tune come from environment variables (a local ``.env``
file is loaded first); fixed application constants live alongside them.

Environment Variables:
    GROQ_API_KEY: API key for the Groq chat-completion endpoint (listing analysis)
    GROQ_MODEL: Groq model name (default: "llama3-70b-8192")
    GROQ_MAX_TOKENS: Max tokens for Groq replies (default: 4000)
    PERPLEXITY_API_KEY: API key for the Perplexity endpoint (market research)
    PERPLEXITY_MODEL: Perplexity model name (default: "llama-3.1-sonar-large-128k-online")
    LLM_TEMPERATURE: Sampling temperature for both providers (default: 0.1)
    FRONTEND_URL: Production frontend origin added to the CORS allow-list
    LOG_LEVEL: Root log level (default: "INFO")
    CLOUD_TTL_SECONDS: Idle cloud sessions expire after this long (default: 3600)
"""

import os

from dotenv import load_dotenv

load_dotenv()

# ---------- LLM PROVIDERS ----------

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_MODEL = os.getenv("GROQ_MODEL", "llama3-70b-8192")
GROQ_MAX_TOKENS = int(os.getenv("GROQ_MAX_TOKENS", "4000"))

PERPLEXITY_BASE_URL = "https://api.perplexity.ai"
PERPLEXITY_MODEL = os.getenv("PERPLEXITY_MODEL", "llama-3.1-sonar-large-128k-online")

LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.1"))

# ---------- SERVER ----------

FRONTEND_URL = os.getenv("FRONTEND_URL", "")

# ---------- LISTING INPUT ----------

# Max characters per pasted section (responsibilities / qualifications)
CHARACTER_LIMIT = 650
# Below this share of the limit remaining, the counter turns to a warning
CHARACTER_WARNING_RATIO = 0.1

# ---------- TERMS ----------

# Counts reported by the research flow are clamped to this range
MIN_TERM_COUNT = 1
MAX_TERM_COUNT = 10

# Labels used when the listing analysis response is stamped with its source
UNSPECIFIED_COMPANY = "Unspecified Company"
UNSPECIFIED_ROLE = "Unspecified Role"
# Labels used when a source is added to a cloud session or repaired from research output
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_ROLE = "Unknown Role"
UNKNOWN_TERM = "Unknown Term"
# Company label for research terms that came back without any sources
MARKET_RESEARCH_COMPANY = "Market Research"

# ---------- CLOUD VIEW ----------

# Only the top N terms are placed in the cloud
CLOUD_MAX_TERMS = 100
# Fixed-size cloud (manual listings)
CLOUD_MIN_FONT_PX = 14
CLOUD_MAX_FONT_PX = 42
# Responsive cloud (auto-generated terms)
CLOUD_RESPONSIVE_BASE_PX = 6
CLOUD_RESPONSIVE_VW_SCALE = 2.5

# ---------- CLOUD SESSIONS ----------

# Idle sessions are dropped after this many seconds (default: 1 hour)
CLOUD_TTL_SECONDS = int(os.getenv("CLOUD_TTL_SECONDS", "3600"))
