"""
AWS Lambda Handler for the FastAPI Application.

Wraps the FastAPI app with Mangum so the same API can be served from API
Gateway or a Lambda Function URL.

Lambda Configuration:
    Handler: lambda_handler.handler
    Runtime: Python 3.12
    Timeout: 29 seconds (API Gateway limit; research calls can take ~20s)

Environment Variables:
    GROQ_API_KEY: API key for listing analysis
    PERPLEXITY_API_KEY: API key for market research
    FRONTEND_URL: Frontend domain for CORS configuration (optional)

Note:
    Cloud sessions live in the memory of one Lambda container. Clients that
    need to survive container recycling should use the stateless
    /api/analyze-skills and /api/auto-generate routes and merge locally.
"""

from mangum import Mangum

from termscloud.api.server import app
from termscloud.utils.logger import get_logger

logger = get_logger(__name__)
logger.info("Lambda handler initialized")

handler = Mangum(app, lifespan="off")
