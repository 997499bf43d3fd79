"""
FastAPI server for the Terms & Skills Cloud backend.

The server receives pasted job listings or research criteria from the
frontend, has an LLM extract weighted terms from them, and returns the terms
either directly (stateless analysis routes) or merged into a cloud session
whose table and word-cloud views the frontend reads back.

To run the server:
    python -m uvicorn termscloud.api.server:app --reload --app-dir src
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from termscloud.api.handlers.exceptions import (
    terms_cloud_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from termscloud.api.middleware.logging import log_requests_middleware
from termscloud.api.routes import analysis, clouds
from termscloud.config.settings import FRONTEND_URL
from termscloud.utils.exceptions import TermsCloudError
from termscloud.utils.logger import configure_logging

# ------------- FastAPI Setup -------------

configure_logging()

app = FastAPI(
    title="Terms & Skills Cloud Backend",
    description="API that extracts in-demand skills and responsibilities from job listings",
    version="1.0",
)

origins = [
    "http://localhost:3000",  # local development
    "http://127.0.0.1:3000",  # local development
]

# Add production frontend URL from environment variable if provided
if FRONTEND_URL and FRONTEND_URL not in origins:
    origins.append(FRONTEND_URL)

# For development, allow all origins if no production URL is set
if not FRONTEND_URL:
    origins.append("*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware
app.middleware("http")(log_requests_middleware)

# Add exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(TermsCloudError, terms_cloud_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Include routers
app.include_router(analysis.router)
app.include_router(clouds.router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


# For running as standalone server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
