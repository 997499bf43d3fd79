"""
Custom exceptions for Terms & Skills Cloud.

Each exception carries the HTTP status and user-facing message the API answers
with; see termscloud.api.handlers.exceptions for the mapping to responses.
"""

from typing import Optional


class TermsCloudError(Exception):
    """Base class for all application errors."""

    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class InputValidationError(TermsCloudError):
    """Raised when required input is missing or exceeds its limits."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class LLMConfigurationError(TermsCloudError):
    """Raised when an LLM provider is unknown or has no API key configured."""

    pass


class UpstreamAPIError(TermsCloudError):
    """Raised when the chat-completion API call fails.

    Args:
        provider: Display name of the provider, e.g. "Groq".
        status_code: HTTP status returned upstream (502 when there was none).
        detail: Underlying error text, logged but never returned to the client.
    """

    def __init__(self, provider: str, status_code: Optional[int] = None, detail: str = ""):
        super().__init__(f"Error calling {provider} API")
        self.provider = provider
        self.status_code = status_code or 502
        self.public_message = self.message
        self.detail = detail


class ResponseParsingError(TermsCloudError):
    """Raised when the LLM reply holds no usable JSON object."""

    def __init__(self, provider: str, detail: str = "", raw_response: str = ""):
        super().__init__(f"Error parsing {provider} response")
        self.provider = provider
        self.public_message = self.message
        self.detail = detail
        self.raw_response = raw_response


class CloudNotFoundError(TermsCloudError):
    """Raised when a cloud session id is unknown."""

    status_code = 404
    public_message = "Cloud not found"


class AnalysisInProgressError(TermsCloudError):
    """Raised when a cloud session already has an analysis in flight."""

    status_code = 409
    public_message = "Analysis already in progress"
