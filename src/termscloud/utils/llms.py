"""
LLM Utilities - Chat-Completion Calls to Groq and Perplexity.

Both providers expose OpenAI-compatible chat-completion endpoints, so a single
OpenAI SDK client per provider (pointed at the provider's base URL) serves all
LLM traffic.

Key Functions:
    - get_client: Lazily create and cache the client for a provider
    - call_llm: Send one user message and return the reply text

Providers:
    - "groq": listing analysis (GROQ_API_KEY, GROQ_MODEL)
    - "perplexity": online market research (PERPLEXITY_API_KEY, PERPLEXITY_MODEL)

Note:
    Calls are not retried. Every SDK failure is surfaced as UpstreamAPIError
    carrying the upstream HTTP status where one exists.
"""

import os
from typing import Dict, Optional

from openai import OpenAI
from openai import APIError, APIStatusError

from termscloud.config import settings
from termscloud.config.validation_constants import (
    PROVIDER_GROQ,
    PROVIDER_PERPLEXITY,
    VALID_PROVIDERS,
)
from termscloud.utils.exceptions import (
    LLMConfigurationError,
    ResponseParsingError,
    UpstreamAPIError,
)
from termscloud.utils.logger import get_logger, log_performance

logger = get_logger(__name__)

PROVIDERS = {
    PROVIDER_GROQ: {
        "name": "Groq",
        "base_url": settings.GROQ_BASE_URL,
        "api_key_env": "GROQ_API_KEY",
        "model": settings.GROQ_MODEL,
        "max_tokens": settings.GROQ_MAX_TOKENS,
    },
    PROVIDER_PERPLEXITY: {
        "name": "Perplexity",
        "base_url": settings.PERPLEXITY_BASE_URL,
        "api_key_env": "PERPLEXITY_API_KEY",
        "model": settings.PERPLEXITY_MODEL,
        "max_tokens": None,
    },
}

# Initialized lazily, one client per provider
_clients: Dict[str, OpenAI] = {}


def provider_name(provider: str) -> str:
    """Display name of a provider, used in error messages."""
    if provider not in VALID_PROVIDERS:
        raise LLMConfigurationError(f"Unknown LLM provider: {provider}")
    return PROVIDERS[provider]["name"]


def get_client(provider: str) -> OpenAI:
    """Get or create the OpenAI-compatible client for a provider.

    The API key is read from the environment on first use so that the server
    can start (and serve non-LLM routes) without every key configured.

    Args:
        provider: One of VALID_PROVIDERS.

    Returns:
        OpenAI: Client bound to the provider's base URL.

    Raises:
        LLMConfigurationError: If the provider is unknown or its API key is missing.
    """
    if provider in _clients:
        return _clients[provider]

    if provider not in VALID_PROVIDERS:
        raise LLMConfigurationError(f"Unknown LLM provider: {provider}")
    config = PROVIDERS[provider]

    api_key = os.getenv(config["api_key_env"])
    if not api_key:
        error_msg = (
            f"{config['api_key_env']} not found in environment variables. "
            f"Please set {config['api_key_env']} in your .env file or environment."
        )
        logger.error(error_msg)
        raise LLMConfigurationError(error_msg)

    _clients[provider] = OpenAI(api_key=api_key, base_url=config["base_url"])
    return _clients[provider]


def reset_clients() -> None:
    """Drop cached clients (used after the environment changes)."""
    _clients.clear()


def call_llm(
    provider: str,
    prompt: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> str:
    """Send a single user message to a provider and return the reply text.

    Args:
        provider: One of VALID_PROVIDERS.
        prompt: The full instruction block, sent as the only user message.
        temperature: Sampling temperature (default: settings.LLM_TEMPERATURE).
        max_tokens: Reply token cap. Defaults to the provider's configured cap;
            omitted from the request when the provider has none.

    Returns:
        The content of the first choice.

    Raises:
        LLMConfigurationError: If the provider is unknown or unconfigured.
        UpstreamAPIError: If the API call fails for any reason.
        ResponseParsingError: If the envelope holds no message content.
    """
    client = get_client(provider)
    config = PROVIDERS[provider]

    request = {
        "model": config["model"],
        "messages": [{"role": "user", "content": prompt}],
        "temperature": settings.LLM_TEMPERATURE if temperature is None else temperature,
    }
    max_tokens = max_tokens or config["max_tokens"]
    if max_tokens:
        request["max_tokens"] = max_tokens

    try:
        with log_performance("llm_call", provider=provider, model=config["model"]):
            response = client.chat.completions.create(**request)
    except APIStatusError as e:
        logger.error(
            f"{config['name']} API error",
            extra={
                "extra_fields": {
                    "provider": provider,
                    "upstream_status": e.status_code,
                    "error": str(e),
                }
            },
        )
        raise UpstreamAPIError(config["name"], e.status_code, str(e)) from e
    except APIError as e:
        # Connection errors and timeouts have no upstream status
        logger.error(
            f"{config['name']} API unreachable",
            extra={"extra_fields": {"provider": provider, "error": str(e)}},
        )
        raise UpstreamAPIError(config["name"], None, str(e)) from e

    if not response or not getattr(response, "choices", None):
        raise ResponseParsingError(config["name"], "empty choices array")

    message = response.choices[0].message
    text = getattr(message, "content", None) if message else None
    if text is None:
        raise ResponseParsingError(config["name"], "missing message content")

    # Log first 500 characters for debugging (full response may be very long)
    logger.debug("LLM response: %s", text[:500])

    return text
