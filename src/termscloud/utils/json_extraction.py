"""
JSON Extraction and Repair for LLM Replies.

LLM replies often wrap the requested JSON in explanatory text or markdown, and
online models occasionally emit JSON with trailing commas, unquoted keys or a
truncated tail. This module pulls the JSON object out of the reply and, where
the caller asks for it, repairs it with json_repair before parsing.
"""

import json
import re
from typing import Any, Dict

from json_repair import repair_json

from termscloud.utils.exceptions import ResponseParsingError
from termscloud.utils.logger import get_logger

logger = get_logger(__name__)

# Greedy: from the first "{" to the last "}" in the reply
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


def extract_json(text: str) -> str:
    """Extract the JSON object substring from raw LLM reply text.

    Args:
        text: The raw reply (may contain markdown fences, explanations, etc.)

    Returns:
        The span from the first opening brace to the last closing brace, or
        "{}" when the reply contains no such span.

    Example:
        Input: 'Here you go: ```json\\n{"terms": []}\\n```'
        Output: '{"terms": []}'
    """
    match = JSON_OBJECT_PATTERN.search(text or "")
    return match.group(0) if match else "{}"


def parse_llm_json(text: str, provider: str, repair: bool = False) -> Dict[str, Any]:
    """Extract, optionally repair, and parse the JSON object in an LLM reply.

    Args:
        text: The raw reply text.
        provider: Provider display name, used in the error message.
        repair: Run json_repair on the extracted span before parsing.

    Returns:
        The parsed JSON object.

    Raises:
        ResponseParsingError: If the span cannot be parsed or is not an object.
    """
    json_string = extract_json(text)
    if repair:
        json_string = repair_json(json_string)

    try:
        parsed = json.loads(json_string)
    except (TypeError, ValueError) as e:
        logger.error(
            f"Error parsing {provider} response",
            extra={"extra_fields": {"error": str(e), "raw_response": text}},
        )
        raise ResponseParsingError(provider, str(e), text) from e

    if not isinstance(parsed, dict):
        logger.error(
            f"Error parsing {provider} response",
            extra={
                "extra_fields": {
                    "error": f"expected a JSON object, got {type(parsed).__name__}",
                    "raw_response": text,
                }
            },
        )
        raise ResponseParsingError(provider, "reply is not a JSON object", text)

    return parsed
