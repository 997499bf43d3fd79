"""
Request Logging Middleware.

Logs all incoming HTTP requests with structured context and echoes the
correlation id back in the X-Request-ID response header.
"""

import time
import uuid
from typing import Any

from fastapi import Request

from termscloud.api.utils.request_helpers import get_client_ip
from termscloud.utils.logger import (
    clear_correlation_ids,
    get_logger,
    set_correlation_id,
)

logger = get_logger(__name__)


async def log_requests_middleware(request: Request, call_next: Any) -> Any:
    """Log every request and its response status and duration.

    Args:
        request: FastAPI Request object containing request details.
        call_next: Callable that processes the request and returns the response.

    Returns:
        Response: The response from the next middleware/handler.
    """
    start_time = time.time()
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    clear_correlation_ids()
    set_correlation_id(request_id=request_id)

    logger.info(
        "HTTP request",
        extra={
            "extra_fields": {
                "http_method": request.method,
                "http_path": request.url.path,
                "client_ip": get_client_ip(request),
                "user_agent": request.headers.get("User-Agent", ""),
            }
        },
    )

    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000

    logger.info(
        "HTTP response",
        extra={
            "extra_fields": {
                "http_method": request.method,
                "http_path": request.url.path,
                "http_status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            }
        },
    )

    response.headers["X-Request-ID"] = request_id
    return response
