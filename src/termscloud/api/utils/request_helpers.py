"""
Request Helper Functions.
"""

from fastapi import Request


def get_client_ip(request: Request) -> str:
    """Extract client IP address from a request.

    Checks common proxy headers (X-Forwarded-For, X-Real-IP) before falling back
    to the direct client host.

    Args:
        request: FastAPI Request object.

    Returns:
        str: Client IP address, or "unknown".
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # X-Forwarded-For can contain multiple IPs, take the first one
        ip = forwarded_for.split(",")[0].strip()
        if ip:
            return ip

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"
