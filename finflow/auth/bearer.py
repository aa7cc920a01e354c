"""
Authorization header parsing, shared by both authentication paths.
"""

from __future__ import annotations

from finflow.core.errors import UnauthenticatedError

BEARER_SCHEME = "Bearer"


def parse_bearer(header: str | None) -> str:
    """Extract the token from an Authorization header value."""
    if not header:
        raise UnauthenticatedError("Authorization header required")

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        raise UnauthenticatedError("Invalid authorization header format")

    return parts[1]
