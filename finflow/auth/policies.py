"""
Request authentication - the verified bearer-token path.

Use `ctx: AuthContext = Depends(require_auth)` on any route that needs a
caller identity. The dependency runs before the route body:

    no Authorization header          -> 401 "Authorization header required"
    not exactly "Bearer <token>"     -> 401 "Invalid authorization header format"
    token fails signature/expiry     -> 401 "Invalid or expired token"
    token verifies                   -> identity stored on the request,
                                        AuthContext handed to the route

A rejection raises UnauthenticatedError, so the route body never runs.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request

from finflow.auth.bearer import parse_bearer
from finflow.auth.context import AuthContext, set_user_id
from finflow.auth.jwt import TokenInvalidError
from finflow.container import Container, get_container
from finflow.core.errors import UnauthenticatedError
from finflow.integrations.sentry import set_user

logger = logging.getLogger(__name__)


async def require_auth(
    request: Request,
    container: Container = Depends(get_container),
) -> AuthContext:
    """Authenticate the request with a locally issued session token."""
    token = parse_bearer(request.headers.get("Authorization"))

    try:
        user_id = container.tokens.verify(token)
    except TokenInvalidError as e:
        logger.debug(f"Rejected bearer token on {request.url.path}: {e}")
        raise UnauthenticatedError("Invalid or expired token") from e

    set_user_id(request, user_id)
    set_user(user_id)
    return AuthContext(user_id=user_id)
