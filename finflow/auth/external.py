"""
External identity bridge - the UNVERIFIED bearer-token path.

Used only by the profile sync endpoint. The token is issued by an outside
identity provider; this module reads its claims WITHOUT checking the
signature. That is safe only when an upstream gateway has already verified
the token before it reaches us. Nothing here proves who the caller is, so
this path must never be used to authorize access to owned resources.

Kept apart from finflow.auth.policies on purpose: routes that depend on
require_external_identity get an ExternalIdentity, never an AuthContext.
"""

from __future__ import annotations

import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request
from jwt.utils import base64url_decode

from finflow.auth.bearer import parse_bearer
from finflow.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

_EXTERNAL_IDENTITY_KEY = "_finflow_external_identity"


@dataclass(frozen=True)
class ExternalIdentity:
    """Claims taken from an externally issued token."""

    auth_id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""


def _claim(claims: dict[str, Any], *names: str) -> str:
    """First string-valued claim among `names`, else ""."""
    for name in names:
        value = claims.get(name)
        if isinstance(value, str):
            return value
    return ""


def _decode_payload(token: str) -> dict[str, Any]:
    """Claims from the middle segment. Header and signature are never read."""
    parts = token.split(".")
    if len(parts) != 3:
        raise ValueError("token must have three segments")

    claims = json.loads(base64url_decode(parts[1]))
    if not isinstance(claims, dict):
        raise ValueError("payload is not a JSON object")
    return claims


def extract_external_identity(token: str) -> ExternalIdentity:
    """
    Decode the payload segment of a JWT without verifying it.

    Raises:
        UnauthenticatedError: not a three-part token, payload not
            base64url JSON object, or empty subject
    """
    try:
        claims = _decode_payload(token)
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        logger.debug(f"Undecodable external token: {e}")
        raise UnauthenticatedError("Invalid or expired token") from e

    auth_id = _claim(claims, "sub")
    if not auth_id:
        raise UnauthenticatedError("Invalid or expired token")

    return ExternalIdentity(
        auth_id=auth_id,
        first_name=_claim(claims, "first_name", "given_name"),
        last_name=_claim(claims, "last_name", "family_name"),
        email=_claim(claims, "email"),
    )


def get_external_identity(request: Request) -> tuple[ExternalIdentity | None, bool]:
    """Return (identity, ok) as stored by require_external_identity."""
    identity = getattr(request.state, _EXTERNAL_IDENTITY_KEY, None)
    if isinstance(identity, ExternalIdentity):
        return identity, True
    return None, False


async def require_external_identity(request: Request) -> ExternalIdentity:
    """FastAPI dependency for routes fed by the external identity provider."""
    token = parse_bearer(request.headers.get("Authorization"))
    identity = extract_external_identity(token)
    setattr(request.state, _EXTERNAL_IDENTITY_KEY, identity)
    return identity
