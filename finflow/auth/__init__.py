"""
Authentication and request identity.

Two separate ways to learn who is calling:

- finflow.auth.policies.require_auth: verifies a locally issued session
  token. Use it for everything that touches user data.
- finflow.auth.external.require_external_identity: reads claims from an
  externally issued token WITHOUT verifying it. Profile sync only.

The route-level dependencies are imported from their modules directly;
this package only re-exports the building blocks.
"""

from finflow.auth.bearer import parse_bearer
from finflow.auth.context import AuthContext, get_user_id, set_user_id
from finflow.auth.external import (
    ExternalIdentity,
    extract_external_identity,
    get_external_identity,
)
from finflow.auth.jwt import (
    TokenService,
    TokenError,
    TokenInvalidError,
    TokenSigningError,
)
from finflow.auth.passwords import PasswordHasher

__all__ = [
    # Context
    "AuthContext",
    "get_user_id",
    "set_user_id",
    "parse_bearer",
    # Tokens
    "TokenService",
    "TokenError",
    "TokenInvalidError",
    "TokenSigningError",
    # Passwords
    "PasswordHasher",
    # External identity
    "ExternalIdentity",
    "extract_external_identity",
    "get_external_identity",
]
