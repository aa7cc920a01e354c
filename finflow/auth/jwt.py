# =============================================================================
# Session Tokens
# =============================================================================
#
# Stateless signed tokens:
#   - issue(user_id) at login
#   - verify(token) on every authenticated request
#
# Nothing is stored server-side. A token is valid while its HMAC signature
# checks out against the current secret and now is within [nbf, exp].
# There is no revocation list.
#
# =============================================================================

from datetime import timedelta
import logging

import jwt

from finflow.config import Settings
from finflow.core.utils import utc_now

logger = logging.getLogger(__name__)

# Only HMAC algorithms are accepted when verifying
HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")


class TokenError(Exception):
    """Base exception for token errors."""
    pass


class TokenInvalidError(TokenError):
    """Signature, structure, algorithm or validity window check failed."""
    pass


class TokenSigningError(TokenError):
    """The token could not be signed."""
    pass


class TokenService:
    """Issues and verifies HMAC-signed session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
    ):
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported signing algorithm: {algorithm}")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(hours=settings.jwt_expire_hours),
        )

    def issue(self, user_id: str) -> str:
        """Create a signed token asserting `user_id`."""
        now = utc_now()
        payload = {
            "user_id": user_id,
            "sub": user_id,
            "iat": now,
            "nbf": now,
            "exp": now + self.expires_in,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenSigningError(f"Failed to sign token: {e}") from e

    def verify(self, token: str) -> str:
        """
        Validate a token and return the user id it asserts.

        Raises:
            TokenInvalidError: bad signature, non-HMAC algorithm, expired,
                not yet valid, malformed, or missing the user id claim
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat", "nbf"]},
            )
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}") from e

        user_id = payload.get("user_id")
        if not isinstance(user_id, str) or not user_id:
            raise TokenInvalidError("Invalid token: missing user_id claim")
        return user_id
