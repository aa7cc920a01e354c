"""
Auth context - who is making the current request.

Authentication stores the resolved identity on the request under a
private attribute. Everything downstream reads it back through
get_user_id() or receives an AuthContext built from it.
"""

from __future__ import annotations

from dataclasses import dataclass

from starlette.requests import Request

from finflow.core.errors import UnauthenticatedError

_USER_ID_KEY = "_finflow_user_id"


def set_user_id(request: Request, user_id: str) -> None:
    """Attach an authenticated identity to the request."""
    setattr(request.state, _USER_ID_KEY, user_id)


def get_user_id(request: Request) -> tuple[str, bool]:
    """Return (user_id, ok). ok is False until authentication succeeds."""
    user_id = getattr(request.state, _USER_ID_KEY, None)
    if isinstance(user_id, str) and user_id:
        return user_id, True
    return "", False


@dataclass(frozen=True)
class AuthContext:
    """
    Identity passed from route handlers into services.

    Services never look at the request; they get this object and call
    require_user() before touching any data.
    """

    user_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    def require_user(self) -> str:
        """Return the caller id or raise UnauthenticatedError."""
        if not self.user_id:
            raise UnauthenticatedError()
        return self.user_id

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls()

    @classmethod
    def from_request(cls, request: Request) -> AuthContext:
        user_id, ok = get_user_id(request)
        return cls(user_id=user_id if ok else None)
