"""
User service.

Users have no owner column: a user record is its own identity. Profile
reads and writes are allowed only when the caller's id equals the target
id. That check runs before the lookup, so probing someone else's id
answers 403 whether or not the id exists.
"""

from __future__ import annotations

import logging

from finflow.auth.context import AuthContext
from finflow.auth.external import ExternalIdentity
from finflow.auth.passwords import PasswordHasher
from finflow.core.errors import (
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthenticatedError,
)
from finflow.core.models import User
from finflow.storage.repositories import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class UserService:
    def __init__(self, repository: UserRepository, passwords: PasswordHasher, system_user: str):
        self.repository = repository
        self.passwords = passwords
        self.system_user = system_user

    # =========================================================================
    # Registration & login
    # =========================================================================

    async def register(
        self,
        *,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> User:
        """Create a password account. ConflictError if the email is taken."""
        try:
            password_hash = self.passwords.hash(password)
        except (ValueError, MemoryError) as e:
            logger.error(f"Password hashing failed: {e}")
            raise InternalError("Failed to process password") from e

        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email.lower(),
            password_hash=password_hash,
            created_by=self.system_user,
        )
        await self.repository.create(user)
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Check an email/password pair.

        Unknown email, wrong password and password-less (synced) accounts
        all fail with the same message.
        """
        user = await self.repository.get_by_email(email)
        if user is None or not user.password_hash:
            logger.info(f"Failed login for {email}")
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        if not self.passwords.verify(password, user.password_hash):
            logger.info(f"Failed login for {email}")
            raise UnauthenticatedError(INVALID_CREDENTIALS)

        return user

    # =========================================================================
    # Profile
    # =========================================================================

    def _require_self(self, ctx: AuthContext, user_id: str, message: str) -> None:
        caller = ctx.require_user()
        if caller != user_id:
            raise ForbiddenError(message)

    async def _load(self, user_id: str) -> User:
        user = await self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get(self, ctx: AuthContext, user_id: str) -> User:
        self._require_self(ctx, user_id, "You can only view your own profile")
        return await self._load(user_id)

    async def update(
        self,
        ctx: AuthContext,
        user_id: str,
        *,
        first_name: str,
        last_name: str,
        email: str,
    ) -> User:
        self._require_self(ctx, user_id, "You can only update your own profile")
        user = await self._load(user_id)

        user.first_name = first_name
        user.last_name = last_name
        user.email = email.lower()
        user.update_modified(self.system_user)

        await self.repository.update(user)
        return user

    async def delete(self, ctx: AuthContext, user_id: str) -> None:
        self._require_self(ctx, user_id, "You can only delete your own account")
        await self.repository.delete(user_id)

    async def list(self, ctx: AuthContext) -> list[User]:
        ctx.require_user()
        return await self.repository.list_all()

    # =========================================================================
    # External identity sync
    # =========================================================================

    async def sync_external(self, identity: ExternalIdentity) -> User:
        """
        Find the user linked to an external identity, creating it on first
        sight from the claims the provider sent.

        Existing users are returned unchanged.
        """
        user = await self.repository.get_by_auth_id(identity.auth_id)
        if user is not None:
            return user

        user = User(
            auth_id=identity.auth_id,
            first_name=identity.first_name,
            last_name=identity.last_name,
            email=identity.email.lower() or None,
            created_by=self.system_user,
        )
        await self.repository.create(user)
        logger.info(f"Created user {user.id} from external identity")
        return user
