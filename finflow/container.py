"""
Dependency container.

Built once per application by create_app() and stored on app.state.
Route dependencies pull collaborators from here instead of module globals,
so tests can build an app around their own storage and settings.
"""

from __future__ import annotations

from dataclasses import dataclass

from starlette.requests import Request

from finflow.auth.jwt import TokenService
from finflow.auth.passwords import PasswordHasher
from finflow.config import Settings
from finflow.services import CategoryService, UserService, WalletService
from finflow.storage import (
    CategoryRepository,
    MetadataStorage,
    UserRepository,
    WalletRepository,
)


@dataclass
class Container:
    settings: Settings
    storage: MetadataStorage
    tokens: TokenService
    passwords: PasswordHasher
    users: UserService
    categories: CategoryService
    wallets: WalletService

    @classmethod
    def build(
        cls,
        settings: Settings,
        storage: MetadataStorage,
        passwords: PasswordHasher | None = None,
    ) -> Container:
        passwords = passwords or PasswordHasher()
        system_user = settings.app_system_user

        return cls(
            settings=settings,
            storage=storage,
            tokens=TokenService.from_settings(settings),
            passwords=passwords,
            users=UserService(UserRepository(storage), passwords, system_user),
            categories=CategoryService(CategoryRepository(storage), system_user),
            wallets=WalletService(WalletRepository(storage), system_user),
        )


def get_container(request: Request) -> Container:
    """FastAPI dependency: the container of the app serving this request."""
    return request.app.state.container
