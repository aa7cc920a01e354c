"""
Services - ownership checks and orchestration over the repositories.
"""

from finflow.services.base import OwnedResourceService
from finflow.services.categories import CategoryService
from finflow.services.users import UserService
from finflow.services.wallets import WalletService

__all__ = [
    "OwnedResourceService",
    "CategoryService",
    "UserService",
    "WalletService",
]
