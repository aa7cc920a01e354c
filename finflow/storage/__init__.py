"""
Storage abstractions and repositories.
"""

from finflow.storage.base import (
    MetadataStorage,
    Collections,
    StorageError,
    DuplicateKeyError,
)
from finflow.storage.local import InMemoryMetadataStorage, create_local_storage
from finflow.storage.repositories import (
    Repository,
    OwnedRepository,
    UserRepository,
    CategoryRepository,
    WalletRepository,
)

__all__ = [
    "MetadataStorage",
    "Collections",
    "StorageError",
    "DuplicateKeyError",
    "InMemoryMetadataStorage",
    "create_local_storage",
    "Repository",
    "OwnedRepository",
    "UserRepository",
    "CategoryRepository",
    "WalletRepository",
]
