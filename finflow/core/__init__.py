"""
Core domain: models, error taxonomy, utilities.
"""

from finflow.core.errors import (
    ErrorKind,
    FinFlowError,
    UnauthenticatedError,
    ForbiddenError,
    NotFoundError,
    InvalidInputError,
    InvalidTypeError,
    InvalidCurrencyError,
    ConflictError,
    InternalError,
)
from finflow.core.models import (
    Entity,
    User,
    Category,
    CategoryType,
    Wallet,
    WalletType,
    Currency,
)
from finflow.core.utils import generate_id, utc_now

__all__ = [
    # Errors
    "ErrorKind",
    "FinFlowError",
    "UnauthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "InvalidInputError",
    "InvalidTypeError",
    "InvalidCurrencyError",
    "ConflictError",
    "InternalError",
    # Models
    "Entity",
    "User",
    "Category",
    "CategoryType",
    "Wallet",
    "WalletType",
    "Currency",
    # Utils
    "generate_id",
    "utc_now",
]
