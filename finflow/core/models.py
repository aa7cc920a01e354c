"""
Core data models for the finflow backend.

Users, categories and wallets. Every persisted entity carries the same
audit fields: created_at/created_by are set once at construction,
modified_at/modified_by move forward on every mutation.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from finflow.core.utils import generate_id, utc_now


# =============================================================================
# Audit base
# =============================================================================


class Entity(BaseModel):
    """Identity plus audit fields shared by all records."""

    id: str = Field(default_factory=generate_id)

    created_at: datetime = Field(default_factory=utc_now)
    modified_at: datetime | None = None
    created_by: str
    modified_by: str | None = None

    @model_validator(mode="after")
    def _default_modified(self) -> "Entity":
        if self.modified_at is None:
            self.modified_at = self.created_at
        if self.modified_by is None:
            self.modified_by = self.created_by
        return self

    def update_modified(self, modified_by: str) -> None:
        """Stamp a mutation. Never touches the created_* fields."""
        self.modified_at = utc_now()
        self.modified_by = modified_by


# =============================================================================
# Users
# =============================================================================


class User(Entity):
    """
    A registered user.

    `auth_id` links the record to an external identity provider and is
    only set for users created through profile sync. `password_hash` is
    empty for those users, so they can never log in with a password, and
    `email` may be missing if the provider did not share one.
    """

    auth_id: str | None = None
    first_name: str
    last_name: str
    email: str | None = None
    password_hash: str = ""


# =============================================================================
# Categories
# =============================================================================


class CategoryType(int, Enum):
    """Kind of money movement a category groups."""

    EXPENSE = 0
    INCOME = 1
    INVESTMENT = 2

    @property
    def label(self) -> str:
        return _CATEGORY_TYPE_LABELS[self]

    @classmethod
    def is_valid(cls, value: int) -> bool:
        return value in cls._value2member_map_


_CATEGORY_TYPE_LABELS = {
    CategoryType.EXPENSE: "Expense",
    CategoryType.INCOME: "Income",
    CategoryType.INVESTMENT: "Investment",
}


class Category(Entity):
    """A user-owned category."""

    user_id: str  # owner
    name: str
    type: CategoryType


# =============================================================================
# Wallets
# =============================================================================


class WalletType(int, Enum):
    BANK = 0
    CASH = 1
    CREDIT_CARD = 2
    DEBIT_CARD = 3
    SAVINGS = 4
    INVESTMENT = 5
    OTHER = 6

    @property
    def label(self) -> str:
        return _WALLET_TYPE_LABELS[self]

    @classmethod
    def is_valid(cls, value: int) -> bool:
        return value in cls._value2member_map_

    @classmethod
    def choices(cls) -> list[dict[str, int | str]]:
        """All wallet types as value/name pairs, in value order."""
        return [{"value": t.value, "name": t.label} for t in cls]


_WALLET_TYPE_LABELS = {
    WalletType.BANK: "Bank",
    WalletType.CASH: "Cash",
    WalletType.CREDIT_CARD: "CreditCard",
    WalletType.DEBIT_CARD: "DebitCard",
    WalletType.SAVINGS: "Savings",
    WalletType.INVESTMENT: "Investment",
    WalletType.OTHER: "Other",
}


class Currency(str, Enum):
    """Supported currency codes. Matching is case-sensitive."""

    # Fiat
    USD = "USD"
    EUR = "EUR"
    ARS = "ARS"
    ARG = "ARG"
    BRL = "BRL"
    MXN = "MXN"
    GBP = "GBP"
    JPY = "JPY"
    CAD = "CAD"
    AUD = "AUD"
    CHF = "CHF"
    DKK = "DKK"

    # Crypto
    BTC = "BTC"
    ETH = "ETH"
    USDT = "USDT"
    USDC = "USDC"
    NEXO = "NEXO"
    BNB = "BNB"

    @property
    def is_crypto(self) -> bool:
        return self in _CRYPTO

    @classmethod
    def is_valid(cls, code: str) -> bool:
        return code in cls._value2member_map_

    @classmethod
    def grouped(cls) -> dict[str, list[str]]:
        return {
            "fiat": [c.value for c in cls if not c.is_crypto],
            "crypto": [c.value for c in cls if c.is_crypto],
        }


_CRYPTO = frozenset({
    Currency.BTC,
    Currency.ETH,
    Currency.USDT,
    Currency.USDC,
    Currency.NEXO,
    Currency.BNB,
})


class Wallet(Entity):
    """A user-owned wallet (bank account, card, cash, exchange...)."""

    user_id: str  # owner
    name: str
    type: WalletType
    balance: float
    currency: Currency
