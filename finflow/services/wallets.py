"""
Wallet service.
"""

from __future__ import annotations

from finflow.auth.context import AuthContext
from finflow.core.errors import InvalidCurrencyError, InvalidTypeError
from finflow.core.models import Currency, Wallet, WalletType
from finflow.services.base import OwnedResourceService

INVALID_WALLET_TYPE = (
    "Invalid wallet type. Must be 0 (Bank), 1 (Cash), 2 (CreditCard), "
    "3 (DebitCard), 4 (Savings), 5 (Investment), or 6 (Other)"
)
INVALID_CURRENCY = "Invalid currency code"


def parse_wallet_type(value: int) -> WalletType:
    if not WalletType.is_valid(value):
        raise InvalidTypeError(INVALID_WALLET_TYPE)
    return WalletType(value)


def parse_currency(code: str) -> Currency:
    if not Currency.is_valid(code):
        raise InvalidCurrencyError(INVALID_CURRENCY)
    return Currency(code)


class WalletService(OwnedResourceService[Wallet]):
    resource_name = "wallet"

    async def create(
        self,
        ctx: AuthContext,
        *,
        name: str,
        type: int,
        balance: float,
        currency: str,
    ) -> Wallet:
        user_id = ctx.require_user()
        wallet = Wallet(
            user_id=user_id,
            name=name,
            type=parse_wallet_type(type),
            balance=balance,
            currency=parse_currency(currency),
            created_by=self.system_user,
        )
        await self.repository.create(wallet)
        return wallet

    async def update(
        self,
        ctx: AuthContext,
        wallet_id: str,
        *,
        name: str,
        type: int,
        balance: float,
        currency: str,
    ) -> Wallet:
        wallet = await self.load_owned(ctx, wallet_id, "update")
        wallet_type = parse_wallet_type(type)
        wallet_currency = parse_currency(currency)

        wallet.name = name
        wallet.type = wallet_type
        wallet.balance = balance
        wallet.currency = wallet_currency
        wallet.update_modified(self.system_user)

        await self.repository.update(wallet)
        return wallet
