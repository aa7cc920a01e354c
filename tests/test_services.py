"""
Tests for the resource services.

Core rule: load the record, then compare owners. A record that exists but
belongs to someone else is Forbidden; a record that does not exist is
NotFound. The two never blur.
"""

import pytest

from finflow.auth.context import AuthContext
from finflow.auth.external import ExternalIdentity
from finflow.core.errors import (
    ConflictError,
    ErrorKind,
    ForbiddenError,
    InvalidCurrencyError,
    InvalidTypeError,
    NotFoundError,
    UnauthenticatedError,
)
from finflow.core.models import CategoryType, Currency, WalletType
from finflow.services.categories import INVALID_CATEGORY_TYPE
from finflow.services.wallets import INVALID_CURRENCY, INVALID_WALLET_TYPE


async def make_wallet(container, ctx, name="Main", **overrides):
    fields = {"name": name, "type": 0, "balance": 1000.5, "currency": "USD"}
    fields.update(overrides)
    return await container.wallets.create(ctx, **fields)


# =============================================================================
# Ownership
# =============================================================================


class TestOwnership:
    @pytest.mark.asyncio
    async def test_owner_can_read(self, container, alice):
        wallet = await make_wallet(container, alice)

        loaded = await container.wallets.get(alice, wallet.id)

        assert loaded.id == wallet.id
        assert loaded.user_id == "u1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", ["get", "update", "delete"])
    async def test_other_user_is_forbidden(self, container, alice, bob, action):
        wallet = await make_wallet(container, alice)

        with pytest.raises(ForbiddenError) as exc_info:
            if action == "get":
                await container.wallets.get(bob, wallet.id)
            elif action == "update":
                await container.wallets.update(
                    bob, wallet.id, name="Stolen", type=0, balance=0, currency="USD"
                )
            else:
                await container.wallets.delete(bob, wallet.id)

        verb = {"get": "access"}.get(action, action)
        assert exc_info.value.message == f"You do not have permission to {verb} this wallet"

        # Nothing changed
        assert (await container.wallets.get(alice, wallet.id)).name == "Main"

    @pytest.mark.asyncio
    async def test_missing_is_not_found(self, container, alice):
        with pytest.raises(NotFoundError) as exc_info:
            await container.wallets.get(alice, "no-such-wallet")
        assert exc_info.value.message == "Wallet not found"

        with pytest.raises(NotFoundError) as exc_info:
            await container.categories.delete(alice, "no-such-category")
        assert exc_info.value.message == "Category not found"

    @pytest.mark.asyncio
    async def test_category_forbidden_message(self, container, alice, bob):
        category = await container.categories.create(alice, name="Food", type=0)

        with pytest.raises(ForbiddenError) as exc_info:
            await container.categories.update(bob, category.id, name="Mine", type=1)
        assert exc_info.value.message == "You do not have permission to update this category"

    @pytest.mark.asyncio
    async def test_anonymous_is_rejected(self, container, alice):
        wallet = await make_wallet(container, alice)
        anonymous = AuthContext.anonymous()

        with pytest.raises(UnauthenticatedError):
            await container.wallets.get(anonymous, wallet.id)
        with pytest.raises(UnauthenticatedError):
            await container.categories.list(anonymous)
        with pytest.raises(UnauthenticatedError):
            await container.categories.create(anonymous, name="Food", type=0)


# =============================================================================
# Listing
# =============================================================================


class TestListScoping:
    @pytest.mark.asyncio
    async def test_interleaved_owners(self, container):
        owners = [AuthContext(user_id=f"user-{i}") for i in range(3)]
        for n in range(9):
            ctx = owners[n % 3]
            await container.categories.create(ctx, name=f"Category {n}", type=n % 3)
            await make_wallet(container, ctx, name=f"Wallet {n}")

        for ctx in owners:
            categories = await container.categories.list(ctx)
            wallets = await container.wallets.list(ctx)

            assert len(categories) == 3
            assert len(wallets) == 3
            assert {c.user_id for c in categories} == {ctx.user_id}
            assert {w.user_id for w in wallets} == {ctx.user_id}

    @pytest.mark.asyncio
    async def test_empty(self, container, bob):
        assert await container.wallets.list(bob) == []


# =============================================================================
# Enumerated fields
# =============================================================================


class TestEnumValidation:
    @pytest.mark.asyncio
    async def test_category_type_out_of_range(self, container, alice):
        with pytest.raises(InvalidTypeError) as exc_info:
            await container.categories.create(alice, name="Food", type=99)

        assert exc_info.value.kind == ErrorKind.INVALID_INPUT
        assert exc_info.value.message == INVALID_CATEGORY_TYPE
        assert await container.categories.list(alice) == []

    @pytest.mark.asyncio
    async def test_wallet_type_out_of_range(self, container, alice):
        with pytest.raises(InvalidTypeError) as exc_info:
            await make_wallet(container, alice, type=7)
        assert exc_info.value.message == INVALID_WALLET_TYPE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["INVALID", "usd", ""])
    async def test_invalid_currency(self, container, alice, code):
        with pytest.raises(InvalidCurrencyError) as exc_info:
            await make_wallet(container, alice, currency=code)
        assert exc_info.value.message == INVALID_CURRENCY

    @pytest.mark.asyncio
    async def test_crypto_currency(self, container, alice):
        wallet = await make_wallet(container, alice, name="Cold storage", type=5, currency="BTC")

        assert wallet.currency is Currency.BTC
        assert wallet.type is WalletType.INVESTMENT

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_record_alone(self, container, alice):
        category = await container.categories.create(alice, name="Food", type=0)

        with pytest.raises(InvalidTypeError):
            await container.categories.update(alice, category.id, name="Renamed", type=42)

        stored = await container.categories.get(alice, category.id)
        assert stored.name == "Food"
        assert stored.type is CategoryType.EXPENSE


# =============================================================================
# Updates and conflicts
# =============================================================================


class TestMutation:
    @pytest.mark.asyncio
    async def test_update_stamps_audit_fields(self, container, alice):
        wallet = await make_wallet(container, alice)

        updated = await container.wallets.update(
            alice, wallet.id, name="Savings", type=4, balance=50, currency="EUR"
        )
        stored = await container.wallets.get(alice, wallet.id)

        assert stored.name == "Savings"
        assert stored.currency is Currency.EUR
        assert stored.created_at == wallet.created_at
        assert stored.created_by == "system"
        assert stored.modified_by == "system"
        assert stored.modified_at >= wallet.modified_at
        assert updated.modified_at == stored.modified_at

    @pytest.mark.asyncio
    async def test_duplicate_name_per_owner(self, container, alice, bob):
        await make_wallet(container, alice)
        await make_wallet(container, bob)

        with pytest.raises(ConflictError) as exc_info:
            await make_wallet(container, alice)
        assert exc_info.value.message == "A wallet with this name already exists"

    @pytest.mark.asyncio
    async def test_rename_into_existing_name(self, container, alice):
        await container.categories.create(alice, name="Food", type=0)
        other = await container.categories.create(alice, name="Rent", type=0)

        with pytest.raises(ConflictError):
            await container.categories.update(alice, other.id, name="Food", type=0)

    @pytest.mark.asyncio
    async def test_delete(self, container, alice):
        wallet = await make_wallet(container, alice)

        await container.wallets.delete(alice, wallet.id)

        with pytest.raises(NotFoundError):
            await container.wallets.get(alice, wallet.id)


# =============================================================================
# Users
# =============================================================================


async def register(container, email="ada@finflow.io", password="password123"):
    return await container.users.register(
        first_name="Ada", last_name="Lovelace", email=email, password=password
    )


class TestUserService:
    @pytest.mark.asyncio
    async def test_register_hashes_password(self, container):
        user = await register(container, email="Ada@FinFlow.io")

        assert user.email == "ada@finflow.io"
        assert user.password_hash
        assert "password123" not in user.password_hash

    @pytest.mark.asyncio
    async def test_duplicate_email_any_case(self, container):
        await register(container)

        with pytest.raises(ConflictError) as exc_info:
            await register(container, email="ADA@finflow.io")
        assert exc_info.value.message == "An account with this email address already exists"

    @pytest.mark.asyncio
    async def test_authenticate(self, container):
        user = await register(container)

        assert (await container.users.authenticate("ada@finflow.io", "password123")).id == user.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, password",
        [("ada@finflow.io", "wrong-password"), ("nobody@finflow.io", "password123")],
    )
    async def test_authenticate_failure(self, container, email, password):
        await register(container)

        with pytest.raises(UnauthenticatedError) as exc_info:
            await container.users.authenticate(email, password)
        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_self_only_checked_before_existence(self, container):
        user = await register(container)
        stranger = AuthContext(user_id="someone-else")

        with pytest.raises(ForbiddenError) as exc_info:
            await container.users.get(stranger, user.id)
        assert exc_info.value.message == "You can only view your own profile"

        with pytest.raises(ForbiddenError):
            await container.users.get(stranger, "does-not-exist")

    @pytest.mark.asyncio
    async def test_own_missing_profile(self, container):
        ghost = AuthContext(user_id="ghost")

        with pytest.raises(NotFoundError) as exc_info:
            await container.users.get(ghost, "ghost")
        assert exc_info.value.message == "User not found"

    @pytest.mark.asyncio
    async def test_update_profile(self, container):
        user = await register(container)
        ctx = AuthContext(user_id=user.id)

        await container.users.update(
            ctx, user.id, first_name="Augusta", last_name="King", email="AUGUSTA@finflow.io"
        )
        stored = await container.users.get(ctx, user.id)

        assert stored.first_name == "Augusta"
        assert stored.email == "augusta@finflow.io"
        assert stored.password_hash == user.password_hash

    @pytest.mark.asyncio
    async def test_delete_account(self, container):
        user = await register(container)
        ctx = AuthContext(user_id=user.id)

        with pytest.raises(ForbiddenError) as exc_info:
            await container.users.delete(AuthContext(user_id="other"), user.id)
        assert exc_info.value.message == "You can only delete your own account"

        await container.users.delete(ctx, user.id)
        with pytest.raises(NotFoundError):
            await container.users.delete(ctx, user.id)


class TestExternalSync:
    @pytest.mark.asyncio
    async def test_creates_then_finds(self, container):
        identity = ExternalIdentity(
            auth_id="ext|1", first_name="Grace", last_name="Hopper", email="Grace@finflow.io"
        )

        created = await container.users.sync_external(identity)
        again = await container.users.sync_external(identity)

        assert created.id == again.id
        assert created.auth_id == "ext|1"
        assert created.email == "grace@finflow.io"
        assert created.password_hash == ""

    @pytest.mark.asyncio
    async def test_synced_user_cannot_log_in_with_password(self, container):
        await container.users.sync_external(ExternalIdentity(auth_id="ext|1", email="g@finflow.io"))

        with pytest.raises(UnauthenticatedError):
            await container.users.authenticate("g@finflow.io", "")

    @pytest.mark.asyncio
    async def test_users_without_email(self, container):
        a = await container.users.sync_external(ExternalIdentity(auth_id="ext|a"))
        b = await container.users.sync_external(ExternalIdentity(auth_id="ext|b"))

        assert a.email is None
        assert a.id != b.id
