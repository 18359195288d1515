"""
Tests for WalletManager.
"""

from decimal import Decimal
from unittest.mock import create_autospec

import pytest

from walletbook.activity import ActivityLogger
from walletbook.managers import TransactionManager, WalletManager
from walletbook.models import WalletPatch
from walletbook.services.storage import Collection, NotFoundError
from walletbook.validation import ValidationError

from tests.conftest import TODAY


class TestCreateWallet:
    """Tests for WalletManager.create."""

    @pytest.mark.asyncio
    async def test_create_wallet(self, wallet_manager):
        """Test new wallet starts at its initial balance."""
        wallet = await wallet_manager.create("Cash", "1.500.000")
        assert wallet.name == "Cash"
        assert wallet.balance == Decimal("1500000")
        assert wallet.initial_balance == Decimal("1500000")

    @pytest.mark.asyncio
    async def test_create_appends_in_order(self, wallet_manager):
        """Test wallets are listed in creation order."""
        first = await wallet_manager.create("Cash", 0)
        second = await wallet_manager.create("Bank", 10)
        assert [w.id for w in await wallet_manager.list_wallets()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_create_persists_camel_case_record(self, wallet_manager, storage):
        """Test the stored record matches the app's JSON layout."""
        wallet = await wallet_manager.create("Cash", "100.000")
        stored = (await storage.read(Collection.WALLETS))[0]
        assert stored["id"] == wallet.id
        assert stored["balance"] == 100000
        assert stored["initialBalance"] == 100000
        assert "createdAt" in stored

    @pytest.mark.asyncio
    async def test_long_name_accepted(self, wallet_manager):
        """Test any non-blank name is a valid wallet name."""
        wallet = await wallet_manager.create("W" * 101, 1000)
        assert (await wallet_manager.get(wallet.id)).name == "W" * 101

    @pytest.mark.asyncio
    async def test_invalid_input_writes_nothing(self, wallet_manager, storage):
        """Test validation failures have no side effects."""
        with pytest.raises(ValidationError):
            await wallet_manager.create("", "100")
        with pytest.raises(ValidationError):
            await wallet_manager.create("Cash", "lots")
        assert storage.write_count == 0

    @pytest.mark.asyncio
    async def test_create_is_logged(self, storage, validator):
        """Test the activity logger hears about new wallets."""
        activity = create_autospec(ActivityLogger, instance=True)
        manager = WalletManager(storage, validator=validator, activity_logger=activity)
        wallet = await manager.create("Cash", 5)
        activity.log_wallet_created.assert_called_once_with(wallet.id, "Cash", Decimal("5"))


class TestGetAndList:
    """Tests for lookups."""

    @pytest.mark.asyncio
    async def test_get_existing(self, seeded_storage, validator):
        """Test lookup by id."""
        manager = WalletManager(seeded_storage, validator=validator)
        wallet = await manager.get("2")
        assert wallet.name == "Bank"

    @pytest.mark.asyncio
    async def test_get_missing_raises(self, wallet_manager):
        """Test NotFoundError for unknown ids."""
        with pytest.raises(NotFoundError):
            await wallet_manager.get("nope")

    @pytest.mark.asyncio
    async def test_total_balance(self, seeded_storage, validator):
        """Test total is the plain sum of balances."""
        manager = WalletManager(seeded_storage, validator=validator)
        assert await manager.total_balance() == Decimal("150000")

    @pytest.mark.asyncio
    async def test_total_balance_empty(self, wallet_manager):
        """Test no wallets means zero."""
        assert await wallet_manager.total_balance() == Decimal("0")


class TestEditWallet:
    """Tests for WalletManager.edit."""

    @pytest.mark.asyncio
    async def test_edit_name_and_balance(self, seeded_storage, validator):
        """Test both fields are overwritten and persisted."""
        manager = WalletManager(seeded_storage, validator=validator)
        updated = await manager.edit("1", WalletPatch(name="Pocket", balance=Decimal("42")))
        assert updated.name == "Pocket"
        assert updated.balance == Decimal("42")
        assert updated.initial_balance == Decimal("100000")

        reloaded = await manager.get("1")
        assert reloaded == updated

    @pytest.mark.asyncio
    async def test_edit_only_balance_keeps_name(self, seeded_storage, validator):
        """Test None fields are left alone."""
        manager = WalletManager(seeded_storage, validator=validator)
        updated = await manager.edit("2", WalletPatch(balance=Decimal("1")))
        assert updated.name == "Bank"

    @pytest.mark.asyncio
    async def test_edit_parses_formatted_balance(self, seeded_storage, validator):
        """Test an edited balance uses the same amount format as create."""
        manager = WalletManager(seeded_storage, validator=validator)
        updated = await manager.edit("1", WalletPatch(balance="1.500.000"))
        assert updated.balance == Decimal("1500000")
        assert (await manager.get("1")).balance == Decimal("1500000")

    @pytest.mark.asyncio
    async def test_edit_rejects_unparseable_balance(self, seeded_storage, validator):
        """Test a garbage balance is a ValidationError and nothing is written."""
        manager = WalletManager(seeded_storage, validator=validator)
        with pytest.raises(ValidationError) as excinfo:
            await manager.edit("1", WalletPatch(balance="lots"))
        assert excinfo.value.issues[0].field == "balance"
        assert seeded_storage.write_count == 0

    @pytest.mark.asyncio
    async def test_edit_unknown_wallet_is_noop(self, seeded_storage, validator):
        """Test editing a missing wallet returns None without writing."""
        activity = create_autospec(ActivityLogger, instance=True)
        manager = WalletManager(seeded_storage, validator=validator, activity_logger=activity)
        before = await manager.list_wallets()

        assert await manager.edit("missing", WalletPatch(name="Ghost")) is None

        assert await manager.list_wallets() == before
        assert seeded_storage.write_count == 0
        activity.log_wallet_edit_missed.assert_called_once_with("missing")

    @pytest.mark.asyncio
    async def test_edit_rejects_blank_name(self, seeded_storage, validator):
        """Test patches are validated before writing."""
        manager = WalletManager(seeded_storage, validator=validator)
        with pytest.raises(ValidationError):
            await manager.edit("1", WalletPatch(name=" "))
        assert seeded_storage.write_count == 0


class TestDeleteWallet:
    """Tests for WalletManager.delete."""

    @pytest.mark.asyncio
    async def test_delete_removes_wallet(self, seeded_storage, validator):
        """Test the wallet is gone afterwards."""
        manager = WalletManager(seeded_storage, validator=validator)
        assert await manager.delete("1") is True
        assert [w.id for w in await manager.list_wallets()] == ["2"]

    @pytest.mark.asyncio
    async def test_delete_missing_is_not_an_error(self, wallet_manager):
        """Test deleting an unknown id returns False."""
        assert await wallet_manager.delete("nope") is False

    @pytest.mark.asyncio
    async def test_delete_with_referencing_transactions(self, seeded_storage, validator):
        """Test orphaned transactions are tolerated and left in place."""
        wallets = WalletManager(seeded_storage, validator=validator)
        transactions = TransactionManager(
            seeded_storage, wallets, validator=validator, clock=lambda: TODAY,
        )
        recorded = await transactions.create("Lunch", "30.000", "Food", "1", TODAY, "expense")

        assert await wallets.delete("1") is True

        orphan = await transactions.get(recorded.id)
        assert orphan.account_id == "1"
        assert orphan.account == "Cash"
        assert [t.id for t in await transactions.list_transactions()] == [recorded.id]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
