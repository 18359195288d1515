"""
Wallet Manager

Owns the wallets collection. Transactions and loans point at wallets by
id but the wallet manager never looks at them: deleting a wallet leaves
any referencing records dangling, which callers must tolerate.
"""

from decimal import Decimal
from typing import Any, Optional

from walletbook.activity import ActivityLogger
from walletbook.models.ledger import Wallet, WalletPatch
from walletbook.services.storage import (
    Collection,
    CollectionRepository,
    CollectionStorageInterface,
    NotFoundError,
)
from walletbook.validation import RecordValidator


class WalletManager:
    """Create, edit, delete and list wallets."""

    def __init__(
        self,
        storage: CollectionStorageInterface,
        validator: Optional[RecordValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._repository = CollectionRepository(storage, Collection.WALLETS, Wallet)
        self._validator = validator or RecordValidator()
        self._activity_logger = activity_logger

    async def list_wallets(self) -> list[Wallet]:
        """All wallets in insertion order."""
        return await self._repository.load()

    async def get(self, wallet_id: str) -> Wallet:
        """
        Look up a wallet by id.

        Raises:
            NotFoundError: If no wallet has this id
        """
        for wallet in await self._repository.load():
            if wallet.id == wallet_id:
                return wallet
        raise NotFoundError(f"Wallet not found: {wallet_id}")

    async def save_all(self, wallets: list[Wallet]) -> bool:
        """Overwrite the whole collection. Used by the transaction manager."""
        return await self._repository.save(wallets)

    async def create(self, name: Any, initial_balance: Any) -> Wallet:
        """
        Open a new wallet.

        Args:
            name: Display name, must not be blank
            initial_balance: Opening balance, a number or a locale-formatted
                string such as "1.500.000"; must not be negative

        Returns:
            The new wallet, with balance equal to its initial balance

        Raises:
            ValidationError: On blank name or bad balance (nothing is written)
        """
        clean_name, balance = self._validator.validate_new_wallet(name, initial_balance)

        wallet = Wallet(
            name=clean_name,
            balance=balance,
            initial_balance=balance,
        )

        wallets = await self._repository.load()
        wallets.append(wallet)
        await self._repository.save(wallets)

        if self._activity_logger:
            self._activity_logger.log_wallet_created(wallet.id, wallet.name, balance)

        return wallet

    async def edit(self, wallet_id: str, patch: WalletPatch) -> Optional[Wallet]:
        """
        Overwrite a wallet's name and/or balance.

        An unknown id is a no-op that returns None. It is logged as a
        warning, but nothing is raised.
        """
        patch = self._validator.validate_wallet_patch(patch)

        wallets = await self._repository.load()
        for index, wallet in enumerate(wallets):
            if wallet.id != wallet_id:
                continue

            changes = patch.model_dump(exclude_none=True)
            if not changes:
                return wallet

            updated = wallet.model_copy(update=changes)
            wallets[index] = updated
            await self._repository.save(wallets)

            if self._activity_logger:
                self._activity_logger.log_wallet_edited(wallet_id, sorted(changes))
            return updated

        if self._activity_logger:
            self._activity_logger.log_wallet_edit_missed(wallet_id)
        return None

    async def delete(self, wallet_id: str) -> bool:
        """
        Remove a wallet.

        Referencing transactions and loans are left untouched. Returns
        whether a wallet was actually removed.
        """
        wallets = await self._repository.load()
        remaining = [wallet for wallet in wallets if wallet.id != wallet_id]
        existed = len(remaining) != len(wallets)

        if existed:
            await self._repository.save(remaining)

        if self._activity_logger:
            self._activity_logger.log_wallet_deleted(wallet_id, existed)
        return existed

    async def total_balance(self) -> Decimal:
        """Sum of all wallet balances."""
        wallets = await self._repository.load()
        return sum((wallet.balance for wallet in wallets), Decimal("0"))
