"""
Transaction Manager

Records income and expense events and keeps wallet balances in step
with them. This is the only place where a balance changes as a side
effect of another record.

Creation flow:
1. Validate input (title, amount, wallet, type, date)
2. Resolve the wallet; expenses must not exceed its balance
3. Adjust the balance (income adds, expense subtracts)
4. Save the wallets collection, THEN prepend the transaction
5. Return the transaction

CRITICAL: The two writes in step 4 are not atomic. If the second one fails
the wallet keeps its new balance with no matching ledger entry. The
error propagates and the divergence is logged with both ids; nothing
is rolled back or retried.

Deleting a transaction removes the ledger entry only. The balance
adjustment made when it was created stays in place.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Callable, Iterable, Iterator, Optional
from uuid import UUID

from walletbook.activity import ActivityLogger
from walletbook.managers.wallets import WalletManager
from walletbook.models.ledger import (
    Transaction,
    TransactionTotals,
    TransactionType,
)
from walletbook.services.storage import (
    Collection,
    CollectionRepository,
    CollectionStorageInterface,
    NotFoundError,
    StorageError,
)
from walletbook.validation import (
    InsufficientBalanceError,
    RecordValidator,
    ValidationError,
)


class TransactionManager:
    """
    Create, list and delete transactions.

    The default month for list_transactions() is fixed when the manager
    is constructed, mirroring a screen that was opened in that month.
    """

    def __init__(
        self,
        storage: CollectionStorageInterface,
        wallet_manager: WalletManager,
        validator: Optional[RecordValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
        clock: Callable[[], dt.date] = dt.date.today,
    ):
        self._repository = CollectionRepository(storage, Collection.TRANSACTIONS, Transaction)
        self._wallets = wallet_manager
        self._validator = validator or RecordValidator()
        self._activity_logger = activity_logger
        self._clock = clock

        today = clock()
        self._current_year = today.year
        self._current_month = today.month

    @property
    def current_month(self) -> tuple[int, int]:
        """(year, month) used when list_transactions() gets no filter."""
        return self._current_year, self._current_month

    async def create(
        self,
        title: Any,
        amount: Any,
        category: Optional[str],
        wallet_id: Any,
        date: Any = None,
        transaction_type: Any = TransactionType.EXPENSE,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Record a transaction and adjust its wallet's balance.

        Args:
            title: Transaction title, must not be blank
            amount: Positive number or locale-formatted string
            category: Free-text category, may be empty
            wallet_id: ID of an existing wallet
            date: Calendar date (date, datetime or ISO string); defaults to today
            transaction_type: 'income' or 'expense'
            correlation_id: Groups the log events of this call

        Returns:
            The created transaction

        Raises:
            ValidationError: On bad input (nothing is written)
            NotFoundError: If the wallet does not exist (nothing is written)
            InsufficientBalanceError: If an expense exceeds the balance
                (nothing is written)
            StorageError: If a write fails; the wallet may already be updated
        """
        try:
            clean_title, clean_amount, clean_wallet_id, clean_type, on_date = (
                self._validator.validate_new_transaction(
                    title,
                    amount,
                    wallet_id,
                    transaction_type,
                    date if date is not None else self._clock(),
                )
            )
        except ValidationError as e:
            if self._activity_logger:
                self._activity_logger.log_transaction_rejected(
                    reason="validation",
                    details={"issues": [issue.field for issue in e.issues]},
                )
            raise

        # Read everything before the first write so a bad stored record
        # fails the call with no side effects.
        wallets = await self._wallets.list_wallets()
        transactions = await self._repository.load()

        wallet_index = next(
            (i for i, wallet in enumerate(wallets) if wallet.id == clean_wallet_id),
            None,
        )
        if wallet_index is None:
            if self._activity_logger:
                self._activity_logger.log_transaction_rejected(
                    reason="wallet_not_found", wallet_id=clean_wallet_id,
                )
            raise NotFoundError(f"Wallet not found: {clean_wallet_id}")
        wallet = wallets[wallet_index]

        if clean_type == TransactionType.EXPENSE:
            try:
                self._validator.check_sufficient_balance(wallet, clean_amount)
            except InsufficientBalanceError:
                if self._activity_logger:
                    self._activity_logger.log_transaction_rejected(
                        reason="insufficient_balance",
                        wallet_id=wallet.id,
                        details={"balance": str(wallet.balance), "amount": str(clean_amount)},
                    )
                raise

        transaction = Transaction(
            name=clean_title,
            amount=clean_amount,
            category=(category or "").strip(),
            account=wallet.name,
            account_id=wallet.id,
            date=on_date,
            type=clean_type,
        )

        new_balance = wallet.balance + transaction.signed_amount
        wallets[wallet_index] = wallet.model_copy(update={"balance": new_balance})
        await self._wallets.save_all(wallets)

        if self._activity_logger:
            self._activity_logger.log_balance_adjusted(
                wallet.id, wallet.balance, new_balance, correlation_id,
            )

        try:
            await self._repository.save([transaction, *transactions])
        except StorageError as e:
            if self._activity_logger:
                self._activity_logger.log_partial_write(
                    wallet_id=wallet.id,
                    transaction_id=transaction.id,
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._activity_logger:
            self._activity_logger.log_transaction_recorded(
                transaction.id,
                wallet.id,
                transaction.type.value,
                transaction.amount,
                correlation_id,
            )

        return transaction

    async def get(self, transaction_id: str) -> Transaction:
        """
        Look up a transaction by id.

        Raises:
            NotFoundError: If no transaction has this id
        """
        for transaction in await self._repository.load():
            if transaction.id == transaction_id:
                return transaction
        raise NotFoundError(f"Transaction not found: {transaction_id}")

    async def delete(self, transaction_id: str) -> bool:
        """
        Remove a transaction from the ledger.

        The wallet balance is NOT restored. Returns whether a
        transaction was actually removed.
        """
        transactions = await self._repository.load()
        remaining = [t for t in transactions if t.id != transaction_id]
        existed = len(remaining) != len(transactions)

        if existed:
            await self._repository.save(remaining)

        if self._activity_logger:
            self._activity_logger.log_transaction_deleted(transaction_id, existed)
        return existed

    async def list_transactions(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> Iterator[Transaction]:
        """
        Transactions dated in one calendar month, newest recorded first.

        Args:
            year: Defaults to the manager's current year
            month: 1-12, defaults to the manager's current month
            transaction_type: Only return this type if given

        Returns:
            A lazy iterator over the matching transactions
        """
        year = self._current_year if year is None else year
        month = self._current_month if month is None else month
        if not 1 <= month <= 12:
            raise ValidationError.single("month", "out_of_range", f"Month must be 1-12, got {month}")
        wanted_type = TransactionType(transaction_type) if transaction_type else None

        transactions = await self._repository.load()
        return (
            transaction
            for transaction in transactions
            if transaction.date.year == year
            and transaction.date.month == month
            and (wanted_type is None or transaction.type == wanted_type)
        )

    @staticmethod
    def totals(transactions: Iterable[Transaction]) -> TransactionTotals:
        """Sum income and expense amounts separately."""
        income = Decimal("0")
        expense = Decimal("0")
        for transaction in transactions:
            if transaction.type == TransactionType.INCOME:
                income += transaction.amount
            else:
                expense += transaction.amount
        return TransactionTotals(income=income, expense=expense)
