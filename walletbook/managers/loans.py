"""
Loan Manager

Tracks money owed to the user ('get') and money the user owes ('give').
Loans never touch wallet balances; a linked wallet is recorded for
reference only.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional

from walletbook.activity import ActivityLogger
from walletbook.managers.wallets import WalletManager
from walletbook.models.ledger import (
    Loan,
    LoanStatus,
    LoanTotals,
    LoanType,
)
from walletbook.services.storage import (
    Collection,
    CollectionRepository,
    CollectionStorageInterface,
    NotFoundError,
)
from walletbook.validation import InvalidStatusTransitionError, RecordValidator


class LoanManager:
    """Create, list and settle loans."""

    def __init__(
        self,
        storage: CollectionStorageInterface,
        wallet_manager: WalletManager,
        validator: Optional[RecordValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
        clock: Callable[[], dt.date] = dt.date.today,
    ):
        self._repository = CollectionRepository(storage, Collection.LOANS, Loan)
        self._wallets = wallet_manager
        self._validator = validator or RecordValidator()
        self._activity_logger = activity_logger
        self._clock = clock

    async def create(
        self,
        name: Any,
        amount: Any,
        note: Optional[str] = None,
        date: Any = None,
        loan_type: Any = LoanType.GIVE,
        wallet_id: Optional[str] = None,
    ) -> Loan:
        """
        Record a new active loan.

        Args:
            name: Counterparty name, must not be blank
            amount: Positive number or locale-formatted string
            note: Optional free text
            date: Calendar date; defaults to today
            loan_type: 'get' (owed to the user) or 'give' (user owes)
            wallet_id: Optional wallet to associate, must exist if given

        Raises:
            ValidationError: On bad input (nothing is written)
            NotFoundError: If wallet_id is given but unknown
        """
        clean_name, clean_amount, clean_type, on_date = self._validator.validate_new_loan(
            name,
            amount,
            loan_type,
            date if date is not None else self._clock(),
        )

        linked = {}
        if wallet_id:
            wallet = await self._wallets.get(wallet_id)
            linked = {"account": wallet.name, "account_id": wallet.id}

        loan = Loan(
            name=clean_name,
            amount=clean_amount,
            note=(note or "").strip(),
            date=on_date,
            type=clean_type,
            status=LoanStatus.ACTIVE,
            **linked,
        )

        loans = await self._repository.load()
        await self._repository.save([loan, *loans])

        if self._activity_logger:
            self._activity_logger.log_loan_created(loan.id, loan.type.value, loan.amount)

        return loan

    async def get(self, loan_id: str) -> Loan:
        for loan in await self._repository.load():
            if loan.id == loan_id:
                return loan
        raise NotFoundError(f"Loan not found: {loan_id}")

    async def list_loans(self) -> list[Loan]:
        """All loans, most recently created first."""
        loans = await self._repository.load()
        return sorted(loans, key=lambda loan: loan.created_at, reverse=True)

    async def mark_paid(self, loan_id: str) -> Loan:
        """
        Settle a loan.

        Raises:
            NotFoundError: If no loan has this id
            InvalidStatusTransitionError: If the loan is already paid
        """
        loans = await self._repository.load()
        for index, loan in enumerate(loans):
            if loan.id != loan_id:
                continue

            if loan.status == LoanStatus.PAID:
                raise InvalidStatusTransitionError.single(
                    "status",
                    "already_paid",
                    f"Loan {loan_id} is already paid",
                )

            paid = loan.model_copy(update={"status": LoanStatus.PAID})
            loans[index] = paid
            await self._repository.save(loans)

            if self._activity_logger:
                self._activity_logger.log_loan_paid(loan_id)
            return paid

        raise NotFoundError(f"Loan not found: {loan_id}")

    @staticmethod
    def totals(loans: Iterable[Loan]) -> LoanTotals:
        """Outstanding amounts per direction; paid loans are skipped."""
        owed_to_user = Decimal("0")
        owed_by_user = Decimal("0")
        for loan in loans:
            if not loan.is_outstanding:
                continue
            if loan.type == LoanType.GET:
                owed_to_user += loan.amount
            else:
                owed_by_user += loan.amount
        return LoanTotals(get=owed_to_user, give=owed_by_user)
