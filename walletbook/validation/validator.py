"""
Input Validation

DESIGN DECISION: Every manager operation validates ALL of its input
before touching storage. A ValidationError therefore guarantees that
nothing was written.

Amounts arrive either as numbers or as locale-formatted strings typed by
the user ("1.250.000" in the default id-ID locale). Thousands separators
are stripped, the decimal separator is normalized, and the result must
be a finite number.

IMPORTANT: Validation NEVER silently fixes issues beyond whitespace and
separator normalization. It reports them.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from walletbook.config import LocaleSettings, get_settings
from walletbook.models.ledger import (
    LoanType,
    TransactionType,
    Wallet,
    WalletPatch,
)
from walletbook.models.validation import ValidationIssue, ValidationResult


def _label(field: str) -> str:
    return field.replace("_", " ").capitalize()


class ValidationError(ValueError):
    """User input rejected before any side effect."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        message = "; ".join(f"{issue.field}: {issue.message}" for issue in issues)
        super().__init__(message or "Invalid input")

    @classmethod
    def single(cls, field: str, issue_type: str, message: str) -> "ValidationError":
        return cls([ValidationIssue(field=field, issue_type=issue_type, message=message)])


class InsufficientBalanceError(ValidationError):
    """Expense amount exceeds the wallet's current balance."""

    def __init__(self, wallet_id: str, balance: Decimal, amount: Decimal):
        self.wallet_id = wallet_id
        self.balance = balance
        self.amount = amount
        super().__init__([ValidationIssue(
            field="amount",
            issue_type="insufficient_balance",
            message=f"Insufficient balance in wallet {wallet_id}: {balance} < {amount}",
        )])


class InvalidStatusTransitionError(ValidationError):
    """A loan status change that the lifecycle does not allow."""
    pass


class RecordValidator:
    """
    Validates raw operation input for wallets, transactions and loans.

    Each validate_* method returns normalized values or raises a
    ValidationError carrying every issue found.
    """

    def __init__(self, locale: Optional[LocaleSettings] = None):
        self._locale = locale or get_settings().locale

    # -------------------------------------------------------------------------
    # Field-level helpers
    # -------------------------------------------------------------------------

    def parse_amount(self, value: Any) -> Optional[Decimal]:
        """
        Parse a user-supplied amount.

        Returns None if the value is not a finite number. Empty input is
        also None; callers decide whether that means "missing".
        """
        if value is None or isinstance(value, bool):
            return None

        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float)):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            text = "".join(value.split())
            text = text.replace(self._locale.thousands_separator, "")
            text = text.replace(self._locale.decimal_separator, ".")
            if not text:
                return None
            try:
                amount = Decimal(text)
            except InvalidOperation:
                return None
        else:
            return None

        if not amount.is_finite():
            return None
        return amount

    def _check_name(self, result: ValidationResult, field: str, value: Any) -> str:
        name = value.strip() if isinstance(value, str) else ""
        if not name:
            result.add(
                field=field,
                issue_type="missing",
                message=f"{_label(field)} is required",
            )
        return name

    def _check_amount(
        self,
        result: ValidationResult,
        field: str,
        value: Any,
        allow_zero: bool = False,
    ) -> Optional[Decimal]:
        if value is None or (isinstance(value, str) and not value.strip()):
            result.add(
                field=field,
                issue_type="missing",
                message=f"{_label(field)} is required",
            )
            return None

        amount = self.parse_amount(value)
        if amount is None:
            result.add(
                field=field,
                issue_type="not_a_number",
                message=f"{_label(field)} must be a number, got {value!r}",
            )
            return None

        if amount < 0 or (amount == 0 and not allow_zero):
            result.add(
                field=field,
                issue_type="not_positive",
                message=(
                    f"{_label(field)} cannot be negative"
                    if allow_zero else
                    f"{_label(field)} must be greater than zero"
                ),
            )
            return None

        return amount

    def _check_date(self, result: ValidationResult, field: str, value: Any) -> Optional[dt.date]:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        if isinstance(value, str):
            try:
                return dt.date.fromisoformat(value.strip()[:10])
            except ValueError:
                pass
        result.add(
            field=field,
            issue_type="invalid_date",
            message=f"{_label(field)} must be a calendar date (YYYY-MM-DD), got {value!r}",
        )
        return None

    @staticmethod
    def _raise_if_invalid(result: ValidationResult) -> None:
        if result.has_errors:
            raise ValidationError(result.issues)

    # -------------------------------------------------------------------------
    # Operation-level validation
    # -------------------------------------------------------------------------

    def validate_new_wallet(self, name: Any, initial_balance: Any) -> tuple[str, Decimal]:
        result = ValidationResult()
        clean_name = self._check_name(result, "name", name)
        balance = self._check_amount(result, "initial_balance", initial_balance, allow_zero=True)
        self._raise_if_invalid(result)
        return clean_name, balance

    def validate_wallet_patch(self, patch: WalletPatch) -> WalletPatch:
        """
        Patched fields follow the same rules as creation, except the balance may go negative.

        Returns a copy of the patch with the balance parsed to a Decimal.
        """
        result = ValidationResult()
        if patch.name is not None and not patch.name.strip():
            result.add(field="name", issue_type="missing", message="Name cannot be blank")

        balance = None
        if patch.balance is not None:
            balance = self.parse_amount(patch.balance)
            if balance is None:
                result.add(
                    field="balance",
                    issue_type="not_a_number",
                    message=f"Balance must be a number, got {patch.balance!r}",
                )

        self._raise_if_invalid(result)
        return patch.model_copy(update={"balance": balance})

    def validate_new_transaction(
        self,
        title: Any,
        amount: Any,
        wallet_id: Any,
        transaction_type: Any,
        on_date: Any,
    ) -> tuple[str, Decimal, str, TransactionType, dt.date]:
        result = ValidationResult()
        clean_title = self._check_name(result, "title", title)
        clean_amount = self._check_amount(result, "amount", amount)
        clean_date = self._check_date(result, "date", on_date)

        clean_wallet_id = wallet_id.strip() if isinstance(wallet_id, str) else ""
        if not clean_wallet_id:
            result.add(
                field="wallet_id",
                issue_type="missing",
                message="A wallet must be selected",
            )

        clean_type = None
        try:
            clean_type = TransactionType(transaction_type)
        except ValueError:
            result.add(
                field="type",
                issue_type="invalid_choice",
                message=f"Type must be 'income' or 'expense', got {transaction_type!r}",
            )

        self._raise_if_invalid(result)
        return clean_title, clean_amount, clean_wallet_id, clean_type, clean_date

    def validate_new_loan(
        self,
        name: Any,
        amount: Any,
        loan_type: Any,
        on_date: Any,
    ) -> tuple[str, Decimal, LoanType, dt.date]:
        result = ValidationResult()
        clean_name = self._check_name(result, "name", name)
        clean_amount = self._check_amount(result, "amount", amount)
        clean_date = self._check_date(result, "date", on_date)

        clean_type = None
        try:
            clean_type = LoanType(loan_type)
        except ValueError:
            result.add(
                field="type",
                issue_type="invalid_choice",
                message=f"Type must be 'get' or 'give', got {loan_type!r}",
            )

        self._raise_if_invalid(result)
        return clean_name, clean_amount, clean_type, clean_date

    @staticmethod
    def check_sufficient_balance(wallet: Wallet, amount: Decimal) -> None:
        """Expenses may not take a wallet below zero."""
        if amount > wallet.balance:
            raise InsufficientBalanceError(
                wallet_id=wallet.id,
                balance=wallet.balance,
                amount=amount,
            )
