"""
Data Models Package

This package contains all Pydantic models used in Walletbook.
Every record read from or written to storage must conform to these schemas.
"""

from walletbook.models.ledger import (
    Amount,
    Loan,
    LoanStatus,
    LoanTotals,
    LoanType,
    StoredRecord,
    Transaction,
    TransactionTotals,
    TransactionType,
    Wallet,
    WalletPatch,
    new_record_id,
    utc_now,
)
from walletbook.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Ledger models
    "Amount",
    "Loan",
    "LoanStatus",
    "LoanTotals",
    "LoanType",
    "StoredRecord",
    "Transaction",
    "TransactionTotals",
    "TransactionType",
    "Wallet",
    "WalletPatch",
    "new_record_id",
    "utc_now",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
