"""
Core Data Models for Walletbook

These models define the strict schemas for every record that is persisted.
They are designed to:
1. Enforce type safety at runtime
2. Reject malformed records at the storage boundary
3. Serialize to the stored JSON layout (camelCase keys, numeric amounts)

DESIGN DECISION: Python attributes are snake_case, persisted keys are
camelCase. Both names are accepted when a record is constructed, so
manager code and stored JSON can use whichever is natural.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Annotated, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
)
from pydantic.alias_generators import to_camel


def _amount_to_json(value: Decimal) -> Union[int, float]:
    """Store whole amounts as integers, fractional ones as floats."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


Amount = Annotated[
    Decimal,
    PlainSerializer(_amount_to_json, return_type=Union[int, float], when_used="json"),
]


def new_record_id() -> str:
    """Opaque unique identifier shared by every record type."""
    return uuid4().hex


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction's effect on its wallet balance."""
    INCOME = "income"    # balance += amount
    EXPENSE = "expense"  # balance -= amount


class LoanType(str, Enum):
    """
    Who owes whom.

    GET: money owed TO the user.
    GIVE: money the user owes.
    """
    GET = "get"
    GIVE = "give"


class LoanStatus(str, Enum):
    """
    Loan settlement status.

    CRITICAL: ACTIVE -> PAID is the only transition. PAID is terminal.
    """
    ACTIVE = "active"
    PAID = "paid"


# =============================================================================
# PERSISTED RECORDS
# =============================================================================

class StoredRecord(BaseModel):
    """Shared configuration for every persisted record."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: str = Field(
        default_factory=new_record_id,
        min_length=1,
        description="Unique record ID"
    )
    created_at: dt.datetime = Field(
        default_factory=utc_now,
        description="When the record was created"
    )


class Wallet(StoredRecord):
    """
    A named account holding a balance.

    Owned exclusively by the wallet manager. Transactions and loans
    reference a wallet by `account_id` but never own it.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Wallet name"
    )
    balance: Amount = Field(
        ...,
        description="Current balance"
    )
    initial_balance: Amount = Field(
        ...,
        ge=0,
        description="Balance the wallet was opened with"
    )


class Transaction(StoredRecord):
    """
    A single income or expense event against exactly one wallet.

    `account` is the wallet name at the time of recording, kept so the
    ledger stays readable after a wallet is renamed or deleted.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Transaction title"
    )
    amount: Amount = Field(
        ...,
        gt=0,
        description="Transaction amount (always positive; sign comes from type)"
    )
    category: str = Field(
        default="",
        description="Free-text category"
    )
    account: str = Field(
        default="",
        description="Wallet name when the transaction was recorded"
    )
    account_id: str = Field(
        ...,
        min_length=1,
        description="ID of the wallet this transaction adjusted"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    type: TransactionType

    @property
    def signed_amount(self) -> Decimal:
        """Amount as it affects the wallet balance."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount


class Loan(StoredRecord):
    """
    A tracked debt, independent of wallet balances.

    Linking a wallet is purely informational; creating or settling
    a loan never moves money between wallets.
    """

    name: str = Field(
        ...,
        min_length=1,
        description="Counterparty name"
    )
    amount: Amount = Field(
        ...,
        gt=0,
        description="Loan amount"
    )
    note: str = ""
    date: dt.date
    type: LoanType
    status: LoanStatus = Field(
        default=LoanStatus.ACTIVE,
        description="Settlement status"
    )
    account: Optional[str] = None
    account_id: Optional[str] = None

    @property
    def is_outstanding(self) -> bool:
        return self.status != LoanStatus.PAID


# =============================================================================
# OPERATION INPUTS / OUTPUTS
# =============================================================================

class WalletPatch(BaseModel):
    """
    Fields a direct wallet edit may overwrite. None means unchanged.

    A balance may be given as typed by the user ("1.500.000"); the
    validator turns it into a Decimal before it is applied.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = None
    balance: Optional[Union[Decimal, str]] = None

    @property
    def is_empty(self) -> bool:
        return self.name is None and self.balance is None


class TransactionTotals(BaseModel):
    """Income and expense sums over a list of transactions."""

    income: Decimal = Field(default=Decimal("0"), ge=0)
    expense: Decimal = Field(default=Decimal("0"), ge=0)

    @property
    def net(self) -> Decimal:
        return self.income - self.expense


class LoanTotals(BaseModel):
    """Outstanding loan sums, split by direction."""

    get: Decimal = Field(default=Decimal("0"), ge=0)
    give: Decimal = Field(default=Decimal("0"), ge=0)
