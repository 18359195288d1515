"""
Shared fixtures.

Every manager runs against InMemoryStorage with a fixed clock
(2024-12-15) and the default id-ID amount format.
"""

import datetime as dt

import pytest

from walletbook.config import LocaleSettings
from walletbook.managers import LoanManager, TransactionManager, WalletManager
from walletbook.services.storage import Collection, InMemoryStorage
from walletbook.validation import RecordValidator


TODAY = dt.date(2024, 12, 15)


def wallet_record(wallet_id: str, balance: int, name: str = "Cash") -> dict:
    """A wallet as the app stores it."""
    return {
        "id": wallet_id,
        "name": name,
        "balance": balance,
        "initialBalance": balance,
        "createdAt": "2024-12-01T08:00:00.000Z",
    }


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def validator():
    return RecordValidator(LocaleSettings(thousands_separator=".", decimal_separator=","))


@pytest.fixture
def wallet_manager(storage, validator):
    return WalletManager(storage, validator=validator)


@pytest.fixture
def transaction_manager(storage, wallet_manager, validator):
    return TransactionManager(
        storage,
        wallet_manager,
        validator=validator,
        clock=lambda: TODAY,
    )


@pytest.fixture
def loan_manager(storage, wallet_manager, validator):
    return LoanManager(
        storage,
        wallet_manager,
        validator=validator,
        clock=lambda: TODAY,
    )


@pytest.fixture
def seeded_storage():
    """Two wallets already on disk: '1' with 100000 and '2' with 50000."""
    return InMemoryStorage({
        Collection.WALLETS: [
            wallet_record("1", 100000, name="Cash"),
            wallet_record("2", 50000, name="Bank"),
        ],
    })
