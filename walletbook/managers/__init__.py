"""Record managers: wallets, transactions and loans."""

from walletbook.managers.loans import LoanManager
from walletbook.managers.transactions import TransactionManager
from walletbook.managers.wallets import WalletManager

__all__ = ["LoanManager", "TransactionManager", "WalletManager"]
