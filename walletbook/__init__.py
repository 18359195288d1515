"""
Walletbook - Source Package

A personal finance tracker for wallets, income/expense transactions
and loans, persisted as JSON collections on the local device.

DESIGN PRINCIPLES:
1. Validate everything before the first write
2. Wallet balances change only through recorded transactions or explicit edits
3. Malformed stored records are rejected, never repaired
4. Storage layer is swappable
"""

__version__ = "1.0.0"
