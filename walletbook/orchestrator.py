"""
Application Wiring for Walletbook

This module ties the components together. Storage is created once and
handed explicitly to every manager; no manager reaches for a global
store, so tests and alternative front ends can substitute their own.

The presentation layer (screens, forms, navigation) is not part of this
package. It calls the managers returned here, renders their results,
and re-queries them whenever a screen regains focus.
"""

import datetime as dt
from pathlib import Path
from typing import Callable, NamedTuple, Optional

from walletbook.activity import ActivityLogger, configure_logging
from walletbook.config import get_settings
from walletbook.managers import LoanManager, TransactionManager, WalletManager
from walletbook.services.storage import (
    CollectionStorageInterface,
    InMemoryStorage,
    JsonFileStorage,
)
from walletbook.validation import RecordValidator


class AppComponents(NamedTuple):
    """Everything a front end needs, sharing one storage backend."""
    storage: CollectionStorageInterface
    wallets: WalletManager
    transactions: TransactionManager
    loans: LoanManager
    activity_logger: ActivityLogger


def create_storage(
    backend: Optional[str] = None,
    data_dir: Optional[Path] = None,
) -> CollectionStorageInterface:
    """
    Build the configured storage backend.

    Args:
        backend: 'json' or 'memory'; defaults to the configured backend
        data_dir: Overrides the configured data directory for 'json'
    """
    settings = get_settings().storage
    backend = backend or settings.backend

    if backend == "memory":
        return InMemoryStorage()
    if backend == "json":
        return JsonFileStorage(data_dir or settings.data_dir)
    raise ValueError(f"Unknown storage backend: {backend}")


def create_app_components(
    storage: Optional[CollectionStorageInterface] = None,
    clock: Callable[[], dt.date] = dt.date.today,
    setup_logging: bool = False,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        storage: Storage backend to use. Built from settings if None.
        clock: Source of "today" for default dates and the current month.
        setup_logging: Configure log output at the configured level.
                       Entry points pass True; libraries and tests leave it.

    Returns:
        AppComponents with all three managers sharing one storage
    """
    settings = get_settings()

    if setup_logging:
        configure_logging(settings.app.log_level)

    if storage is None:
        storage = create_storage()
    activity_logger = ActivityLogger()
    validator = RecordValidator(settings.locale)

    wallets = WalletManager(
        storage,
        validator=validator,
        activity_logger=activity_logger,
    )
    transactions = TransactionManager(
        storage,
        wallets,
        validator=validator,
        activity_logger=activity_logger,
        clock=clock,
    )
    loans = LoanManager(
        storage,
        wallets,
        validator=validator,
        activity_logger=activity_logger,
        clock=clock,
    )

    return AppComponents(
        storage=storage,
        wallets=wallets,
        transactions=transactions,
        loans=loans,
        activity_logger=activity_logger,
    )
