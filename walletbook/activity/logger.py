"""
Activity Logger

DESIGN DECISION: Every state-changing operation is logged as a structured
event. This provides:
1. Traceability of balance changes back to the operation that made them
2. Debugging capability when a wallet and the ledger disagree
3. A record of partial writes (see log_partial_write)

Events go to the local structured log only; nothing is persisted
alongside the collections.

The activity logger:
- Never raises into business logic
- Accepts an optional correlation ID to group events of one user action
"""

import logging
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID, uuid4

import structlog


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """
    Route structured events to stderr at the given level.

    Entry points call this once; library code only logs.
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))
    logging.getLogger("walletbook").setLevel(level.upper())


def _amount(value: Decimal) -> str:
    return str(value)


class ActivityLogger:
    """
    Central activity logging service.

    Managers receive one optionally; with none, they stay silent.
    """

    def __init__(self, logger_name: str = "walletbook.activity"):
        self._logger = structlog.get_logger(logger_name)

    def _emit(self, level: str, event: str, **fields: Any) -> None:
        fields = {key: value for key, value in fields.items() if value is not None}
        try:
            getattr(self._logger, level)(event, **fields)
        except Exception:  # logging must never break a balance update
            logging.getLogger(__name__).exception("activity_log_failed")

    # -------------------------------------------------------------------------
    # Wallets
    # -------------------------------------------------------------------------

    def log_wallet_created(self, wallet_id: str, name: str, initial_balance: Decimal) -> None:
        self._emit(
            "info", "wallet_created",
            wallet_id=wallet_id, name=name, initial_balance=_amount(initial_balance),
        )

    def log_wallet_edited(self, wallet_id: str, changed_fields: list[str]) -> None:
        self._emit("info", "wallet_edited", wallet_id=wallet_id, changed_fields=changed_fields)

    def log_wallet_edit_missed(self, wallet_id: str) -> None:
        """Edit of an unknown wallet: a no-op, but worth seeing."""
        self._emit("warning", "wallet_edit_missed", wallet_id=wallet_id)

    def log_wallet_deleted(self, wallet_id: str, existed: bool) -> None:
        self._emit("info", "wallet_deleted", wallet_id=wallet_id, existed=existed)

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def log_balance_adjusted(
        self,
        wallet_id: str,
        before: Decimal,
        after: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._emit(
            "info", "balance_adjusted",
            wallet_id=wallet_id,
            before=_amount(before),
            after=_amount(after),
            correlation_id=str(correlation_id) if correlation_id else None,
        )

    def log_transaction_recorded(
        self,
        transaction_id: str,
        wallet_id: str,
        transaction_type: str,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._emit(
            "info", "transaction_recorded",
            transaction_id=transaction_id,
            wallet_id=wallet_id,
            type=transaction_type,
            amount=_amount(amount),
            correlation_id=str(correlation_id) if correlation_id else None,
        )

    def log_transaction_rejected(
        self,
        reason: str,
        wallet_id: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        self._emit(
            "warning", "transaction_rejected",
            reason=reason, wallet_id=wallet_id, details=details,
        )

    def log_partial_write(
        self,
        wallet_id: str,
        transaction_id: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """The wallet was saved but the transaction was not; balance and ledger now differ."""
        self._emit(
            "error", "partial_write",
            wallet_id=wallet_id,
            transaction_id=transaction_id,
            error_message=error_message,
            correlation_id=str(correlation_id) if correlation_id else None,
        )

    def log_transaction_deleted(self, transaction_id: str, existed: bool) -> None:
        self._emit("info", "transaction_deleted", transaction_id=transaction_id, existed=existed)

    # -------------------------------------------------------------------------
    # Loans
    # -------------------------------------------------------------------------

    def log_loan_created(self, loan_id: str, loan_type: str, amount: Decimal) -> None:
        self._emit("info", "loan_created", loan_id=loan_id, type=loan_type, amount=_amount(amount))

    def log_loan_paid(self, loan_id: str) -> None:
        self._emit("info", "loan_paid", loan_id=loan_id)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> None:
        self._emit(
            "error", "system_error",
            error_type=error_type, error_message=error_message, details=details,
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action and pass it through
    every operation that action triggers.
    """
    return uuid4()
