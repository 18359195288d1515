"""Input validation package."""

from walletbook.validation.validator import (
    InsufficientBalanceError,
    InvalidStatusTransitionError,
    RecordValidator,
    ValidationError,
)

__all__ = [
    "InsufficientBalanceError",
    "InvalidStatusTransitionError",
    "RecordValidator",
    "ValidationError",
]
