"""
Tests for the structured activity log.
"""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from walletbook.activity import ActivityLogger, create_correlation_id


class TestActivityEvents:
    """Tests for emitted events."""

    def test_balance_adjustment_event(self):
        """Test amounts are logged as exact strings with the correlation id."""
        correlation_id = create_correlation_id()
        with capture_logs() as events:
            ActivityLogger().log_balance_adjusted(
                "w1", Decimal("100000"), Decimal("70000"), correlation_id,
            )

        assert events == [{
            "event": "balance_adjusted",
            "log_level": "info",
            "wallet_id": "w1",
            "before": "100000",
            "after": "70000",
            "correlation_id": str(correlation_id),
        }]

    def test_none_fields_are_dropped(self):
        """Test optional context is omitted rather than logged as None."""
        with capture_logs() as events:
            ActivityLogger().log_transaction_rejected("insufficient_balance", wallet_id="w1")

        assert events[0]["log_level"] == "warning"
        assert "details" not in events[0]

    def test_partial_write_is_an_error(self):
        """Test the wallet/ledger mismatch names both ids."""
        with capture_logs() as events:
            ActivityLogger().log_partial_write("w1", "t1", "disk full")

        assert events[0]["event"] == "partial_write"
        assert events[0]["log_level"] == "error"
        assert (events[0]["wallet_id"], events[0]["transaction_id"]) == ("w1", "t1")

    def test_logging_failure_does_not_raise(self):
        """Test a broken log sink never reaches the caller."""
        activity = ActivityLogger()
        activity._logger = MagicMock()
        activity._logger.info.side_effect = RuntimeError("sink closed")

        activity.log_loan_paid("l1")

        activity._logger.info.assert_called_once_with("loan_paid", loan_id="l1")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
