"""
Unit tests for FeeCollector.

Tests fee movement against a mocked store transaction.
"""

from unittest.mock import Mock, call

import pytest

from registrar.domain.exceptions import InsufficientFunds
from registrar.domain.fees import FeeCollector


class TestCollect:
    """Tests for FeeCollector.collect()."""

    def test_moves_fee_from_payer_to_treasury(self) -> None:
        tx = Mock()
        tx.balance.return_value = 500

        FeeCollector().collect(tx, "alice", "treasury", 200)

        tx.debit.assert_called_once_with("alice", 200)
        tx.credit.assert_called_once_with("treasury", 200)

    def test_debits_before_crediting(self) -> None:
        tx = Mock()
        tx.balance.return_value = 500

        FeeCollector().collect(tx, "alice", "treasury", 200)

        assert tx.mock_calls[2:] == [call.debit("alice", 200), call.credit("treasury", 200)]

    def test_balance_rows_locked_in_sorted_order(self) -> None:
        """Crossed payments must take balance locks in the same order."""
        forward = Mock()
        forward.balance.return_value = 500
        backward = Mock()
        backward.balance.return_value = 500

        FeeCollector().collect(forward, "alice", "bob", 200)
        FeeCollector().collect(backward, "bob", "alice", 200)

        assert forward.balance.call_args_list == [call("alice"), call("bob")]
        assert backward.balance.call_args_list == [call("alice"), call("bob")]

    def test_self_payment_locks_once(self) -> None:
        tx = Mock()
        tx.balance.return_value = 500

        FeeCollector().collect(tx, "alice", "alice", 200)

        tx.balance.assert_called_once_with("alice")

    def test_exact_balance_is_enough(self) -> None:
        tx = Mock()
        tx.balance.return_value = 200

        FeeCollector().collect(tx, "alice", "treasury", 200)

        tx.debit.assert_called_once()

    def test_insufficient_balance_raises_without_moving_funds(self) -> None:
        tx = Mock()
        tx.balance.return_value = 199

        with pytest.raises(InsufficientFunds):
            FeeCollector().collect(tx, "alice", "treasury", 200)

        tx.debit.assert_not_called()
        tx.credit.assert_not_called()

    def test_zero_fee_is_noop(self) -> None:
        tx = Mock()

        FeeCollector().collect(tx, "alice", "treasury", 0)

        assert tx.mock_calls == []

    def test_negative_fee_rejected(self) -> None:
        with pytest.raises(ValueError):
            FeeCollector().collect(Mock(), "alice", "treasury", -1)
