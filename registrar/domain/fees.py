"""
Fee collection - Moves lamports from a payer to a treasury.

The movement happens inside the caller's store transaction, so a failure
later in the same operation rolls the fee back with everything else.
"""

import logging

from .exceptions import InsufficientFunds
from .ports import AccountTransaction

logger = logging.getLogger(__name__)


class FeeCollector:
    """Charges fees against the balance ledger of an open transaction."""

    def collect(
        self, tx: AccountTransaction, payer: str, treasury: str, lamports: int
    ) -> None:
        """
        Move ``lamports`` from ``payer`` to ``treasury``.

        Args:
            tx: Open store transaction
            payer: Identity paying the fee
            treasury: Identity receiving the fee
            lamports: Fee amount (zero is a no-op)

        Raises:
            InsufficientFunds: If the payer balance is below the fee
        """
        if lamports < 0:
            raise ValueError("fee must be non-negative")
        if lamports == 0:
            return

        # Lock both balance rows in a fixed order so crossed payments cannot deadlock
        balances = {identity: tx.balance(identity) for identity in sorted({payer, treasury})}
        available = balances[payer]
        if available < lamports:
            raise InsufficientFunds(
                f"Balance {available} is below the required fee of {lamports} lamports"
            )

        tx.debit(payer, lamports)
        tx.credit(treasury, lamports)
        logger.debug("Collected %d lamports from %s to %s", lamports, payer, treasury)
