"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the registrar requires
from infrastructure. Adapters implement these protocols.
"""

from contextlib import AbstractContextManager
from typing import Protocol

from .events import RegistrarEvent


class Clock(Protocol):
    """Port interface for the current time."""

    def now(self) -> int:
        """Return the current unix timestamp in whole seconds."""
        ...


class AccountTransaction(Protocol):
    """
    One indivisible unit of work against keyed storage and the balance ledger.

    All reads and writes made through a transaction either commit together
    when the owning context manager exits cleanly, or are discarded when it
    exits with an exception.
    """

    def load(self, address: bytes, *, for_update: bool = True) -> bytes | None:
        """
        Read the raw record stored at a derived address.

        Args:
            address: 32-byte derived address
            for_update: Lock the record against concurrent writers until
                the transaction ends. Pass False for read-only access.

        Returns:
            Stored bytes, or None if no record exists at the address
        """
        ...

    def save(self, address: bytes, data: bytes) -> None:
        """Create or overwrite the record stored at a derived address."""
        ...

    def insert(self, address: bytes, data: bytes) -> bool:
        """
        Create a record only if the address is free.

        Returns:
            True if the record was created, False if the address was taken
        """
        ...

    def balance(self, identity: str) -> int:
        """
        Read and lock an identity's balance.

        Returns:
            Balance in lamports (0 for identities never credited)
        """
        ...

    def debit(self, identity: str, lamports: int) -> None:
        """
        Subtract lamports from an identity's balance.

        Raises:
            InsufficientFunds: If the balance is below the amount
        """
        ...

    def credit(self, identity: str, lamports: int) -> None:
        """Add lamports to an identity's balance."""
        ...


class AccountStore(Protocol):
    """Port interface for transactional keyed storage."""

    def transaction(self) -> AbstractContextManager[AccountTransaction]:
        """Open a transaction that commits on clean exit and rolls back on error."""
        ...

    def ping(self) -> None:
        """Raise if the backing storage is unreachable."""
        ...


class EventPublisher(Protocol):
    """Port interface for domain event delivery."""

    def publish(self, event: RegistrarEvent) -> None:
        """
        Deliver a committed domain event.

        Args:
            event: One of the registrar event dataclasses
        """
        ...
