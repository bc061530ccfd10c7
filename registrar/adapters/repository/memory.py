"""
In-memory account store adapter - Implements AccountStore protocol.

Keeps records and balances in process memory for development and tests.
A transaction stages its writes and applies them only when the block
exits cleanly; an exception discards the staged writes. Transactions
are serialized by a single store lock.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from registrar.domain.exceptions import InsufficientFunds


@dataclass(frozen=True)
class StoreSnapshot:
    """Immutable copy of store contents."""

    accounts: tuple[tuple[bytes, bytes], ...]
    balances: tuple[tuple[str, int], ...]


class InMemoryTransaction:
    """Implements AccountTransaction over staged copies of the store maps."""

    def __init__(self, accounts: dict[bytes, bytes], balances: dict[str, int]) -> None:
        self._accounts = accounts
        self._balances = balances
        self._staged_accounts: dict[bytes, bytes] = {}
        self._staged_balances: dict[str, int] = {}

    def load(self, address: bytes, *, for_update: bool = True) -> bytes | None:
        if address in self._staged_accounts:
            return self._staged_accounts[address]
        return self._accounts.get(address)

    def save(self, address: bytes, data: bytes) -> None:
        self._staged_accounts[address] = bytes(data)

    def insert(self, address: bytes, data: bytes) -> bool:
        if self.load(address) is not None:
            return False
        self.save(address, data)
        return True

    def balance(self, identity: str) -> int:
        if identity in self._staged_balances:
            return self._staged_balances[identity]
        return self._balances.get(identity, 0)

    def debit(self, identity: str, lamports: int) -> None:
        current = self.balance(identity)
        if current < lamports:
            raise InsufficientFunds(
                f"Balance {current} is below the required fee of {lamports} lamports"
            )
        self._staged_balances[identity] = current - lamports

    def credit(self, identity: str, lamports: int) -> None:
        self._staged_balances[identity] = self.balance(identity) + lamports

    def apply(self) -> None:
        self._accounts.update(self._staged_accounts)
        self._balances.update(self._staged_balances)


class InMemoryAccountStore:
    """
    Implements AccountStore protocol with process-local dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._accounts: dict[bytes, bytes] = {}
        self._balances: dict[str, int] = {}
        self._lock = threading.Lock()

    @contextmanager
    def transaction(self) -> Iterator[InMemoryTransaction]:
        with self._lock:
            tx = InMemoryTransaction(self._accounts, self._balances)
            yield tx
            tx.apply()

    def ping(self) -> None:
        return None

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(
                accounts=tuple(sorted(self._accounts.items())),
                balances=tuple(sorted(self._balances.items())),
            )
