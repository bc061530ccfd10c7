"""
Domain events - Facts emitted after a registrar operation commits.

Events are published only once the store transaction has committed, so
subscribers never observe an operation that was later rolled back.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RegistryInitialized:
    authority: str
    timestamp: int


@dataclass(frozen=True)
class NameRegistered:
    name: str
    owner: str
    expires_at: int


@dataclass(frozen=True)
class NameTransferred:
    name: str
    previous_owner: str
    new_owner: str


@dataclass(frozen=True)
class NameRenewed:
    name: str
    new_expiry: int


@dataclass(frozen=True)
class ResolverUpdated:
    name: str
    resolver: str | None


@dataclass(frozen=True)
class FeeUpdated:
    previous_fee: int
    new_fee: int


RegistrarEvent = (
    RegistryInitialized
    | NameRegistered
    | NameTransferred
    | NameRenewed
    | ResolverUpdated
    | FeeUpdated
)
