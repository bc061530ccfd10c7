"""
Registrar domain service - Name lease state machine.

This module contains the core business logic of the registrar: it
validates input, derives record addresses, moves fees and mutates
records, all inside a single store transaction per operation.

Name Lease Lifecycle
====================

    (absent) --register--> LIVE --expiry passes--> EXPIRED
    LIVE     --transfer--> LIVE      (owner changes)
    LIVE     --renew-----> LIVE      (expires_at += years * 365 days)
    EXPIRED  --renew-----> LIVE/EXPIRED (owner may still extend)
    EXPIRED  --register--> LIVE      (reclaimed, possibly by a new owner)

Records are never deleted; reclaiming overwrites the expired record in
place. The registry counter counts successful registrations, including
reclaims, and is never decremented.

Lock Ordering
=============

Operations that touch both the registry and a name record always load
the registry first. With row-level locking adapters this keeps
registration and renewal of the same name from deadlocking.
"""

from dataclasses import dataclass, field, replace

from .addresses import MAX_SEED_LENGTH, name_address, registry_address
from .events import (
    FeeUpdated,
    NameRegistered,
    NameRenewed,
    NameTransferred,
    RegistrarEvent,
    RegistryInitialized,
    ResolverUpdated,
)
from .exceptions import (
    AlreadyInitialized,
    AlreadyRegistered,
    InvalidRenewalPeriod,
    NameExpired,
    NotFound,
    NotInitialized,
    Unauthorized,
)
from .fees import FeeCollector
from .ports import AccountStore, AccountTransaction, Clock, EventPublisher
from .records import (
    DEFAULT_FEE_LAMPORTS,
    DEFAULT_LEASE_SECONDS,
    I64_MAX,
    U64_MAX,
    NameRecord,
    Registry,
)
from .validation import MAX_NAME_LENGTH, MIN_NAME_LENGTH, validate_name

MAX_RENEWAL_YEARS = 5


@dataclass
class RegistrarService:
    """
    Domain service for name registration.

    Orchestrates validation, address derivation, fee collection and
    record persistence. Each public operation runs in exactly one store
    transaction; any raised error leaves storage and balances untouched.
    """

    store: AccountStore
    clock: Clock
    events: EventPublisher
    program_id: bytes
    fee_collector: FeeCollector = field(default_factory=FeeCollector)
    default_fee_lamports: int = DEFAULT_FEE_LAMPORTS
    lease_seconds: int = DEFAULT_LEASE_SECONDS
    min_name_length: int = MIN_NAME_LENGTH
    max_name_length: int = MAX_NAME_LENGTH
    max_renewal_years: int = MAX_RENEWAL_YEARS

    def initialize(self, authority: str) -> Registry:
        """
        Create the registry singleton.

        Args:
            authority: Identity allowed to perform administrative operations

        Returns:
            The newly created registry

        Raises:
            AlreadyInitialized: If the registry already exists
        """
        address = registry_address(self.program_id)
        registry = Registry(
            authority=authority,
            total_registered=0,
            fee_lamports=self.default_fee_lamports,
        )
        with self.store.transaction() as tx:
            if not tx.insert(address, registry.to_bytes()):
                raise AlreadyInitialized("Registry is already initialized")
            now = self.clock.now()

        self._publish(RegistryInitialized(authority=authority, timestamp=now))
        return registry

    def register_name(self, name: str, owner: str, treasury: str) -> NameRecord:
        """
        Register a name to ``owner``, charging the registry fee to ``treasury``.

        A name whose previous lease has expired can be registered again;
        the expired record is replaced.

        Args:
            name: Name to register
            owner: Identity that pays the fee and receives the name
            treasury: Identity receiving the fee

        Returns:
            The created name record

        Raises:
            InvalidNameLength: If the name length is out of bounds
            InvalidNameCharacters: If the name has characters outside [a-z0-9_]
            NotInitialized: If the registry does not exist
            AlreadyRegistered: If a live record exists for the name
            InsufficientFunds: If the owner cannot pay the fee
        """
        validate_name(name, self.min_name_length, self.max_name_length)

        reg_address = registry_address(self.program_id)
        record_address = name_address(self.program_id, name)
        with self.store.transaction() as tx:
            registry = self._load_registry(tx, reg_address)
            now = self.clock.now()

            existing = tx.load(record_address)
            if existing is not None and not NameRecord.from_bytes(existing).is_expired(now):
                raise AlreadyRegistered(f"Name '{name}' is already registered")

            self.fee_collector.collect(tx, owner, treasury, registry.fee_lamports)

            expires_at = now + self.lease_seconds
            if expires_at > I64_MAX:
                raise OverflowError("expires_at overflow")
            record = NameRecord(
                name=name,
                owner=owner,
                expires_at=expires_at,
                registered_at=now,
            )
            if existing is None:
                if not tx.insert(record_address, record.to_bytes()):
                    raise AlreadyRegistered(f"Name '{name}' is already registered")
            else:
                # Reclaim: the expired record is overwritten in place
                tx.save(record_address, record.to_bytes())
            tx.save(reg_address, registry.record_registration().to_bytes())

        self._publish(NameRegistered(name=name, owner=owner, expires_at=record.expires_at))
        return record

    def transfer_name(self, name: str, owner: str, new_owner: str) -> NameRecord:
        """
        Hand a name over to ``new_owner``.

        Raises:
            NotFound: If no record exists for the name
            Unauthorized: If ``owner`` does not hold the name
            NameExpired: If the lease has run out
        """
        address = self._record_address(name)
        with self.store.transaction() as tx:
            current = self._load_owned(tx, address, name, owner)
            if current.is_expired(self.clock.now()):
                raise NameExpired(f"Name '{name}' has expired")
            record = replace(current, owner=new_owner)
            tx.save(address, record.to_bytes())

        self._publish(NameTransferred(name=name, previous_owner=owner, new_owner=new_owner))
        return record

    def renew_name(self, name: str, years: int, owner: str, treasury: str) -> NameRecord:
        """
        Extend a lease by ``years`` 365-day years.

        The fee is the registry fee multiplied by ``years``. An expired
        lease can still be renewed by its owner until someone reclaims it.

        Raises:
            InvalidRenewalPeriod: If ``years`` is outside 1..max_renewal_years
            NotInitialized: If the registry does not exist
            NotFound: If no record exists for the name
            Unauthorized: If ``owner`` does not hold the name
            InsufficientFunds: If the owner cannot pay the fee
        """
        if isinstance(years, bool) or not isinstance(years, int):
            raise InvalidRenewalPeriod("Renewal period must be a whole number of years")
        if not 1 <= years <= self.max_renewal_years:
            raise InvalidRenewalPeriod(
                f"Renewal period must be between 1 and {self.max_renewal_years} years"
            )

        reg_address = registry_address(self.program_id)
        record_address = self._record_address(name)
        with self.store.transaction() as tx:
            registry = self._load_registry(tx, reg_address, for_update=False)
            current = self._load_owned(tx, record_address, name, owner)
            record = current.extended(years)
            self.fee_collector.collect(tx, owner, treasury, registry.renewal_fee(years))
            tx.save(record_address, record.to_bytes())

        self._publish(NameRenewed(name=name, new_expiry=record.expires_at))
        return record

    def set_resolver(self, name: str, owner: str, resolver: str | None) -> NameRecord:
        """Point a name at a resolver identity, or clear it with None."""
        address = self._record_address(name)
        with self.store.transaction() as tx:
            current = self._load_owned(tx, address, name, owner)
            record = replace(current, resolver=resolver)
            tx.save(address, record.to_bytes())

        self._publish(ResolverUpdated(name=name, resolver=resolver))
        return record

    def update_fee(self, authority: str, new_fee: int) -> Registry:
        """
        Change the per-registration fee.

        Raises:
            NotInitialized: If the registry does not exist
            Unauthorized: If ``authority`` is not the registry authority
            ValueError: If the fee is not a u64
        """
        if not 0 <= new_fee <= U64_MAX:
            raise ValueError(f"fee must be between 0 and {U64_MAX}")

        address = registry_address(self.program_id)
        with self.store.transaction() as tx:
            current = self._load_registry(tx, address)
            if current.authority != authority:
                raise Unauthorized("Only the registry authority can update the fee")
            registry = replace(current, fee_lamports=new_fee)
            tx.save(address, registry.to_bytes())

        self._publish(FeeUpdated(previous_fee=current.fee_lamports, new_fee=new_fee))
        return registry

    def get_registry(self) -> Registry:
        address = registry_address(self.program_id)
        with self.store.transaction() as tx:
            return self._load_registry(tx, address, for_update=False)

    def get_name(self, name: str) -> NameRecord:
        address = self._record_address(name)
        with self.store.transaction() as tx:
            data = tx.load(address, for_update=False)
        if data is None:
            raise NotFound(f"Name '{name}' is not registered")
        return NameRecord.from_bytes(data)

    def deposit(self, identity: str, lamports: int) -> int:
        """
        Credit lamports to an identity (development faucet).

        Returns:
            The identity's new balance
        """
        if lamports <= 0:
            raise ValueError("deposit must be positive")
        with self.store.transaction() as tx:
            tx.credit(identity, lamports)
            return tx.balance(identity)

    def balance_of(self, identity: str) -> int:
        with self.store.transaction() as tx:
            return tx.balance(identity)

    def _record_address(self, name: str) -> bytes:
        # Names longer than a seed can never have been registered
        if len(name.encode("utf-8")) > MAX_SEED_LENGTH:
            raise NotFound(f"Name '{name}' is not registered")
        return name_address(self.program_id, name)

    def _load_registry(
        self, tx: AccountTransaction, address: bytes, *, for_update: bool = True
    ) -> Registry:
        data = tx.load(address, for_update=for_update)
        if data is None:
            raise NotInitialized("Registry has not been initialized")
        return Registry.from_bytes(data)

    def _load_owned(
        self, tx: AccountTransaction, address: bytes, name: str, owner: str
    ) -> NameRecord:
        data = tx.load(address)
        if data is None:
            raise NotFound(f"Name '{name}' is not registered")
        record = NameRecord.from_bytes(data)
        if record.owner != owner:
            raise Unauthorized(f"Not the owner of '{name}'")
        return record

    def _publish(self, event: RegistrarEvent) -> None:
        self.events.publish(event)
