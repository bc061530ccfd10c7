"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A controllable clock
- An in-memory account store with funded identities
- A registrar service wired to both
"""

from unittest.mock import Mock

import pytest

from registrar.adapters.repository.memory import InMemoryAccountStore
from registrar.domain.registrar import RegistrarService
from tests.support import ALICE, AUTHORITY, BOB, FEE, PROGRAM_ID, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryAccountStore:
    """In-memory store with Alice and Bob funded for ten registrations each."""
    store = InMemoryAccountStore()
    with store.transaction() as tx:
        tx.credit(ALICE, 10 * FEE)
        tx.credit(BOB, 10 * FEE)
    return store


@pytest.fixture
def events() -> Mock:
    return Mock()


@pytest.fixture
def service(store: InMemoryAccountStore, clock: FakeClock, events: Mock) -> RegistrarService:
    return RegistrarService(store=store, clock=clock, events=events, program_id=PROGRAM_ID)


@pytest.fixture
def initialized(service: RegistrarService) -> RegistrarService:
    """Service whose registry has already been initialized by AUTHORITY."""
    service.initialize(AUTHORITY)
    return service
