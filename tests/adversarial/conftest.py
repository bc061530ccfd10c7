"""
Shared fixtures for adversarial tests.

Provides common infrastructure for concurrency attack simulations,
which are skipped when the configured database cannot be reached.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from registrar.adapters.repository.postgres import run_migrations
from registrar.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for adversarial tests, with the schema migrated."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=5)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not reachable")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean accounts and balances before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM accounts")
        conn.execute("DELETE FROM balances")
    yield
