"""
PostgreSQL account store adapter - Implements AccountStore protocol.

This module provides the PostgreSQL implementation of the domain's
keyed storage port using psycopg3 with raw SQL.

Concurrency Design - Per-Key Serializability:
---------------------------------------------
Each registrar operation runs in one database transaction. Rows are
locked as they are read:

1. **SELECT ... FOR UPDATE** on every record the operation will write
   (registry row for registration and fee updates, the name row, the
   payer's balance row). Concurrent operations on the same key queue
   behind the lock; operations on disjoint names proceed in parallel.

2. **SELECT ... FOR SHARE** for read-only dependencies (the registry row
   during renewal), so renewals of different names do not serialize on
   the registry.

3. **INSERT ... ON CONFLICT DO NOTHING** for records that must not exist
   yet. Absent rows cannot be locked, so creation relies on the primary
   key constraint instead.

4. **Conditional debit**: ``UPDATE ... WHERE lamports >= amount`` keeps
   balances non-negative even if a caller skipped the balance check.

Any exception raised inside the transaction block rolls back every write
made by the operation.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from psycopg import Cursor
from psycopg_pool import ConnectionPool

from registrar.domain.exceptions import InsufficientFunds

logger = logging.getLogger(__name__)


class PostgresTransaction:
    """Implements AccountTransaction over an open psycopg cursor."""

    def __init__(self, cursor: Cursor) -> None:
        self._cursor = cursor

    def load(self, address: bytes, *, for_update: bool = True) -> bytes | None:
        if for_update:
            sql = "SELECT data FROM accounts WHERE address = %s FOR UPDATE"
        else:
            sql = "SELECT data FROM accounts WHERE address = %s FOR SHARE"
        self._cursor.execute(sql, (address,))
        row = self._cursor.fetchone()
        return bytes(row[0]) if row is not None else None

    def save(self, address: bytes, data: bytes) -> None:
        self._cursor.execute(
            """
            INSERT INTO accounts (address, data, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (address) DO UPDATE
            SET data = EXCLUDED.data,
                updated_at = NOW()
            """,
            (address, data),
        )

    def insert(self, address: bytes, data: bytes) -> bool:
        self._cursor.execute(
            """
            INSERT INTO accounts (address, data, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (address) DO NOTHING
            """,
            (address, data),
        )
        # Returns 1 if the row was created, 0 if the address was taken
        return self._cursor.rowcount == 1

    def balance(self, identity: str) -> int:
        self._cursor.execute(
            "SELECT lamports FROM balances WHERE identity = %s FOR UPDATE",
            (identity,),
        )
        row = self._cursor.fetchone()
        return int(row[0]) if row is not None else 0

    def debit(self, identity: str, lamports: int) -> None:
        self._cursor.execute(
            """
            UPDATE balances
            SET lamports = lamports - %s
            WHERE identity = %s AND lamports >= %s
            """,
            (lamports, identity, lamports),
        )
        if self._cursor.rowcount != 1:
            raise InsufficientFunds(
                f"Balance of {identity} is below the required fee of {lamports} lamports"
            )

    def credit(self, identity: str, lamports: int) -> None:
        self._cursor.execute(
            """
            INSERT INTO balances (identity, lamports)
            VALUES (%s, %s)
            ON CONFLICT (identity) DO UPDATE
            SET lamports = balances.lamports + EXCLUDED.lamports
            """,
            (identity, lamports),
        )


class PostgresAccountStore:
    """
    Implements AccountStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    @contextmanager
    def transaction(self) -> Iterator[PostgresTransaction]:
        """
        Open one database transaction.

        Commits when the block exits cleanly; rolls back and re-raises
        when it exits with an exception.
        """
        with self._pool.connection() as conn, conn.transaction(), conn.cursor() as cursor:
            yield PostgresTransaction(cursor)

    def ping(self) -> None:
        with self._pool.connection() as conn:
            conn.execute("SELECT 1")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: registrar/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
