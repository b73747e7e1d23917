"""
PostgreSQL repository adapter - Implements RegistrationRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Uniqueness Design - Closing the Check-Then-Act Race:
---------------------------------------------------
The domain service looks up an email before creating a registration, but
two concurrent requests can both pass that lookup. The ``registrations``
table therefore carries a UNIQUE index on ``email``:

1. **INSERT ... ON CONFLICT (id) DO UPDATE**: save() is an upsert keyed by
   id, so the second write (notification flags) updates in place.

2. **UNIQUE (email)**: a second insert for an already-registered email
   fails atomically with UniqueViolation, which is translated into the
   domain's EmailAlreadyRegistered.

References:
- migrations/001_create_registrations.sql
"""

import logging
from pathlib import Path

import psycopg
from psycopg.errors import UniqueViolation
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailAlreadyRegistered
from src.domain.models import RegistrationRecord, RegistrationStatus

logger = logging.getLogger(__name__)

# src/adapters/repository/postgres.py -> <project root>/migrations
MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"

_COLUMNS = (
    "id, first_name, last_name, email, schedule, status, "
    "email_sent, admin_notification_sent, created_at, updated_at"
)


def _row_to_record(row: tuple) -> RegistrationRecord:
    return RegistrationRecord(
        id=row[0],
        first_name=row[1],
        last_name=row[2],
        email=row[3],
        schedule=row[4],
        status=RegistrationStatus(row[5]),
        email_sent=row[6],
        admin_notification_sent=row[7],
        created_at=row[8],
        updated_at=row[9],
    )


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_email(self, email: str) -> RegistrationRecord | None:
        """
        Fetch a registration by normalized email.

        Args:
            email: Normalized email address (lowercase, stripped)

        Returns:
            The registration, or None if the email is not registered
        """
        sql = f"SELECT {_COLUMNS} FROM registrations WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email.lower(),))
            row = cursor.fetchone()
        return _row_to_record(row) if row is not None else None

    def find_by_id(self, registration_id: str) -> RegistrationRecord | None:
        """
        Fetch a registration by exact id.

        Args:
            registration_id: Registration identifier

        Returns:
            The registration, or None if no row has this id
        """
        sql = f"SELECT {_COLUMNS} FROM registrations WHERE id = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (registration_id,))
            row = cursor.fetchone()
        return _row_to_record(row) if row is not None else None

    def save(self, record: RegistrationRecord) -> RegistrationRecord:
        """
        Insert or update a registration keyed by id.

        created_at is written on insert only; every other column is
        overwritten on update.

        Args:
            record: Registration to persist

        Returns:
            The persisted registration as stored

        Raises:
            EmailAlreadyRegistered: If another registration owns the email
        """
        sql = f"""
            INSERT INTO registrations ({_COLUMNS})
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE
            SET first_name = EXCLUDED.first_name,
                last_name = EXCLUDED.last_name,
                email = EXCLUDED.email,
                schedule = EXCLUDED.schedule,
                status = EXCLUDED.status,
                email_sent = EXCLUDED.email_sent,
                admin_notification_sent = EXCLUDED.admin_notification_sent,
                updated_at = EXCLUDED.updated_at
            RETURNING {_COLUMNS}
        """
        params = (
            record.id,
            record.first_name,
            record.last_name,
            record.email.lower(),
            record.schedule,
            record.status.value,
            record.email_sent,
            record.admin_notification_sent,
            record.created_at,
            record.updated_at,
        )

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
        except UniqueViolation as exc:
            # Only the email index can collide; id conflicts are upserts
            raise EmailAlreadyRegistered(record.email.lower()) from exc

        return _row_to_record(row)


class MigrationError(RuntimeError):
    """A migration file could not be applied."""

    def __init__(self, script: str) -> None:
        self.script = script
        super().__init__(f"Database migration failed: {script}")


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """
    Apply every ``*.sql`` file in migrations_dir, in filename order.

    All files run inside one transaction, so a failing file leaves the
    schema untouched. Files must be idempotent since they run on every
    startup.

    Returns:
        Names of the applied files

    Raises:
        MigrationError: If any file fails; the failing file is named
    """
    scripts = sorted(migrations_dir.glob("*.sql")) if migrations_dir.is_dir() else []
    if not scripts:
        logger.warning("No migrations found in %s", migrations_dir)
        return []

    applied: list[str] = []
    with pool.connection() as conn, conn.transaction():
        for script in scripts:
            try:
                conn.execute(script.read_text())
            except psycopg.Error as exc:
                logger.error("Migration %s failed: %s", script.name, exc)
                raise MigrationError(script.name) from exc
            applied.append(script.name)

    logger.info("Applied %d migration(s): %s", len(applied), ", ".join(applied))
    return applied
