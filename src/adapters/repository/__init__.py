"""Repository adapters - Database implementations."""

from .memory import InMemoryRegistrationRepository
from .postgres import MigrationError, PostgresRegistrationRepository, run_migrations

__all__ = [
    "InMemoryRegistrationRepository",
    "MigrationError",
    "PostgresRegistrationRepository",
    "run_migrations",
]
