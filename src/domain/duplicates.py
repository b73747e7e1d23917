"""Duplicate registration lookup by normalized email."""

from dataclasses import dataclass

from .models import RegistrationRecord
from .ports import RegistrationRepository


def normalize_email(email: str) -> str:
    """
    Normalize email address for consistent storage and lookup.

    Applies: strip whitespace + lowercase
    """
    return email.strip().lower()


@dataclass
class DuplicateChecker:
    """Finds an existing registration sharing a submitted email."""

    repository: RegistrationRepository

    def exists(self, email: str) -> RegistrationRecord | None:
        return self.repository.find_by_email(normalize_email(email))
