"""
Shared fixtures for adversarial tests.

Provides an in-memory store whose duplicate lookup can be forced to race:
every thread reads the store, then waits until all threads have read
before any of them continues to save().
"""

import threading
from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.adapters.validation import PydanticSubmissionValidator
from src.domain.models import RegistrationRecord
from src.domain.notifications import NotificationDispatcher
from src.domain.registration import RegistrationService

NUM_ATTACKERS = 5


class StaleReadRepository(InMemoryRegistrationRepository):
    """In-memory store where each thread's first email lookup is synchronized."""

    def __init__(self, parties: int) -> None:
        super().__init__()
        self._barrier = threading.Barrier(parties, timeout=5)
        self._seen = threading.local()

    def find_by_email(self, email: str) -> RegistrationRecord | None:
        result = super().find_by_email(email)
        if not getattr(self._seen, "synchronized", False):
            self._seen.synchronized = True
            self._barrier.wait()
        return result


@pytest.fixture
def stale_store() -> StaleReadRepository:
    return StaleReadRepository(NUM_ATTACKERS)


@pytest.fixture
def racing_service(stale_store: StaleReadRepository) -> RegistrationService:
    """Service whose duplicate check is guaranteed to miss for every attacker."""
    return RegistrationService(
        repository=stale_store,
        validator=PydanticSubmissionValidator(),
        notifier=NotificationDispatcher(Mock()),
    )
