"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An isolated in-memory repository per test
- A domain service wired with the real validator
- Submission payload factories
"""

from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import InMemoryRegistrationRepository
from src.adapters.validation import PydanticSubmissionValidator
from src.domain.notifications import NotificationDispatcher
from src.domain.registration import RegistrationService


def _make_payload(**overrides: object) -> dict:
    """Build a valid registration request body, with optional overrides."""
    payload = {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@example.com",
        "confirmEmail": "john.doe@example.com",
        "schedule": "2024-03-15T10:00:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_payload():
    """Factory for valid registration request bodies."""
    return _make_payload


@pytest.fixture
def repository() -> InMemoryRegistrationRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryRegistrationRepository()


@pytest.fixture
def sender() -> Mock:
    """Notification sender mock that always delivers."""
    return Mock()


@pytest.fixture
def service(repository: InMemoryRegistrationRepository, sender: Mock) -> RegistrationService:
    """Registration service over the in-memory repository."""
    return RegistrationService(
        repository=repository,
        validator=PydanticSubmissionValidator(),
        notifier=NotificationDispatcher(sender),
    )
