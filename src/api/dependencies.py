"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache, partial

from fastapi import Request

from src.adapters.smtp.console import ConsoleNotificationSender
from src.adapters.validation import PydanticSubmissionValidator
from src.config.settings import get_settings
from src.domain.identifiers import generate_registration_id
from src.domain.notifications import NotificationDispatcher
from src.domain.ports import RegistrationRepository
from src.domain.registration import RegistrationService

# Module-level singleton - the validator is stateless
_validator = PydanticSubmissionValidator()


def get_repository(request: Request) -> RegistrationRepository:
    """
    Get repository from app state.

    The repository is created during app lifespan startup and stored in
    app.state, so its lifetime is the application's.
    """
    return request.app.state.repository


def get_validator() -> PydanticSubmissionValidator:
    """Get submission validator (singleton)."""
    return _validator


@lru_cache
def get_notification_sender() -> ConsoleNotificationSender:
    """Get console notification sender (singleton, configured from settings)."""
    return ConsoleNotificationSender(admin_email=get_settings().admin_email)


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, validator and notification dispatcher
    for the domain service.
    """
    settings = get_settings()
    return RegistrationService(
        repository=get_repository(request),
        validator=get_validator(),
        notifier=NotificationDispatcher(get_notification_sender()),
        id_generator=partial(generate_registration_id, settings.registration_id_prefix),
    )
