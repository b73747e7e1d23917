"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each condition carries a fixed set of fields.
"""

from .models import FieldError


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ValidationFailed(RegistrationError):
    """Submission failed structural or cross-field validation."""

    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("Validation failed")
        self.errors = errors


class DuplicateRegistration(RegistrationError):
    """A registration already exists for the submitted email."""

    def __init__(self, existing_registration_id: str) -> None:
        super().__init__("Registration already exists for this email")
        self.existing_registration_id = existing_registration_id


class RegistrationNotFound(RegistrationError):
    """No registration exists with the requested id."""

    def __init__(self, registration_id: str) -> None:
        super().__init__("Registration not found")
        self.registration_id = registration_id


class InternalFailure(RegistrationError):
    """Unexpected fault during lookup or persistence.

    The message is safe to return to callers; the underlying error is
    chained as ``__cause__`` and logged, never exposed.
    """

    pass


class EmailAlreadyRegistered(RegistrationError):
    """Storage-level unique constraint on email was violated.

    Raised by repository adapters; the service translates it into
    DuplicateRegistration.
    """

    def __init__(self, email: str) -> None:
        super().__init__(email)
        self.email = email
