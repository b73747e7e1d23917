"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from typing import Any, Protocol

from .models import RegistrationRecord, ValidationOutcome


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def find_by_email(self, email: str) -> RegistrationRecord | None:
        """
        Look up a registration by normalized email.

        Args:
            email: Normalized (stripped, lowercased) email address

        Returns:
            The matching record, or None
        """
        ...

    def find_by_id(self, registration_id: str) -> RegistrationRecord | None:
        """
        Look up a registration by exact id.

        Args:
            registration_id: Registration identifier (e.g. ``reg_...``)

        Returns:
            The matching record, or None
        """
        ...

    def save(self, record: RegistrationRecord) -> RegistrationRecord:
        """
        Insert or update a registration, keyed by id.

        Email uniqueness is enforced atomically by the storage layer, so
        two concurrent saves for the same email cannot both succeed.

        Args:
            record: Registration to persist

        Returns:
            The persisted record

        Raises:
            EmailAlreadyRegistered: If another record already owns the email
        """
        ...


class SubmissionValidator(Protocol):
    """Port interface for registration input validation."""

    def validate(self, data: Any) -> ValidationOutcome:
        """
        Validate a raw submission.

        Must accept any value (missing fields, wrong types, non-mappings)
        and never raise.

        Args:
            data: Raw decoded request body

        Returns:
            ValidationOutcome with either a normalized submission or errors
        """
        ...


class NotificationSender(Protocol):
    """Port interface for notification delivery channels."""

    def send_confirmation(self, record: RegistrationRecord) -> None:
        """
        Deliver a confirmation message to the registrant.

        May raise on delivery failure.
        """
        ...

    def send_admin_alert(self, record: RegistrationRecord) -> None:
        """
        Deliver a new-registration alert to the administrator.

        May raise on delivery failure.
        """
        ...
