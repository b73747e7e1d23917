"""
Registration domain service - Class registration workflow.

This module contains the core business logic for class registration:
validation, duplicate detection, id generation, persistence and
post-create notifications.

Create Workflow (per call, one terminal outcome)
================================================

    START -> VALIDATING -> REJECTED          (invalid input, nothing stored)
    VALIDATING -> CHECKING_DUPLICATE -> CONFLICT   (email taken, nothing stored)
    CHECKING_DUPLICATE -> PERSISTING -> NOTIFYING -> CREATED

The duplicate check is a fast path that produces a friendly error. Email
uniqueness is guaranteed by the repository: a concurrent create that
slips past the check fails in save() with EmailAlreadyRegistered, which
is mapped back to DuplicateRegistration.

Notifications are best-effort. Their outcome is recorded on the
registration but never aborts or rolls back the create.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .duplicates import DuplicateChecker
from .exceptions import (
    DuplicateRegistration,
    EmailAlreadyRegistered,
    InternalFailure,
    RegistrationError,
    RegistrationNotFound,
    ValidationFailed,
)
from .identifiers import generate_registration_id
from .models import (
    FieldError,
    RegistrationDetails,
    RegistrationReceipt,
    RegistrationRecord,
    RegistrationStatus,
    RegistrationSubmission,
    ValidationReport,
)
from .notifications import NotificationDispatcher
from .ports import RegistrationRepository, SubmissionValidator

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RegistrationService:
    """
    Domain service for class registration.

    Orchestrates the registration flow: validation, duplicate check,
    record creation and notification dispatch.
    """

    repository: RegistrationRepository
    validator: SubmissionValidator
    notifier: NotificationDispatcher
    id_generator: Callable[[], str] = generate_registration_id
    _duplicates: DuplicateChecker = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._duplicates = DuplicateChecker(self.repository)

    def create(self, data: Any) -> RegistrationReceipt:
        """
        Create a registration from a raw submission.

        Args:
            data: Raw request body (validated here)

        Returns:
            RegistrationReceipt with the new id and notification flags

        Raises:
            ValidationFailed: If the submission is invalid
            DuplicateRegistration: If the email is already registered
            InternalFailure: On any unexpected lookup or persistence fault
        """
        outcome = self.validator.validate(data)
        submission = outcome.submission
        if submission is None:
            raise ValidationFailed(outcome.errors)

        try:
            existing = self._duplicates.exists(submission.email)
            if existing is not None:
                raise DuplicateRegistration(existing.id)

            record = self._persist_new(self._build_record(submission))

            record.email_sent = self.notifier.send_confirmation(record)
            record.admin_notification_sent = self.notifier.send_admin_alert(record)
            record.updated_at = _utcnow()
            self.repository.save(record)
        except RegistrationError:
            raise
        except Exception as exc:
            logger.exception("Failed to create registration for %s", submission.email)
            raise InternalFailure("Failed to create registration") from exc

        logger.info(
            "Registration created: id=%s email=%s email_sent=%s admin_notification_sent=%s",
            record.id,
            record.email,
            record.email_sent,
            record.admin_notification_sent,
        )
        return RegistrationReceipt(
            registration_id=record.id,
            email_sent=record.email_sent,
            admin_notification_sent=record.admin_notification_sent,
        )

    def validate_only(self, data: Any) -> ValidationReport:
        """
        Validate a submission and check for duplicates without saving.

        Never persists, never notifies, never raises.
        """
        outcome = self.validator.validate(data)
        if outcome.submission is None:
            return ValidationReport(valid=False, message="Validation failed", errors=list(outcome.errors))

        try:
            existing = self._duplicates.exists(outcome.submission.email)
        except Exception:
            logger.exception("Duplicate lookup failed during validation")
            return ValidationReport(
                valid=False,
                message="Validation failed",
                errors=[FieldError(field="general", message="An error occurred during validation")],
            )

        if existing is not None:
            return ValidationReport(
                valid=False,
                message="Validation failed",
                errors=[
                    FieldError(
                        field="email",
                        message="Email already registered",
                        code="DUPLICATE_EMAIL",
                    )
                ],
            )

        return ValidationReport(valid=True, message="All fields are valid")

    def get_by_id(self, registration_id: str) -> RegistrationDetails:
        """
        Fetch the read-path projection of a registration.

        Raises:
            RegistrationNotFound: If no registration has this id
            InternalFailure: On any unexpected lookup fault
        """
        try:
            record = self.repository.find_by_id(registration_id)
        except Exception as exc:
            logger.exception("Failed to retrieve registration %s", registration_id)
            raise InternalFailure("Failed to retrieve registration") from exc

        if record is None:
            raise RegistrationNotFound(registration_id)
        return RegistrationDetails.from_record(record)

    def _build_record(self, submission: RegistrationSubmission) -> RegistrationRecord:
        now = _utcnow()
        return RegistrationRecord(
            id=self.id_generator(),
            first_name=submission.first_name,
            last_name=submission.last_name,
            email=submission.email,
            schedule=submission.schedule,
            status=RegistrationStatus.CONFIRMED,
            created_at=now,
            updated_at=now,
        )

    def _persist_new(self, record: RegistrationRecord) -> RegistrationRecord:
        """Save a new record, mapping a storage-level email conflict to DuplicateRegistration."""
        try:
            return self.repository.save(record)
        except EmailAlreadyRegistered as exc:
            existing = self._duplicates.exists(record.email)
            if existing is None:
                logger.error("Email conflict for %s but no owning registration found", record.email)
                raise InternalFailure("Failed to create registration") from exc
            logger.info("Concurrent registration for %s lost the race to %s", record.email, existing.id)
            raise DuplicateRegistration(existing.id) from None
