"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the class registration
system. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .duplicates import DuplicateChecker, normalize_email
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
    ValidationOutcome,
    ValidationReport,
)
from .notifications import NotificationDispatcher
from .ports import NotificationSender, RegistrationRepository, SubmissionValidator
from .registration import RegistrationService

__all__ = [
    "DuplicateChecker",
    "DuplicateRegistration",
    "EmailAlreadyRegistered",
    "FieldError",
    "InternalFailure",
    "NotificationDispatcher",
    "NotificationSender",
    "RegistrationDetails",
    "RegistrationError",
    "RegistrationNotFound",
    "RegistrationReceipt",
    "RegistrationRecord",
    "RegistrationRepository",
    "RegistrationService",
    "RegistrationStatus",
    "RegistrationSubmission",
    "SubmissionValidator",
    "ValidationFailed",
    "ValidationOutcome",
    "ValidationReport",
    "generate_registration_id",
    "normalize_email",
]
