"""
Domain models - Plain data types for the registration workflow.

Dataclasses only; serialization and input parsing live in the adapters
and API layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class RegistrationStatus(str, Enum):
    """
    Lifecycle status of a registration.

    New registrations are created CONFIRMED. PENDING and CANCELLED are
    accepted by storage but no workflow transitions into them yet.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class FieldError:
    """A single field-scoped validation error."""

    field: str
    message: str
    code: str | None = None


@dataclass(frozen=True)
class RegistrationSubmission:
    """Validated and normalized registration input."""

    first_name: str
    last_name: str
    email: str
    confirm_email: str
    schedule: str


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a raw submission: a value or a list of errors."""

    submission: RegistrationSubmission | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.submission is not None and not self.errors


@dataclass
class RegistrationRecord:
    """Persistent registration entity."""

    id: str
    first_name: str
    last_name: str
    email: str
    schedule: str
    status: RegistrationStatus
    created_at: datetime
    updated_at: datetime
    email_sent: bool = False
    admin_notification_sent: bool = False


@dataclass(frozen=True)
class RegistrationReceipt:
    """Returned by a successful create."""

    registration_id: str
    email_sent: bool
    admin_notification_sent: bool
    success: bool = True
    message: str = "Registration submitted successfully"
    next_steps: str = "Check your email for confirmation details"


@dataclass(frozen=True)
class ValidationReport:
    """Returned by validate-only. ``errors`` is None when the submission is valid."""

    valid: bool
    message: str
    errors: list[FieldError] | None = None


def format_timestamp(value: datetime) -> str:
    """UTC timestamp with millisecond precision, e.g. ``2024-03-15T10:00:00.000Z``."""
    utc = value.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class RegistrationDetails:
    """Read-path projection of a registration."""

    id: str
    first_name: str
    last_name: str
    email: str
    schedule: str
    created_at: str
    status: RegistrationStatus
    email_sent: bool

    @classmethod
    def from_record(cls, record: RegistrationRecord) -> "RegistrationDetails":
        return cls(
            id=record.id,
            first_name=record.first_name,
            last_name=record.last_name,
            email=record.email,
            schedule=record.schedule,
            created_at=format_timestamp(record.created_at),
            status=record.status,
            email_sent=record.email_sent,
        )
