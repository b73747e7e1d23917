"""
Pydantic submission validator - Implements SubmissionValidator protocol.

Field-level rules are declared on a Pydantic model so that every failing
field is reported in a single pass. Each field runs all of its rules and
reports one error per broken rule. The cross-field email match runs
whenever both addresses are strings, after the per-field errors.

Error messages and codes are part of the API contract:
- missing field      -> "<Label> is required"          (MISSING)
- non-string value   -> "<Label> must be a string"     (STRING_TYPE)
- length violations  -> "... at least / at most N ..." (TOO_SMALL / TOO_BIG)
- name pattern       -> "... letters and spaces only"  (INVALID_PATTERN)
- email syntax       -> "Invalid email format"         (INVALID_EMAIL)
- schedule           -> "Schedule must be a valid ISO 8601 datetime" (INVALID_DATETIME)
- email confirmation -> "Email addresses do not match" (EMAIL_MISMATCH)

Email syntax is checked by email-validator, which also enforces the
RFC 5321 limit of 254 characters. A 255-character address therefore fails
as "Invalid email format"; longer ones also fail the 255 length rule.
"""

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from src.domain.duplicates import normalize_email
from src.domain.models import FieldError, RegistrationSubmission, ValidationOutcome

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 255

NAME_PATTERN = re.compile(r"[A-Za-z\s]+")
# UTC only: date, time, optional fraction and a mandatory Z
ISO_DATETIME_PATTERN = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?Z"
)

FIELD_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "confirmEmail": "Confirm email",
    "schedule": "Schedule",
}

Issue = tuple[str, str]  # (error type, message)


def is_iso_datetime(value: str) -> bool:
    """True if value is a strict ISO-8601 UTC datetime ending in Z."""
    if ISO_DATETIME_PATTERN.fullmatch(value) is None:
        return False
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def is_email(value: str) -> bool:
    """True if value is a syntactically valid address with no surrounding whitespace."""
    if value != value.strip():
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def name_issues(label: str, value: str) -> list[Issue]:
    issues = []
    if len(value) < NAME_MIN_LENGTH:
        issues.append(("too_small", f"{label} must be at least {NAME_MIN_LENGTH} characters"))
    if len(value) > NAME_MAX_LENGTH:
        issues.append(("too_big", f"{label} must be at most {NAME_MAX_LENGTH} characters"))
    if NAME_PATTERN.fullmatch(value) is None:
        issues.append(("invalid_pattern", f"{label} must contain letters and spaces only"))
    return issues


def email_issues(label: str, value: str) -> list[Issue]:
    issues = []
    if not is_email(value):
        issues.append(("invalid_email", "Invalid email format"))
    if len(value) > EMAIL_MAX_LENGTH:
        issues.append(("too_big", f"{label} must be at most {EMAIL_MAX_LENGTH} characters"))
    return issues


def _field_label(model: type[BaseModel], field_name: str | None) -> str:
    """Human label for a model field, keyed by its wire (alias) name."""
    name = field_name or ""
    wire_name = model.model_fields[name].alias or name
    return FIELD_LABELS.get(wire_name, wire_name)


def _raise_issues(issues: list[Issue]) -> None:
    """Raise one Pydantic error per field that carries every broken rule."""
    if issues:
        kind, message = issues[0]
        raise PydanticCustomError(kind, message, {"issues": issues})


class RegistrationSubmissionModel(BaseModel):
    """Wire-format registration submission (camelCase keys)."""

    model_config = ConfigDict(extra="ignore")

    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str
    confirm_email: str = Field(alias="confirmEmail")
    schedule: str

    @field_validator("first_name", "last_name")
    @classmethod
    def check_name(cls, value: str, info: ValidationInfo) -> str:
        _raise_issues(name_issues(_field_label(cls, info.field_name), value))
        return value

    @field_validator("email", "confirm_email")
    @classmethod
    def check_email(cls, value: str, info: ValidationInfo) -> str:
        _raise_issues(email_issues(_field_label(cls, info.field_name), value))
        return normalize_email(value)

    @field_validator("schedule")
    @classmethod
    def check_schedule(cls, value: str) -> str:
        if not is_iso_datetime(value):
            raise PydanticCustomError(
                "invalid_datetime", "Schedule must be a valid ISO 8601 datetime"
            )
        return value


def _to_field_errors(error: Any) -> list[FieldError]:
    loc = error["loc"]
    field = str(loc[0]) if loc else "body"
    label = FIELD_LABELS.get(field, field)
    kind = error["type"]

    issues = (error.get("ctx") or {}).get("issues")
    if issues:
        return [FieldError(field=field, message=message, code=code.upper()) for code, message in issues]

    if kind == "missing":
        message = f"{label} is required"
    elif kind == "string_type":
        message = f"{label} must be a string"
    else:
        message = error["msg"]
    return [FieldError(field=field, message=message, code=kind.upper())]


def _email_mismatch(data: Mapping) -> FieldError | None:
    email = data.get("email")
    confirm_email = data.get("confirmEmail")
    if not isinstance(email, str) or not isinstance(confirm_email, str):
        return None
    if email.lower() == confirm_email.lower():
        return None
    return FieldError(
        field="confirmEmail",
        message="Email addresses do not match",
        code="EMAIL_MISMATCH",
    )


class PydanticSubmissionValidator:
    """
    Implements SubmissionValidator protocol via Pydantic.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Stateless; a single instance can be shared.
    """

    def validate(self, data: Any) -> ValidationOutcome:
        """
        Validate a raw submission, collecting every field error.

        Args:
            data: Decoded request body of any shape

        Returns:
            ValidationOutcome with a normalized submission, or the ordered
            list of field errors (per-field errors first, then the email
            confirmation mismatch)
        """
        if not isinstance(data, Mapping):
            return ValidationOutcome(
                errors=[
                    FieldError(
                        field="body",
                        message="Request body must be a JSON object",
                        code="MODEL_TYPE",
                    )
                ]
            )

        errors: list[FieldError] = []
        model = None
        try:
            model = RegistrationSubmissionModel.model_validate(dict(data))
        except ValidationError as exc:
            for error in exc.errors():
                errors.extend(_to_field_errors(error))

        mismatch = _email_mismatch(data)
        if mismatch is not None:
            errors.append(mismatch)

        if errors or model is None:
            return ValidationOutcome(errors=errors)

        return ValidationOutcome(
            submission=RegistrationSubmission(
                first_name=model.first_name,
                last_name=model.last_name,
                email=model.email,
                confirm_email=model.confirm_email,
                schedule=model.schedule,
            )
        )
