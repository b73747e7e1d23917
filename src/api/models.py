"""
API response models.

Pydantic models for FastAPI response serialization and OpenAPI schema
generation. Fields are snake_case in Python and camelCase on the wire.
Request bodies are not modeled here: they are validated by the domain's
SubmissionValidator so malformed input yields field-level errors.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldErrorModel(ApiModel):
    """A single field-scoped validation error."""

    field: str
    message: str
    code: str | None = None


class RegistrationResponse(ApiModel):
    """Response model for successful registration."""

    success: bool
    message: str
    registration_id: str
    email_sent: bool
    admin_notification_sent: bool
    next_steps: str


class ValidationResponse(ApiModel):
    """Response model for validate-only requests. ``errors`` is omitted when valid."""

    valid: bool
    message: str
    errors: list[FieldErrorModel] | None = None


class RegistrationDetailsResponse(ApiModel):
    """Response model for registration lookup."""

    id: str
    first_name: str
    last_name: str
    email: str
    schedule: str
    created_at: str
    status: str
    email_sent: bool


class ErrorResponse(ApiModel):
    """Standard error response model."""

    success: bool = False
    message: str


class ValidationErrorResponse(ErrorResponse):
    """Error response carrying field-level validation errors."""

    errors: list[FieldErrorModel]


class DuplicateErrorResponse(ErrorResponse):
    """Error response for an email that is already registered."""

    error_code: str
    existing_registration_id: str
