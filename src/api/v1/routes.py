"""
API v1 routes.

Defines REST endpoints for the Class Registration API.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service
from src.api.models import (
    ApiModel,
    DuplicateErrorResponse,
    ErrorResponse,
    FieldErrorModel,
    RegistrationDetailsResponse,
    RegistrationResponse,
    ValidationErrorResponse,
    ValidationResponse,
)
from src.domain.exceptions import (
    DuplicateRegistration,
    InternalFailure,
    RegistrationNotFound,
    ValidationFailed,
)
from src.domain.registration import RegistrationService


router = APIRouter()


def _error_response(status_code: int, body: ApiModel) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


@router.post(
    "/registration",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["registration"],
    responses={
        400: {"model": ValidationErrorResponse, "description": "Validation errors"},
        409: {"model": DuplicateErrorResponse, "description": "Duplicate registration"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Submit class registration",
    description="Validate the submission, check for duplicates, store the registration "
    "and send confirmation and admin notifications.",
)
async def create_registration(
    payload: Any = Body(None),
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResponse | JSONResponse:
    """
    Create a class registration.

    - **firstName**, **lastName**: 2-50 letters and spaces
    - **email**, **confirmEmail**: matching email addresses
    - **schedule**: ISO 8601 datetime of the chosen class slot
    """
    try:
        receipt = service.create(payload)
    except ValidationFailed as exc:
        # Create-path errors expose field and message only
        errors = [FieldErrorModel(field=e.field, message=e.message) for e in exc.errors]
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            ValidationErrorResponse(message="Validation failed", errors=errors),
        )
    except DuplicateRegistration as exc:
        return _error_response(
            status.HTTP_409_CONFLICT,
            DuplicateErrorResponse(
                message="Registration already exists for this email",
                error_code="DUPLICATE_REGISTRATION",
                existing_registration_id=exc.existing_registration_id,
            ),
        )
    except InternalFailure as exc:
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(message=str(exc))
        )

    return RegistrationResponse(
        success=receipt.success,
        message=receipt.message,
        registration_id=receipt.registration_id,
        email_sent=receipt.email_sent,
        admin_notification_sent=receipt.admin_notification_sent,
        next_steps=receipt.next_steps,
    )


@router.post(
    "/registration/validate",
    response_model=ValidationResponse,
    response_model_exclude_none=True,
    tags=["validation"],
    summary="Validate registration data",
    description="Validate registration data without submitting it. "
    "Always returns 200; the body reports whether the data is valid.",
)
async def validate_registration(
    payload: Any = Body(None),
    service: RegistrationService = Depends(get_registration_service),
) -> ValidationResponse:
    """Validate a submission, including the duplicate email check, without saving."""
    report = service.validate_only(payload)
    errors = None
    if report.errors is not None:
        errors = [FieldErrorModel(field=e.field, message=e.message, code=e.code) for e in report.errors]
    return ValidationResponse(valid=report.valid, message=report.message, errors=errors)


@router.get(
    "/registration/{registration_id}",
    response_model=RegistrationDetailsResponse,
    tags=["registration"],
    responses={
        404: {"model": ErrorResponse, "description": "Registration not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Get registration details",
    description="Retrieve details of a specific registration by id.",
)
async def get_registration(
    registration_id: str,
    service: RegistrationService = Depends(get_registration_service),
) -> RegistrationDetailsResponse | JSONResponse:
    """Fetch a registration by its id (e.g. ``reg_1710496800000abc123xyz``)."""
    try:
        details = service.get_by_id(registration_id)
    except RegistrationNotFound:
        return _error_response(
            status.HTTP_404_NOT_FOUND, ErrorResponse(message="Registration not found")
        )
    except InternalFailure as exc:
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(message=str(exc))
        )

    return RegistrationDetailsResponse(
        id=details.id,
        first_name=details.first_name,
        last_name=details.last_name,
        email=details.email,
        schedule=details.schedule,
        created_at=details.created_at,
        status=details.status.value,
        email_sent=details.email_sent,
    )
