"""Validation adapters - Submission validator implementations."""

from .schema import PydanticSubmissionValidator, RegistrationSubmissionModel

__all__ = ["PydanticSubmissionValidator", "RegistrationSubmissionModel"]
