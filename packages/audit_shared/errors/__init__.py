"""Public shared error API for audit services."""

from . import codes
from .factories import (
    authentication_error,
    dependency_error,
    internal_error,
    policy_error,
    validation_error,
)
from .normalize import exception_to_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "ErrorCategory",
    "ErrorDetail",
    "authentication_error",
    "codes",
    "dependency_error",
    "exception_to_error",
    "internal_error",
    "policy_error",
    "validation_error",
]
