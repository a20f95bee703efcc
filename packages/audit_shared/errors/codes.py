"""Shared error code constants.

Codes are machine-readable and stable. Service-specific codes live beside the
generic ones so callers can branch on a single namespace.
"""

# Authentication
UNAUTHENTICATED = "UNAUTHENTICATED"

# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
INVALID_REFERENCE = "INVALID_REFERENCE"
INVALID_TIME_RANGE = "INVALID_TIME_RANGE"

# Policy / authorization
ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
ROLE_NOT_PERMITTED = "ROLE_NOT_PERMITTED"

# Dependency / external system
DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
DEPENDENCY_TIMEOUT = "DEPENDENCY_TIMEOUT"
DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
ROW_DECODE_FAILED = "ROW_DECODE_FAILED"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
