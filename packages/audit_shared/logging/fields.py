"""Canonical logging field names for cross-service consistency.

These constants define a stable key set for structured logs and context
propagation.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"

# Envelope/correlation fields.
TRACE_ID = "trace_id"
ENVELOPE_ID = "envelope_id"
PRINCIPAL = "principal"

# Public API invocation fields.
COMPONENT_ID = "component_id"
API_NAME = "api_name"
PUBLIC_API_INVOCATION_EVENT = "public_api_invocation"
PUBLIC_API_COMPLETION_EVENT = "public_api_completion"
PUBLIC_API_INSTRUMENTATION_FAILURE_EVENT = "public_api_instrumentation_failure"
SUCCESS = "success"
DURATION_MS = "duration_ms"
ERRORS = "errors"
OUTCOME = "outcome"
STAGE = "stage"
CONCERN = "concern"

# Audit pipeline fields.
PIPELINE_STAGE = "pipeline_stage"
ERROR_CODE = "error_code"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
