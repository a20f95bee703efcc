"""Public shared envelope API for audit services."""

from .envelope import Envelope, Payload, empty, failure, success
from .meta import EnvelopeKind, EnvelopeMeta, new_meta
from .validate import validate_meta

__all__ = [
    "Envelope",
    "EnvelopeKind",
    "EnvelopeMeta",
    "Payload",
    "empty",
    "failure",
    "new_meta",
    "success",
    "validate_meta",
]
