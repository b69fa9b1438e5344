"""
Overlay Errors

Every failure the overlay can report carries an explicit OverlayErrorCode.
The code's value is what hosts see as `error.code` in the response.

FAILURE STAGES:
===============
- pre-dispatch (fatal): EMPTY_INPUT, MALFORMED_PAYLOAD, MISSING_OPERATION,
  MISSING_FIELD. No provenance can be trusted; the process exits non-zero.
- construction: MISSING_PROVENANCE, INVALID_TIMESTAMP
- dispatch: UNKNOWN_OPERATION, INVALID_PAYLOAD
- delegated: ENGINE_ERROR for anything raised by the engine or corpus

Only the pre-dispatch stage is fatal.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional


class OverlayErrorCode(Enum):
    EMPTY_INPUT = "empty_input"
    MALFORMED_PAYLOAD = "malformed_payload"
    MISSING_OPERATION = "missing_operation"
    MISSING_FIELD = "missing_field"
    MISSING_PROVENANCE = "missing_provenance"
    INVALID_TIMESTAMP = "invalid_timestamp"
    UNKNOWN_OPERATION = "unknown_operation"
    INVALID_PAYLOAD = "invalid_payload"
    ENGINE_ERROR = "engine_error"


FATAL_CODES = frozenset({
    OverlayErrorCode.EMPTY_INPUT,
    OverlayErrorCode.MALFORMED_PAYLOAD,
    OverlayErrorCode.MISSING_OPERATION,
    OverlayErrorCode.MISSING_FIELD,
})


class OverlayError(Exception):
    """Base class; subclasses pin the error code."""
    code: OverlayErrorCode = OverlayErrorCode.ENGINE_ERROR

    @property
    def is_fatal(self) -> bool:
        return self.code in FATAL_CODES


class EmptyInputError(OverlayError, ValueError):
    """Nothing to work with: empty stdin, or choice() over an empty sequence."""
    code = OverlayErrorCode.EMPTY_INPUT


class MalformedPayloadError(OverlayError, ValueError):
    """Request text is not a JSON object."""
    code = OverlayErrorCode.MALFORMED_PAYLOAD


class MissingOperationError(OverlayError, ValueError):
    code = OverlayErrorCode.MISSING_OPERATION

    def __init__(self):
        super().__init__("Missing required field: operation")


class MissingFieldError(OverlayError, ValueError):
    code = OverlayErrorCode.MISSING_FIELD

    def __init__(self, field_name: str):
        super().__init__(f"Missing required field: {field_name}")
        self.field_name = field_name


class MissingProvenanceError(OverlayError, ValueError):
    code = OverlayErrorCode.MISSING_PROVENANCE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "DeterministicNeonGenie requires provenance in config")


class InvalidTimestampError(OverlayError, ValueError):
    code = OverlayErrorCode.INVALID_TIMESTAMP

    def __init__(self, timestamp_iso: object):
        super().__init__(f"Invalid ISO 8601 timestamp: {timestamp_iso}")
        self.timestamp_iso = timestamp_iso


class UnknownOperationError(OverlayError, ValueError):
    code = OverlayErrorCode.UNKNOWN_OPERATION

    def __init__(self, operation: object):
        super().__init__(f"Unknown operation: {operation}")
        self.operation = operation


class InvalidPayloadError(OverlayError, ValueError):
    """Payload present but its shape does not fit the operation."""
    code = OverlayErrorCode.INVALID_PAYLOAD
