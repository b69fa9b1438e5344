"""
Neon Genie Deterministic Overlay

Reproducible execution of the Neon Genie engine for process-based hosts:
hashing and id primitives, a seeded pseudo-random source, the deterministic
engine decorator, and the single-request stdin/stdout bridge.
"""

from .errors import (
    OverlayErrorCode,
    OverlayError,
    EmptyInputError,
    MalformedPayloadError,
    MissingOperationError,
    MissingFieldError,
    MissingProvenanceError,
    InvalidTimestampError,
    UnknownOperationError,
    InvalidPayloadError,
)
from .deterministic import (
    content_hash,
    deterministic_id,
    generate_artifact_id,
    derive_seed,
    validate_timestamp,
    iso_to_millis,
)
from .seeded_random import SeededRandom
from .contracts import (
    OverlayOperation,
    OverlayProvenance,
    OverlayRequest,
    OverlaySuccessResponse,
    OverlayErrorResponse,
    parse_request,
)
from .deterministic_genie import DeterministicGenieConfig, DeterministicNeonGenie
from .bridge import BridgeConfig, BridgeState, OverlayBridge

__all__ = [
    # Errors
    'OverlayErrorCode', 'OverlayError', 'EmptyInputError', 'MalformedPayloadError',
    'MissingOperationError', 'MissingFieldError', 'MissingProvenanceError',
    'InvalidTimestampError', 'UnknownOperationError', 'InvalidPayloadError',
    # Primitives
    'content_hash', 'deterministic_id', 'generate_artifact_id', 'derive_seed',
    'validate_timestamp', 'iso_to_millis', 'SeededRandom',
    # Protocol
    'OverlayOperation', 'OverlayProvenance', 'OverlayRequest',
    'OverlaySuccessResponse', 'OverlayErrorResponse', 'parse_request',
    'DeterministicGenieConfig', 'DeterministicNeonGenie',
    'BridgeConfig', 'BridgeState', 'OverlayBridge',
]
