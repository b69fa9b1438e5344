"""
Overlay Contracts

Wire types for the stdin/stdout bridge: request, provenance, per-operation
payloads and the two response envelopes.

BOUNDARY ENFORCEMENT:
=====================
- All types are FROZEN (immutable)
- parse_request() performs the complete pre-dispatch validation, in a fixed
  order; the first failure wins
- Payload parsers raise InvalidPayloadError, never a bare KeyError/TypeError
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import json

from genie.contracts import AnalysisReport, IdeaArtifact, IdeationPrompt

from .errors import (
    EmptyInputError,
    InvalidPayloadError,
    MalformedPayloadError,
    MissingFieldError,
    MissingOperationError,
    OverlayErrorCode,
)


SENTINEL_RUN_ID = "unknown"


class OverlayOperation(Enum):
    GENERATE = "generate"
    ANALYZE = "analyze"
    EVOLVE = "evolve"
    SEARCH = "search"
    FIND_SIMILAR = "findSimilar"
    EXPORT = "export"


# =============================================================================
# PROVENANCE
# =============================================================================

@dataclass(frozen=True)
class OverlayProvenance:
    """
    The (run_id, timestamp_iso, seed?) triple that determines every derived
    value of a deterministic run.

    timestamp_iso is kept as the caller's literal; it is never normalized.
    """
    run_id: str
    timestamp_iso: str
    seed: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "run_id": self.run_id,
            "timestamp_iso": self.timestamp_iso,
        }
        if self.seed is not None:
            data["seed"] = self.seed
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> OverlayProvenance:
        return OverlayProvenance(
            run_id=data["run_id"],
            timestamp_iso=data["timestamp_iso"],
            seed=data.get("seed"),
        )

    @staticmethod
    def sentinel(timestamp_iso: str) -> OverlayProvenance:
        """Stand-in provenance for requests whose own could not be read."""
        return OverlayProvenance(run_id=SENTINEL_RUN_ID, timestamp_iso=timestamp_iso)


# =============================================================================
# REQUEST
# =============================================================================

@dataclass(frozen=True)
class OverlayRequest:
    """
    A validated request.

    operation is kept as sent; whether it names a known operation is a
    dispatch concern, not a parse concern.
    """
    operation: str
    provenance: OverlayProvenance
    payload: Any


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _is_falsy(value: Any) -> bool:
    """None, false, zero and "" are absent; {} and [] are present."""
    if isinstance(value, (dict, list)):
        return False
    return _is_missing(value) or value is False or value == 0


def parse_request(raw: str) -> OverlayRequest:
    """
    Validate raw request text.

    Order: empty input, JSON syntax, operation, provenance,
    provenance.run_id, provenance.timestamp_iso, payload.
    """
    if not raw or not raw.strip():
        raise EmptyInputError("No input received on stdin")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedPayloadError(f"Malformed JSON payload: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedPayloadError(
            f"Malformed JSON payload: expected an object, got {type(data).__name__}"
        )

    operation = data.get("operation")
    if _is_missing(operation):
        raise MissingOperationError()
    if not isinstance(operation, str):
        raise MalformedPayloadError("Malformed JSON payload: 'operation' must be a string")

    provenance = data.get("provenance")
    if provenance is None:
        raise MissingFieldError("provenance")
    if not isinstance(provenance, dict):
        raise MissingFieldError("provenance.run_id")
    for key in ("run_id", "timestamp_iso"):
        if _is_missing(provenance.get(key)):
            raise MissingFieldError(f"provenance.{key}")
    for key in ("run_id", "timestamp_iso", "seed"):
        value = provenance.get(key)
        if value is not None and not isinstance(value, str):
            raise MalformedPayloadError(f"Malformed JSON payload: 'provenance.{key}' must be a string")

    if _is_falsy(data.get("payload")):
        raise MissingFieldError("payload")

    return OverlayRequest(
        operation=operation,
        provenance=OverlayProvenance.from_dict(provenance),
        payload=data["payload"],
    )


# =============================================================================
# PAYLOADS
# =============================================================================

def _require_object(payload: Any, operation: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise InvalidPayloadError(f"Payload for '{operation}' must be an object")
    return payload


def _require_string(data: Dict[str, Any], key: str, operation: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidPayloadError(f"Payload for '{operation}' requires a non-empty string '{key}'")
    return value


def parse_prompt_payload(payload: Any, operation: str) -> IdeationPrompt:
    data = _require_object(payload, operation)
    try:
        return IdeationPrompt.from_dict(data)
    except ValueError as exc:
        raise InvalidPayloadError(f"Invalid '{operation}' payload: {exc}") from exc


@dataclass(frozen=True)
class EvolvePayload:
    parent_id: str
    feedback: Tuple[str, ...]

    @staticmethod
    def from_dict(payload: Any) -> EvolvePayload:
        data = _require_object(payload, "evolve")
        parent_id = _require_string(data, "parentId", "evolve")
        feedback = data.get("feedback")
        if not isinstance(feedback, list) or not all(isinstance(item, str) for item in feedback):
            raise InvalidPayloadError("Payload for 'evolve' requires 'feedback' as a list of strings")
        return EvolvePayload(
            parent_id=parent_id,
            feedback=tuple(feedback),
        )


@dataclass(frozen=True)
class SearchPayload:
    query: str

    @staticmethod
    def from_dict(payload: Any) -> SearchPayload:
        data = _require_object(payload, "search")
        query = data.get("query")
        if not isinstance(query, str):
            raise InvalidPayloadError("Payload for 'search' requires a string 'query'")
        return SearchPayload(query=query)


@dataclass(frozen=True)
class FindSimilarPayload:
    id: str

    @staticmethod
    def from_dict(payload: Any) -> FindSimilarPayload:
        data = _require_object(payload, "findSimilar")
        return FindSimilarPayload(id=_require_string(data, "id", "findSimilar"))


@dataclass(frozen=True)
class ExportPayload:
    id: str
    format: str

    @staticmethod
    def from_dict(payload: Any) -> ExportPayload:
        data = _require_object(payload, "export")
        return ExportPayload(
            id=_require_string(data, "id", "export"),
            format=_require_string(data, "format", "export"),
        )


# =============================================================================
# RESPONSES
# =============================================================================

WireResult = Union[None, str, Dict[str, Any], List[Any]]


def to_wire(result: Any) -> WireResult:
    """Convert an engine result (artifact, report, list, str, None) to JSON data."""
    if result is None or isinstance(result, str):
        return result
    if isinstance(result, (IdeaArtifact, AnalysisReport)):
        return result.to_dict()
    if isinstance(result, (list, tuple)):
        return [to_wire(item) for item in result]
    if hasattr(result, "to_dict"):
        return result.to_dict()
    raise TypeError(f"Cannot serialize result of type {type(result).__name__}")


@dataclass(frozen=True)
class OverlaySuccessResponse:
    result: WireResult
    provenance: OverlayProvenance

    success = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "result": self.result,
            "provenance": self.provenance.to_dict(),
        }


@dataclass(frozen=True)
class OverlayErrorInfo:
    code: OverlayErrorCode
    message: str
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"code": self.code.value, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        return data


@dataclass(frozen=True)
class OverlayErrorResponse:
    error: OverlayErrorInfo
    provenance: OverlayProvenance

    success = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.error.to_dict(),
            "provenance": self.provenance.to_dict(),
        }


OverlayResponse = Union[OverlaySuccessResponse, OverlayErrorResponse]
