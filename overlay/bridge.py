"""
Overlay Bridge
==============

Single-shot stdin/stdout protocol: one process, one request, one response.

STATE MACHINE:
==============
    AWAITING_INPUT -> DISPATCHING -> RESPONDING -> TERMINATED

- AWAITING_INPUT: read stdin to EOF and validate (see parse_request).
  Any failure here is FATAL: respond with sentinel provenance, exit 1.
- DISPATCHING: build a DeterministicNeonGenie from the request provenance,
  route the operation, wrap the result or the raised error. Never fatal.
- RESPONDING: write exactly one JSON document to stdout, exit 0.

There is no transition back to AWAITING_INPUT; run() may be called once.

EXIT STATUS:
============
0 whenever a provenance could be read from the request, even if the
operation failed (the body says so). 1 only when it could not.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, TextIO
import json
import logging
import os
import sys
import traceback

from genie.engine import EXPORT_FORMATS, utc_now_iso

from .contracts import (
    EvolvePayload,
    ExportPayload,
    FindSimilarPayload,
    OverlayErrorInfo,
    OverlayErrorResponse,
    OverlayOperation,
    OverlayProvenance,
    OverlayRequest,
    OverlayResponse,
    OverlaySuccessResponse,
    SearchPayload,
    parse_prompt_payload,
    parse_request,
    to_wire,
)
from .deterministic_genie import DeterministicGenieConfig, DeterministicNeonGenie
from .errors import (
    InvalidPayloadError,
    MalformedPayloadError,
    OverlayError,
    OverlayErrorCode,
    UnknownOperationError,
)


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


class BridgeState(Enum):
    AWAITING_INPUT = "awaiting_input"
    DISPATCHING = "dispatching"
    RESPONDING = "responding"
    TERMINATED = "terminated"


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class BridgeConfig:
    """
    Host-supplied settings; never read from the request body.

    NEON_CORPUS_PATH  corpus directory            (default: corpus)
    NEON_MODE         mode recorded on artifacts  (default: standalone)
    NEON_LOG_LEVEL    stderr log level            (default: WARNING)
    """
    corpus_path: str = "corpus"
    mode: str = "standalone"
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> BridgeConfig:
        env = os.environ if environ is None else environ
        return BridgeConfig(
            corpus_path=env.get("NEON_CORPUS_PATH") or "corpus",
            mode=env.get("NEON_MODE") or "standalone",
            log_level=(env.get("NEON_LOG_LEVEL") or "WARNING").upper(),
        )


# =============================================================================
# BRIDGE
# =============================================================================

def error_info(exc: BaseException, with_details: bool = True) -> OverlayErrorInfo:
    """Map an exception to its wire error; non-overlay errors become ENGINE_ERROR."""
    code = exc.code if isinstance(exc, OverlayError) else OverlayErrorCode.ENGINE_ERROR
    message = str(exc) or type(exc).__name__
    details = None
    if with_details:
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return OverlayErrorInfo(code=code, message=message, details=details)


class OverlayBridge:
    """
    One request/response cycle over text streams.

    stdin/stdout default to the process streams; `now` supplies the wall-clock
    literal used ONLY for the sentinel provenance of a fatal failure.
    """

    def __init__(
        self,
        config: Optional[BridgeConfig] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        now: Callable[[], str] = utc_now_iso,
    ):
        self.config = config or BridgeConfig()
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._now = now
        self._state = BridgeState.AWAITING_INPUT
        self._handlers: Dict[OverlayOperation, Callable[[DeterministicNeonGenie, Any], Any]] = {
            OverlayOperation.GENERATE: self._handle_generate,
            OverlayOperation.ANALYZE: self._handle_analyze,
            OverlayOperation.EVOLVE: self._handle_evolve,
            OverlayOperation.SEARCH: self._handle_search,
            OverlayOperation.FIND_SIMILAR: self._handle_find_similar,
            OverlayOperation.EXPORT: self._handle_export,
        }

    @property
    def state(self) -> BridgeState:
        return self._state

    def run(self) -> int:
        """Read, validate, dispatch, respond. Returns the process exit status."""
        if self._state is not BridgeState.AWAITING_INPUT:
            raise RuntimeError("OverlayBridge.run() may only be called once")

        try:
            request = self._read_request()
        except OverlayError as exc:
            logger.error("Fatal request error (%s): %s", exc.code.value, exc)
            self._respond(OverlayErrorResponse(
                error=error_info(exc, with_details=False),
                provenance=OverlayProvenance.sentinel(self._now()),
            ))
            return EXIT_FATAL

        self._state = BridgeState.DISPATCHING
        self._respond(self.dispatch(request))
        return EXIT_OK

    def dispatch(self, request: OverlayRequest) -> OverlayResponse:
        """Route one validated request; every failure becomes an error response."""
        logger.info("Dispatching %s for run %s", request.operation, request.provenance.run_id)
        try:
            genie = DeterministicNeonGenie(DeterministicGenieConfig(
                provenance=request.provenance,
                corpus_path=self.config.corpus_path,
                mode=self.config.mode,
            ))
            try:
                operation = OverlayOperation(request.operation)
            except ValueError:
                raise UnknownOperationError(request.operation) from None
            result = to_wire(self._handlers[operation](genie, request.payload))
        except Exception as exc:
            logger.warning("Operation %s failed: %s", request.operation, exc)
            return OverlayErrorResponse(error=error_info(exc), provenance=request.provenance)
        return OverlaySuccessResponse(result=result, provenance=request.provenance)

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def _read_request(self) -> OverlayRequest:
        try:
            raw = self._stdin.read()
        except UnicodeDecodeError as exc:
            raise MalformedPayloadError(f"Malformed JSON payload: {exc}") from exc
        return parse_request(raw)

    def _respond(self, response: OverlayResponse) -> None:
        self._state = BridgeState.RESPONDING
        self._stdout.write(json.dumps(response.to_dict(), indent=2, ensure_ascii=False) + "\n")
        self._stdout.flush()
        self._state = BridgeState.TERMINATED

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def _handle_generate(self, genie: DeterministicNeonGenie, payload: Any):
        return genie.generate(parse_prompt_payload(payload, "generate"))

    def _handle_analyze(self, genie: DeterministicNeonGenie, payload: Any):
        return genie.analyze(parse_prompt_payload(payload, "analyze"))

    def _handle_evolve(self, genie: DeterministicNeonGenie, payload: Any):
        request = EvolvePayload.from_dict(payload)
        return genie.evolve(request.parent_id, request.feedback)

    def _handle_search(self, genie: DeterministicNeonGenie, payload: Any):
        return genie.search(SearchPayload.from_dict(payload).query)

    def _handle_find_similar(self, genie: DeterministicNeonGenie, payload: Any):
        return genie.find_similar(FindSimilarPayload.from_dict(payload).id)

    def _handle_export(self, genie: DeterministicNeonGenie, payload: Any):
        request = ExportPayload.from_dict(payload)
        if request.format not in EXPORT_FORMATS:
            raise InvalidPayloadError(
                f"Unsupported export format: {request.format!r} (expected one of {', '.join(EXPORT_FORMATS)})"
            )
        return genie.export(request.id, request.format)
