"""
Deterministic Neon Genie
========================

NeonGenie with its clock and entropy seams bound to a request provenance.

GUARANTEES:
===========
For a fixed provenance and a fixed prompt, two independently constructed
instances produce artifacts and reports with identical ids, timestamps and
audit trails, regardless of process start time, machine clock, or the state
of the random module.

- generate_id() -> generate_artifact_id(run_id, timestamp_iso, derived_seed)
- now_iso()     -> timestamp_iso, verbatim

CONSTRUCTION:
=============
Provenance is checked BEFORE the engine is initialized. A missing provenance
or an unparseable timestamp raises, and no engine or corpus is touched.

KNOWN LIMITATION:
=================
One instance derives exactly one artifact id. Evolving an artifact with
the provenance that generated it yields a child with the parent's id, which
overwrites the parent in the corpus. Hosts should issue a fresh run_id per
request.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Sequence
import logging

from genie.contracts import AnalysisReport, IdeaArtifact, IdeationPrompt
from genie.engine import GenieConfig, NeonGenie

from .contracts import OverlayProvenance
from .deterministic import derive_seed, generate_artifact_id, validate_timestamp
from .errors import MissingProvenanceError
from .seeded_random import SeededRandom


logger = logging.getLogger(__name__)

OVERLAY_RUN_PREFIX = "overlay_run:"


@dataclass(frozen=True)
class DeterministicGenieConfig:
    provenance: Optional[OverlayProvenance]
    corpus_path: str = "corpus"
    mode: str = "standalone"


class DeterministicNeonGenie(NeonGenie):

    def __init__(self, config: DeterministicGenieConfig):
        provenance = config.provenance
        if provenance is None:
            raise MissingProvenanceError()
        validate_timestamp(provenance.timestamp_iso)

        self._provenance = provenance
        self._seed = derive_seed(provenance.run_id, provenance.timestamp_iso, provenance.seed)
        self._rng = SeededRandom(self._seed)
        super().__init__(GenieConfig(corpus_path=config.corpus_path, mode=config.mode))
        logger.debug("Deterministic engine bound to run %s", provenance.run_id)

    @property
    def seed(self) -> str:
        """The derived seed: explicit seed, else hash of run_id and timestamp."""
        return self._seed

    @property
    def rng(self) -> SeededRandom:
        return self._rng

    def get_provenance(self) -> OverlayProvenance:
        return self._provenance

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def generate_id(self) -> str:
        return generate_artifact_id(
            self._provenance.run_id, self._provenance.timestamp_iso, self._seed
        )

    def now_iso(self) -> str:
        return self._provenance.timestamp_iso

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def generate(self, prompt: IdeationPrompt) -> IdeaArtifact:
        return self._stamp(super().generate(prompt))

    def analyze(self, prompt: IdeationPrompt) -> AnalysisReport:
        report = super().analyze(prompt)
        return replace(report, id=self.generate_id())

    def evolve(self, parent_id: str, feedback: Sequence[str]) -> Optional[IdeaArtifact]:
        child = super().evolve(parent_id, feedback)
        if child is None:
            return None
        return self._stamp(child)

    def _stamp(self, artifact: IdeaArtifact) -> IdeaArtifact:
        """Pin timestamps to the provenance literal, record the run, re-store."""
        timestamp = self._provenance.timestamp_iso
        stamped = replace(
            artifact,
            provenance=replace(
                artifact.provenance,
                timestamp=timestamp,
                transformations=artifact.provenance.transformations
                + (OVERLAY_RUN_PREFIX + self._provenance.run_id,),
            ),
            metadata=replace(artifact.metadata, created_at=timestamp),
        )
        self.storage.store(stamped)
        return stamped
