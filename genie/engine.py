"""
Neon Genie Engine
=================

Idea generation, analysis, evolution and corpus queries.

CLOCK & ENTROPY SEAMS:
======================
The engine reads wall-clock time and entropy in exactly two places:
- generate_id(): identifier assignment
- now_iso(): every timestamp written into an artifact

Subclasses override these two hooks to make execution fully reproducible
(see overlay.deterministic_genie). Everything else is a pure function of
the prompt text and the corpus contents.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple
import json
import logging
import random
import string
import time

from .contracts import (
    AnalysisReport,
    Architecture,
    ArtifactProvenance,
    Component,
    ArtifactMetadata,
    IdeaArtifact,
    IdeationPrompt,
)
from .ideation import (
    ParsedPrompt,
    define_architecture,
    generate_components,
    generate_concept,
    parse_prompt,
)
from .provenance import (
    create_lineage,
    create_provenance,
    finalize_artifact,
    track_transformation,
)
from .quality import QualityScorer
from .storage import CorpusFilter, CorpusStats, CorpusStorage


logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("json", "markdown")


@dataclass(frozen=True)
class GenieConfig:
    corpus_path: str = "corpus"
    mode: str = "standalone"


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 literal with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class NeonGenie:
    """
    The idea-generation engine.

    Every generated or evolved artifact is finalized (lineage hash) and
    persisted to the corpus before it is returned.
    """

    GENERATOR = "neon-genie"

    def __init__(self, config: Optional[GenieConfig] = None):
        config = config or GenieConfig()
        self.storage = CorpusStorage(config.corpus_path)
        self.scorer = QualityScorer()
        self.mode = config.mode

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def generate_id(self) -> str:
        """Assign a new artifact id. Wall-clock and entropy based."""
        suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=6))
        return f"idea_{int(time.time() * 1000)}_{suffix}"

    def now_iso(self) -> str:
        return utc_now_iso()

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def generate(self, prompt: IdeationPrompt) -> IdeaArtifact:
        parsed = parse_prompt(prompt)
        artifact = self._build_artifact(
            parsed,
            provenance=create_provenance(self.now_iso(), generator=self.GENERATOR),
            parent_id=None,
        )
        self.storage.store(artifact)
        logger.info("Generated artifact %s (%s)", artifact.id, artifact.domain.value)
        return artifact

    def analyze(self, prompt: IdeationPrompt) -> AnalysisReport:
        artifact = self.generate(prompt)
        return AnalysisReport(
            id=artifact.id,
            summary=f"Analysis for {artifact.title} in {artifact.domain.value}.",
            recommendations=artifact.quality.breakdown.refinements,
            risks=("Ensure constraints are fully validated before deployment.",),
            opportunities=("Expand into adjacent domains for scale.",),
            score=artifact.quality,
        )

    def evolve(self, parent_id: str, feedback: Sequence[str]) -> Optional[IdeaArtifact]:
        """Derive a child artifact from a stored parent; None if parent is unknown."""
        parent = self.storage.retrieve(parent_id)
        if parent is None:
            logger.info("Evolve skipped: parent %s not found", parent_id)
            return None

        parsed = parse_prompt(IdeationPrompt(
            concept=f"{parent.concept} refined with {', '.join(feedback)}",
            domain=parent.domain,
            constraints=parent.metadata.constraints,
            tags=parent.metadata.tags,
            aesthetic_direction=parent.metadata.aesthetic_direction,
            mode=self.mode,
        ))
        child = self._build_artifact(
            parsed,
            provenance=track_transformation(
                parent.provenance, "Evolved with feedback", self.now_iso()
            ),
            parent_id=parent.id,
        )

        parent = replace(
            parent,
            lineage=replace(parent.lineage, children=parent.lineage.children + (child.id,)),
        )
        self.storage.store(parent)
        self.storage.store(child)
        logger.info("Evolved artifact %s from %s", child.id, parent.id)
        return child

    def search(self, query: str) -> List[IdeaArtifact]:
        needle = query.lower()
        return [
            artifact for artifact in self.storage.list()
            if needle in f"{artifact.title} {artifact.concept} {artifact.solution}".lower()
        ]

    def find_similar(self, artifact_id: str, limit: int = 5) -> List[IdeaArtifact]:
        """Same-domain artifacts ranked by shared tags and themes."""
        artifact = self.storage.retrieve(artifact_id)
        if artifact is None:
            return []
        candidates = [
            item for item in self.storage.list(CorpusFilter(domain=artifact.domain))
            if item.id != artifact_id
        ]
        candidates.sort(
            key=lambda item: self.calculate_similarity_score(artifact, item),
            reverse=True,
        )
        return candidates[:limit]

    def export(self, artifact_id: str, fmt: str) -> Optional[str]:
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {fmt!r}")
        artifact = self.storage.retrieve(artifact_id)
        if artifact is None:
            return None
        if fmt == "json":
            return json.dumps(artifact.to_dict(), indent=2, ensure_ascii=False)
        return self.export_markdown(artifact)

    def get_mode(self) -> str:
        return self.mode

    def get_stats(self) -> CorpusStats:
        return self.storage.get_stats()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _build_artifact(
        self,
        parsed: ParsedPrompt,
        provenance: ArtifactProvenance,
        parent_id: Optional[str],
        components: Optional[Tuple[Component, ...]] = None,
        architecture: Optional[Architecture] = None,
    ) -> IdeaArtifact:
        """Assemble and finalize an artifact; components/architecture default to the generic templates."""
        concept = generate_concept(parsed)
        if components is None:
            components = generate_components(parsed)
        if architecture is None:
            architecture = define_architecture(components, parsed.constraints)

        artifact = IdeaArtifact(
            id=self.generate_id(),
            title=concept.title,
            domain=parsed.domain,
            concept=parsed.concept,
            problem=concept.problem,
            solution=concept.solution,
            themes=concept.themes,
            components=components,
            architecture=architecture,
            quality=self.scorer.score(parsed.raw_concept),
            provenance=provenance,
            lineage=create_lineage(parent_id),
            metadata=ArtifactMetadata(
                constraints=parsed.constraints,
                tags=parsed.tags,
                mode=self.mode,
                created_at=self.now_iso(),
                aesthetic_direction=parsed.aesthetic_direction,
            ),
        )
        return finalize_artifact(artifact)

    def calculate_similarity_score(self, a: IdeaArtifact, b: IdeaArtifact) -> float:
        shared_tags = sum(1 for tag in a.metadata.tags if tag in b.metadata.tags)
        shared_themes = sum(1 for theme in a.themes if theme in b.themes)
        return (shared_tags + shared_themes) / 10

    def export_markdown(self, artifact: IdeaArtifact) -> str:
        lines = [
            f"# {artifact.title}",
            f"**Domain:** {artifact.domain.value}",
            f"**Concept:** {artifact.concept}",
            "## Problem",
            artifact.problem,
            "## Solution",
            artifact.solution,
            "## Components",
        ]
        lines.extend(f"- {c.name}: {c.function}" for c in artifact.components)
        lines.extend([
            "## Architecture",
            f"- Storage: {artifact.architecture.storage}",
            f"- Computation: {artifact.architecture.computation}",
            f"- Interface: {artifact.architecture.interface}",
            "## Quality",
            f"Composite Score: {artifact.quality.composite:.2f}",
        ])
        return "\n".join(lines)
