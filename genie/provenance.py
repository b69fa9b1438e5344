"""
Artifact Provenance & Lineage

Helpers that build the audit fields of an artifact. Timestamps are always
passed in by the caller; nothing here reads the clock.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Any, Optional
import hashlib
import json

from .contracts import ArtifactProvenance, IdeaArtifact, Lineage


ORIGIN = "neon-genie-v3.7.0"


def create_provenance(timestamp: str, generator: str = "neon-genie-core") -> ArtifactProvenance:
    return ArtifactProvenance(
        origin=ORIGIN,
        generator=generator,
        transformations=(),
        timestamp=timestamp,
    )


def track_transformation(
    provenance: ArtifactProvenance,
    transformation: str,
    timestamp: str,
) -> ArtifactProvenance:
    """Return provenance with one more audit entry (original untouched)."""
    return replace(
        provenance,
        transformations=provenance.transformations + (transformation,),
        timestamp=timestamp,
    )


def create_lineage(parent: Optional[str] = None) -> Lineage:
    return Lineage(parent=parent, children=())


def generate_hash(content: Any) -> str:
    """SHA-256 over canonical (sorted-key, compact) JSON."""
    canonical = json.dumps(content, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def finalize_artifact(artifact: IdeaArtifact) -> IdeaArtifact:
    """
    Seal the artifact's structural content into lineage.hash.

    Only id, title, concept, components and architecture are covered, so
    restamping timestamps or the audit trail leaves the hash unchanged.
    """
    content_hash = generate_hash({
        "id": artifact.id,
        "title": artifact.title,
        "concept": artifact.concept,
        "components": [c.to_dict() for c in artifact.components],
        "architecture": artifact.architecture.to_dict(),
    })
    return replace(artifact, lineage=replace(artifact.lineage, hash=content_hash))
