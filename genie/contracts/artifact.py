"""
Artifact Contracts

Immutable records exchanged between the ideation engine, the corpus store
and the overlay bridge.

BOUNDARY ENFORCEMENT:
=====================
- All types are FROZEN; "modifying" an artifact means building a new one
  with dataclasses.replace()
- to_dict()/from_dict() define the JSON shape used on the wire and in the
  corpus; the shape is stable and shared with host integrations
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .domain import IdeationDomain, parse_domain
from .quality import QualityScore


def _string_tuple(data: Dict[str, Any], key: str) -> Tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Field '{key}' must be a list of strings")
    return tuple(value)


# =============================================================================
# INPUT
# =============================================================================

@dataclass(frozen=True)
class IdeationPrompt:
    """
    A request to generate an idea.

    WHY A SEPARATE TYPE:
    The prompt is the only input that shapes an artifact's content, so it is
    validated once at the boundary and is immutable afterwards.
    """
    concept: str
    domain: IdeationDomain
    constraints: Tuple[str, ...] = field(default_factory=tuple)
    aesthetic_direction: Optional[str] = None
    tags: Tuple[str, ...] = field(default_factory=tuple)
    mode: Optional[str] = None

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> IdeationPrompt:
        if not isinstance(data, dict):
            raise ValueError("Prompt must be an object")
        concept = data.get("concept")
        if not isinstance(concept, str) or not concept.strip():
            raise ValueError("Field 'concept' must be a non-empty string")
        if "domain" not in data:
            raise ValueError("Field 'domain' is required")
        aesthetic = data.get("aestheticDirection")
        if aesthetic is not None and not isinstance(aesthetic, str):
            raise ValueError("Field 'aestheticDirection' must be a string")
        mode = data.get("mode")
        if mode is not None and not isinstance(mode, str):
            raise ValueError("Field 'mode' must be a string")
        return IdeationPrompt(
            concept=concept,
            domain=parse_domain(data["domain"]),
            constraints=_string_tuple(data, "constraints"),
            aesthetic_direction=aesthetic,
            tags=_string_tuple(data, "tags"),
            mode=mode,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "concept": self.concept,
            "domain": self.domain.value,
            "constraints": list(self.constraints),
            "tags": list(self.tags),
        }
        if self.aesthetic_direction is not None:
            data["aestheticDirection"] = self.aesthetic_direction
        if self.mode is not None:
            data["mode"] = self.mode
        return data


# =============================================================================
# ARTIFACT PARTS
# =============================================================================

@dataclass(frozen=True)
class Component:
    name: str
    function: str
    owner: str
    integration: str
    tech: Tuple[str, ...]
    features: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "function": self.function,
            "owner": self.owner,
            "integration": self.integration,
            "tech": list(self.tech),
            "features": list(self.features),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Component:
        return Component(
            name=data["name"],
            function=data["function"],
            owner=data["owner"],
            integration=data["integration"],
            tech=tuple(data.get("tech", ())),
            features=tuple(data.get("features", ())),
        )


@dataclass(frozen=True)
class Architecture:
    storage: str
    computation: str
    interface: str
    ecosystem_mapping: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "storage": self.storage,
            "computation": self.computation,
            "interface": self.interface,
            "ecosystem_mapping": list(self.ecosystem_mapping),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Architecture:
        return Architecture(
            storage=data["storage"],
            computation=data["computation"],
            interface=data["interface"],
            ecosystem_mapping=tuple(data.get("ecosystem_mapping", ())),
        )


@dataclass(frozen=True)
class ArtifactProvenance:
    """
    Where an artifact came from and what happened to it.

    transformations is an append-only audit trail.
    """
    origin: str
    generator: str
    transformations: Tuple[str, ...]
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin": self.origin,
            "generator": self.generator,
            "transformations": list(self.transformations),
            "timestamp": self.timestamp,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ArtifactProvenance:
        return ArtifactProvenance(
            origin=data["origin"],
            generator=data["generator"],
            transformations=tuple(data.get("transformations", ())),
            timestamp=data["timestamp"],
        )


@dataclass(frozen=True)
class Lineage:
    parent: Optional[str] = None
    children: Tuple[str, ...] = field(default_factory=tuple)
    hash: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.parent is not None:
            data["parent"] = self.parent
        data["children"] = list(self.children)
        if self.hash is not None:
            data["hash"] = self.hash
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Lineage:
        return Lineage(
            parent=data.get("parent"),
            children=tuple(data.get("children", ())),
            hash=data.get("hash"),
        )


@dataclass(frozen=True)
class ArtifactMetadata:
    constraints: Tuple[str, ...]
    tags: Tuple[str, ...]
    mode: str
    created_at: str
    aesthetic_direction: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "constraints": list(self.constraints),
            "tags": list(self.tags),
            "mode": self.mode,
        }
        if self.aesthetic_direction is not None:
            data["aestheticDirection"] = self.aesthetic_direction
        data["createdAt"] = self.created_at
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ArtifactMetadata:
        return ArtifactMetadata(
            constraints=tuple(data.get("constraints", ())),
            tags=tuple(data.get("tags", ())),
            mode=data["mode"],
            created_at=data["createdAt"],
            aesthetic_direction=data.get("aestheticDirection"),
        )


# =============================================================================
# OUTPUT
# =============================================================================

@dataclass(frozen=True)
class IdeaArtifact:
    """
    A generated idea.

    WHY THIS STRUCTURE:
    - content fields (title .. quality) are pure functions of the prompt
    - id and timestamps are assigned through engine hooks, so a caller that
      controls those hooks controls every non-content field
    """
    id: str
    title: str
    domain: IdeationDomain
    concept: str
    problem: str
    solution: str
    themes: Tuple[str, ...]
    components: Tuple[Component, ...]
    architecture: Architecture
    quality: QualityScore
    provenance: ArtifactProvenance
    lineage: Lineage
    metadata: ArtifactMetadata

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "domain": self.domain.value,
            "concept": self.concept,
            "problem": self.problem,
            "solution": self.solution,
            "themes": list(self.themes),
            "components": [c.to_dict() for c in self.components],
            "architecture": self.architecture.to_dict(),
            "quality": self.quality.to_dict(),
            "provenance": self.provenance.to_dict(),
            "lineage": self.lineage.to_dict(),
            "metadata": self.metadata.to_dict(),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> IdeaArtifact:
        return IdeaArtifact(
            id=data["id"],
            title=data["title"],
            domain=parse_domain(data["domain"]),
            concept=data["concept"],
            problem=data["problem"],
            solution=data["solution"],
            themes=tuple(data.get("themes", ())),
            components=tuple(Component.from_dict(c) for c in data.get("components", ())),
            architecture=Architecture.from_dict(data["architecture"]),
            quality=QualityScore.from_dict(data["quality"]),
            provenance=ArtifactProvenance.from_dict(data["provenance"]),
            lineage=Lineage.from_dict(data.get("lineage", {})),
            metadata=ArtifactMetadata.from_dict(data["metadata"]),
        )


@dataclass(frozen=True)
class AnalysisReport:
    id: str
    summary: str
    recommendations: Tuple[str, ...]
    risks: Tuple[str, ...]
    opportunities: Tuple[str, ...]
    score: QualityScore

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "summary": self.summary,
            "recommendations": list(self.recommendations),
            "risks": list(self.risks),
            "opportunities": list(self.opportunities),
            "score": self.score.to_dict(),
        }


def artifacts_to_dicts(artifacts: List[IdeaArtifact]) -> List[Dict[str, Any]]:
    return [a.to_dict() for a in artifacts]
