"""
Corpus Storage
==============

File-backed artifact store: one JSON document per artifact.

GUARANTEES:
- store() overwrites by id; identical content written twice is a no-op in
  effect (last write wins)
- list() returns artifacts ordered by file name, independent of directory
  enumeration order
- No locks are held; every call is a single independent read or write
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional
import json
import logging
import os

from .contracts import IdeaArtifact, IdeationDomain


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusFilter:
    domain: Optional[IdeationDomain] = None
    min_quality: Optional[float] = None
    mode: Optional[str] = None

    def matches(self, artifact: IdeaArtifact) -> bool:
        if self.domain is not None and artifact.domain is not self.domain:
            return False
        if self.mode is not None and artifact.metadata.mode != self.mode:
            return False
        if self.min_quality is not None and artifact.quality.composite < self.min_quality:
            return False
        return True


@dataclass(frozen=True)
class CorpusStats:
    total: int
    by_domain: Dict[str, int]
    by_mode: Dict[str, int]
    avg_quality: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "byDomain": dict(self.by_domain),
            "byMode": dict(self.by_mode),
            "avgQuality": self.avg_quality,
        }


class CorpusStorage:
    """Directory of <id>.json artifact documents."""

    def __init__(self, root_path: str):
        self._root_path = root_path

    @property
    def root_path(self) -> str:
        return self._root_path

    def _artifact_path(self, artifact_id: str) -> str:
        if (
            not artifact_id
            or os.path.basename(artifact_id) != artifact_id
            or artifact_id in (".", "..")
        ):
            raise ValueError(f"Invalid artifact id: {artifact_id!r}")
        return os.path.join(self._root_path, f"{artifact_id}.json")

    def _ensure_root(self) -> None:
        os.makedirs(self._root_path, exist_ok=True)

    def _read(self, path: str) -> IdeaArtifact:
        with open(path, "r", encoding="utf-8") as f:
            return IdeaArtifact.from_dict(json.load(f))

    def store(self, artifact: IdeaArtifact) -> None:
        self._ensure_root()
        path = self._artifact_path(artifact.id)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(artifact.to_dict(), f, indent=2, ensure_ascii=False)
        logger.debug("Stored artifact %s at %s", artifact.id, path)

    def retrieve(self, artifact_id: str) -> Optional[IdeaArtifact]:
        path = self._artifact_path(artifact_id)
        try:
            return self._read(path)
        except FileNotFoundError:
            return None

    def list(self, corpus_filter: Optional[CorpusFilter] = None) -> List[IdeaArtifact]:
        corpus_filter = corpus_filter or CorpusFilter()
        self._ensure_root()
        artifacts: List[IdeaArtifact] = []
        for name in sorted(os.listdir(self._root_path)):
            if not name.endswith(".json"):
                continue
            artifact = self._read(os.path.join(self._root_path, name))
            if corpus_filter.matches(artifact):
                artifacts.append(artifact)
        return artifacts

    def update(self, artifact_id: str, **changes: Any) -> Optional[IdeaArtifact]:
        """Replace top-level fields of a stored artifact."""
        existing = self.retrieve(artifact_id)
        if existing is None:
            return None
        merged = replace(existing, **changes)
        self.store(merged)
        return merged

    def delete(self, artifact_id: str) -> bool:
        try:
            os.remove(self._artifact_path(artifact_id))
        except FileNotFoundError:
            return False
        return True

    def get_stats(self) -> CorpusStats:
        artifacts = self.list()
        by_domain: Dict[str, int] = {}
        by_mode: Dict[str, int] = {}
        for artifact in artifacts:
            by_domain[artifact.domain.value] = by_domain.get(artifact.domain.value, 0) + 1
            by_mode[artifact.metadata.mode] = by_mode.get(artifact.metadata.mode, 0) + 1
        total_quality = sum(a.quality.composite for a in artifacts)
        return CorpusStats(
            total=len(artifacts),
            by_domain=by_domain,
            by_mode=by_mode,
            avg_quality=total_quality / (len(artifacts) or 1),
        )
