"""
Semantic Search
===============

In-memory similarity index over artifacts.

Embeddings are token-hash vectors computed with numpy: each token adds a
fixed weight to a bucket chosen from its character codes and position. No
model download is involved, so the same text embeds to the same vector on
every machine.

GUARANTEES:
- Same text -> identical vector
- Similarity is raw cosine; thresholds are applied only by callers that
  ask for them (find_duplicates)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import numpy as np

from .contracts import IdeaArtifact
from .ideation import tokenize


@dataclass(frozen=True)
class SemanticSearchConfig:
    dimensions: int = 384
    token_weight: float = 0.05
    position_stride: int = 13
    default_limit: int = 5


@dataclass(frozen=True)
class IndexStats:
    count: int
    memory_bytes: int


def indexable_text(artifact: IdeaArtifact) -> str:
    return f"{artifact.title} {artifact.concept} {artifact.solution}"


class SemanticSearch:

    def __init__(self, config: Optional[SemanticSearchConfig] = None):
        self._config = config or SemanticSearchConfig()
        # artifact_id -> (artifact, embedding); insertion ordered
        self._index: Dict[str, Tuple[IdeaArtifact, np.ndarray]] = {}

    def generate_embedding(self, text: str) -> np.ndarray:
        vector = np.zeros(self._config.dimensions, dtype=np.float64)
        for index, token in enumerate(tokenize(text)):
            token_code = sum(ord(char) for char in token)
            position = (token_code + index * self._config.position_stride) % self._config.dimensions
            vector[position] += self._config.token_weight
        return vector

    @staticmethod
    def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
        denominator = float(np.linalg.norm(a) * np.linalg.norm(b)) or 1.0
        return float(np.dot(a, b)) / denominator

    def index_artifact(self, artifact: IdeaArtifact) -> None:
        self._index[artifact.id] = (artifact, self.generate_embedding(indexable_text(artifact)))

    def index_batch(self, artifacts: List[IdeaArtifact]) -> None:
        for artifact in artifacts:
            self.index_artifact(artifact)

    def find_similar(self, text: str, limit: Optional[int] = None) -> List[IdeaArtifact]:
        limit = self._config.default_limit if limit is None else limit
        query = self.generate_embedding(text)
        scored = [
            (self.cosine_similarity(query, embedding), artifact)
            for artifact, embedding in self._index.values()
        ]
        # Stable sort keeps index order among equal scores
        scored.sort(key=lambda entry: entry[0], reverse=True)
        return [artifact for _, artifact in scored[:limit]]

    def search(self, query: str, limit: Optional[int] = None) -> List[IdeaArtifact]:
        return self.find_similar(query, limit)

    def find_duplicates(self, threshold: float = 0.85) -> List[Tuple[IdeaArtifact, IdeaArtifact]]:
        entries = list(self._index.values())
        duplicates: List[Tuple[IdeaArtifact, IdeaArtifact]] = []
        for i, (first, first_vec) in enumerate(entries):
            for second, second_vec in entries[i + 1:]:
                if self.cosine_similarity(first_vec, second_vec) >= threshold:
                    duplicates.append((first, second))
        return duplicates

    def get_stats(self) -> IndexStats:
        return IndexStats(
            count=len(self._index),
            memory_bytes=sum(embedding.nbytes for _, embedding in self._index.values()),
        )

    def clear(self) -> None:
        self._index.clear()
