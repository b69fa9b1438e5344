"""
Enhanced Neon Genie

Adds domain-aware component templates and a semantic index on top of the
base engine. Uses the same generate_id()/now_iso() hooks, so deterministic
subclasses of the base engine apply unchanged.
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import logging

from .contracts import IdeaArtifact, IdeationDomain, IdeationPrompt
from .domains import BrandsDomainHandler, SoftwareDomainHandler
from .engine import GenieConfig, NeonGenie
from .ideation import parse_prompt
from .provenance import create_provenance
from .search import IndexStats, SemanticSearch


logger = logging.getLogger(__name__)


class EnhancedNeonGenie(NeonGenie):

    GENERATOR = "neon-genie-enhanced"

    def __init__(self, config: Optional[GenieConfig] = None):
        super().__init__(config)
        self.software_handler = SoftwareDomainHandler()
        self.brands_handler = BrandsDomainHandler()
        self.semantic_search = SemanticSearch()

    def generate_enhanced(self, prompt: IdeationPrompt) -> IdeaArtifact:
        parsed = parse_prompt(prompt)
        components = architecture = None

        if parsed.domain is IdeationDomain.SOFTWARE:
            components = self.software_handler.generate_components(parsed.concept, parsed.constraints)
            architecture = self.software_handler.define_architecture(parsed.constraints)
        elif parsed.domain is IdeationDomain.BRANDS:
            characteristics = self.brands_handler.analyze_characteristics(parsed.concept)
            components = self.brands_handler.generate_components(characteristics)
            architecture = self.brands_handler.define_architecture(characteristics)

        artifact = self._build_artifact(
            parsed,
            provenance=create_provenance(self.now_iso(), generator=self.GENERATOR),
            parent_id=None,
            components=components,
            architecture=architecture,
        )
        self.storage.store(artifact)
        self.semantic_search.index_artifact(artifact)
        logger.info("Generated enhanced artifact %s (%s)", artifact.id, artifact.domain.value)
        return artifact

    def load_corpus_index(self) -> int:
        """Index every stored artifact; returns the index size."""
        self.semantic_search.index_batch(self.storage.list())
        return self.semantic_search.get_stats().count

    def search_semantic(self, query: str) -> List[IdeaArtifact]:
        return self.semantic_search.search(query)

    def find_similar_semantic(self, text: str) -> List[IdeaArtifact]:
        return self.semantic_search.find_similar(text)

    def detect_duplicates(self, threshold: float = 0.85) -> List[Tuple[IdeaArtifact, IdeaArtifact]]:
        return self.semantic_search.find_duplicates(threshold)

    def get_semantic_stats(self) -> IndexStats:
        return self.semantic_search.get_stats()
