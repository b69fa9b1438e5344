"""
Neon Genie

Idea-generation engine: prompt parsing, concept synthesis, component and
architecture templating, quality scoring, and a file-backed corpus.

The engine is clock/entropy dependent only through NeonGenie.generate_id()
and NeonGenie.now_iso(); see the overlay package for the deterministic
variant used by process-based hosts.
"""

from .contracts import (
    IdeationPrompt,
    IdeaArtifact,
    AnalysisReport,
    IdeationDomain,
    QualityScore,
    QualityTier,
)
from .engine import NeonGenie, GenieConfig, EXPORT_FORMATS
from .enhanced import EnhancedNeonGenie
from .quality import QualityScorer
from .search import SemanticSearch
from .storage import CorpusStorage, CorpusFilter, CorpusStats

__all__ = [
    # Contracts
    'IdeationPrompt', 'IdeaArtifact', 'AnalysisReport', 'IdeationDomain',
    'QualityScore', 'QualityTier',
    # Engine
    'NeonGenie', 'GenieConfig', 'EXPORT_FORMATS', 'EnhancedNeonGenie',
    'QualityScorer', 'SemanticSearch',
    # Corpus
    'CorpusStorage', 'CorpusFilter', 'CorpusStats',
]
