"""
Ideation Contracts

Shared immutable types for the ideation engine. Every other genie module
imports its types from here.
"""

from .artifact import (
    IdeationPrompt,
    Component,
    Architecture,
    ArtifactProvenance,
    Lineage,
    ArtifactMetadata,
    IdeaArtifact,
    AnalysisReport,
    artifacts_to_dicts,
)
from .domain import IdeationDomain, DOMAIN_METADATA, parse_domain
from .quality import (
    QualityTier,
    DimensionScore,
    QualityBreakdown,
    QualityScore,
    STANDALONE_WEIGHTS,
    DIMENSIONS,
)

__all__ = [
    # Artifacts
    'IdeationPrompt', 'Component', 'Architecture', 'ArtifactProvenance',
    'Lineage', 'ArtifactMetadata', 'IdeaArtifact', 'AnalysisReport',
    'artifacts_to_dicts',
    # Domains
    'IdeationDomain', 'DOMAIN_METADATA', 'parse_domain',
    # Quality
    'QualityTier', 'DimensionScore', 'QualityBreakdown', 'QualityScore',
    'STANDALONE_WEIGHTS', 'DIMENSIONS',
]
