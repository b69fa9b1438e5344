"""
Quality Contracts

Immutable score types produced by the quality scorer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class QualityTier(Enum):
    """Coarse verdict derived from the composite score."""
    REJECT = "reject"
    CONSIDER = "consider"
    ACCEPT = "accept"
    PRIORITIZE = "prioritize"


# Composite weights; they sum to 1.0
STANDALONE_WEIGHTS: Dict[str, float] = {
    "ontological_depth": 0.3,
    "novelty": 0.25,
    "viability": 0.25,
    "zeitgeist_alignment": 0.15,
    "generative_potential": 0.05,
}

DIMENSIONS: Tuple[str, ...] = tuple(STANDALONE_WEIGHTS)


@dataclass(frozen=True)
class DimensionScore:
    """A single scored dimension with its rationale."""
    value: float
    rationale: str
    sub_scores: Tuple[Tuple[str, float], ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"value": self.value, "rationale": self.rationale}
        if self.sub_scores:
            data["subScores"] = {name: score for name, score in self.sub_scores}
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> DimensionScore:
        return DimensionScore(
            value=float(data["value"]),
            rationale=data.get("rationale", ""),
            sub_scores=tuple(
                (name, float(score))
                for name, score in (data.get("subScores") or {}).items()
            ),
        )


@dataclass(frozen=True)
class QualityBreakdown:
    strengths: Tuple[str, ...]
    weaknesses: Tuple[str, ...]
    refinements: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "refinements": list(self.refinements),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> QualityBreakdown:
        return QualityBreakdown(
            strengths=tuple(data.get("strengths", ())),
            weaknesses=tuple(data.get("weaknesses", ())),
            refinements=tuple(data.get("refinements", ())),
        )


@dataclass(frozen=True)
class QualityScore:
    """
    Five-dimension quality assessment of a concept.

    INVARIANT: passed == (composite >= threshold)
    """
    ontological_depth: DimensionScore
    novelty: DimensionScore
    viability: DimensionScore
    zeitgeist_alignment: DimensionScore
    generative_potential: DimensionScore
    composite: float
    threshold: float
    passed: bool
    tier: QualityTier
    breakdown: QualityBreakdown

    def dimension(self, name: str) -> Optional[DimensionScore]:
        if name not in DIMENSIONS:
            return None
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            name: getattr(self, name).to_dict() for name in DIMENSIONS
        }
        data.update({
            "composite": self.composite,
            "threshold": self.threshold,
            "passed": self.passed,
            "tier": self.tier.value,
            "breakdown": self.breakdown.to_dict(),
        })
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> QualityScore:
        return QualityScore(
            ontological_depth=DimensionScore.from_dict(data["ontological_depth"]),
            novelty=DimensionScore.from_dict(data["novelty"]),
            viability=DimensionScore.from_dict(data["viability"]),
            zeitgeist_alignment=DimensionScore.from_dict(data["zeitgeist_alignment"]),
            generative_potential=DimensionScore.from_dict(data["generative_potential"]),
            composite=float(data["composite"]),
            threshold=float(data["threshold"]),
            passed=bool(data["passed"]),
            tier=QualityTier(data["tier"]),
            breakdown=QualityBreakdown.from_dict(data.get("breakdown", {})),
        )
