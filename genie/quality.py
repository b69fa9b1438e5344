"""
Quality Scorer
==============

String-heuristic scoring of a concept across five dimensions.

GUARANTEES:
- Scores depend only on the concept text
- All values are clamped to [0, 1]
"""

from __future__ import annotations
from typing import Dict, List
import re

from .contracts import (
    DIMENSIONS,
    STANDALONE_WEIGHTS,
    DimensionScore,
    QualityBreakdown,
    QualityScore,
    QualityTier,
)


PASS_THRESHOLD = 0.5

VIABILITY_KEYWORDS = ("market", "resource", "regulatory", "technical", "team")
ZEITGEIST_KEYWORDS = ("future", "trend", "cultural", "climate", "ai", "sustainability")


def clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _keyword_hits(text: str, keywords) -> int:
    lowered = text.lower()
    return sum(1 for keyword in keywords if keyword in lowered)


class QualityScorer:
    """Scores prompt text; stateless, safe to share."""

    def score(self, prompt_text: str) -> QualityScore:
        scores = {
            "ontological_depth": self.score_ontological_depth(prompt_text),
            "novelty": self.score_novelty(prompt_text),
            "viability": self.score_viability(prompt_text),
            "zeitgeist_alignment": self.score_zeitgeist(prompt_text),
            "generative_potential": self.score_generative_potential(prompt_text),
        }
        composite = self.calculate_composite(scores)
        return QualityScore(
            composite=composite,
            threshold=PASS_THRESHOLD,
            passed=composite >= PASS_THRESHOLD,
            tier=self.determine_tier(composite),
            breakdown=self.generate_breakdown(scores),
            **scores,
        )

    def score_ontological_depth(self, prompt_text: str) -> DimensionScore:
        value = clamp(len(prompt_text.split(" ")) / 40)
        return DimensionScore(
            value=value,
            rationale="Depth rises as the concept includes layered intent and systemic scope.",
            sub_scores=(
                ("surface", clamp(0.25 - value / 4)),
                ("functional", clamp(value * 0.35)),
                ("psychological", clamp(value * 0.45)),
                ("philosophical", clamp(value * 0.7)),
                ("ontological", clamp(value * 0.9)),
            ),
        )

    def score_novelty(self, prompt_text: str) -> DimensionScore:
        # Leading or trailing punctuation leaves an empty fragment; it counts
        unique = len(set(re.split(r"\W+", prompt_text.lower(), flags=re.ASCII)))
        value = clamp(unique / 30)
        return DimensionScore(
            value=value,
            rationale="Novelty increases with diverse language and distinctive framing.",
            sub_scores=(
                ("derivative", clamp(0.3 - value / 2)),
                ("recombinant", clamp(value * 0.6)),
                ("novel", clamp(value * 0.8)),
                ("paradigmatic", clamp(value)),
            ),
        )

    def score_viability(self, prompt_text: str) -> DimensionScore:
        hits = _keyword_hits(prompt_text, VIABILITY_KEYWORDS)
        technical = clamp(0.4 + hits * 0.05)
        resource = clamp(0.35 + hits * 0.04)
        market = clamp(0.3 + hits * 0.06)
        regulatory = clamp(0.25 + hits * 0.05)
        value = clamp(technical * 0.3 + resource * 0.2 + market * 0.3 + regulatory * 0.2)
        return DimensionScore(
            value=value,
            rationale="Viability balances technical feasibility, resources, market fit, and compliance.",
            sub_scores=(
                ("technical", technical),
                ("resource", resource),
                ("market", market),
                ("regulatory", regulatory),
            ),
        )

    def score_zeitgeist(self, prompt_text: str) -> DimensionScore:
        hits = _keyword_hits(prompt_text, ZEITGEIST_KEYWORDS)
        trend = clamp(0.4 + hits * 0.05)
        contrarian = clamp(0.35 + hits * 0.04)
        future = clamp(0.3 + hits * 0.06)
        timeless = clamp(0.4 + hits * 0.03)
        value = clamp(trend * 0.2 + contrarian * 0.3 + future * 0.3 + timeless * 0.2)
        return DimensionScore(
            value=value,
            rationale="Zeitgeist alignment reflects cultural pulse and long-term resonance.",
            sub_scores=(
                ("trend", trend),
                ("contrarian", contrarian),
                ("future", future),
                ("timeless", timeless),
            ),
        )

    def score_generative_potential(self, prompt_text: str) -> DimensionScore:
        base = clamp(len(prompt_text) / 200)
        return DimensionScore(
            value=base,
            rationale="Generative potential improves when the concept extends to ecosystems.",
            sub_scores=(
                ("extensibility", clamp(base * 0.9)),
                ("platform", clamp(base * 0.8)),
                ("network", clamp(base * 0.7)),
                ("evolution", clamp(base)),
            ),
        )

    def calculate_composite(self, scores: Dict[str, DimensionScore]) -> float:
        return clamp(sum(
            scores[name].value * STANDALONE_WEIGHTS[name] for name in DIMENSIONS
        ))

    def generate_breakdown(self, scores: Dict[str, DimensionScore]) -> QualityBreakdown:
        strengths: List[str] = []
        weaknesses: List[str] = []
        refinements: List[str] = []

        for name in DIMENSIONS:
            value = scores[name].value
            if value >= 0.7:
                strengths.append(f"{name} is strong.")
            elif value <= 0.45:
                weaknesses.append(f"{name} needs reinforcement.")
                refinements.append(f"Expand {name.replace('_', ' ', 1)} through clearer detail.")

        if not strengths:
            strengths.append("Balanced foundation with room for amplification.")
        if not weaknesses:
            refinements.append("Introduce bold differentiators to push the score higher.")

        return QualityBreakdown(
            strengths=tuple(strengths),
            weaknesses=tuple(weaknesses),
            refinements=tuple(refinements),
        )

    def determine_tier(self, score: float) -> QualityTier:
        if score < 0.5:
            return QualityTier.REJECT
        if score < 0.65:
            return QualityTier.CONSIDER
        if score < 0.8:
            return QualityTier.ACCEPT
        return QualityTier.PRIORITIZE
