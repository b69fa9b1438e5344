"""
Ideation Pipeline
=================

Pure text transforms from a prompt to concept, components and architecture.

GUARANTEES:
- Every function here is a pure function of its arguments
- No clock reads, no randomness, no I/O
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import re

from .contracts import Architecture, Component, IdeationDomain, IdeationPrompt


_WORD_SPLIT = re.compile(r"\W+", re.ASCII)


@dataclass(frozen=True)
class ParsedPrompt:
    concept: str
    raw_concept: str  # as sent; quality scores this text
    domain: IdeationDomain
    constraints: Tuple[str, ...]
    tags: Tuple[str, ...]
    aesthetic_direction: Optional[str] = None


@dataclass(frozen=True)
class Concept:
    title: str
    problem: str
    solution: str
    themes: Tuple[str, ...]


def parse_prompt(prompt: IdeationPrompt) -> ParsedPrompt:
    return ParsedPrompt(
        concept=prompt.concept.strip(),
        raw_concept=prompt.concept,
        domain=prompt.domain,
        constraints=tuple(prompt.constraints),
        tags=tuple(prompt.tags),
        aesthetic_direction=prompt.aesthetic_direction,
    )


def tokenize(text: str) -> List[str]:
    """Lowercase word tokens, empty tokens dropped."""
    return [token for token in _WORD_SPLIT.split(text.lower()) if token]


def extract_themes(concept: str) -> Tuple[str, ...]:
    """First five distinct tokens, in order of appearance."""
    return tuple(dict.fromkeys(tokenize(concept)))[:5]


def generate_title(concept: str) -> str:
    words = [word for word in concept.split(" ") if word]
    return " ".join(words[:4])


def identify_problem(concept: str) -> str:
    return f"The current landscape lacks a focused solution for {concept.lower()}."


def propose_solution(concept: str) -> str:
    return f"Introduce a system that orchestrates {concept.lower()} with clear outcomes."


def generate_concept(parsed: ParsedPrompt) -> Concept:
    return Concept(
        title=generate_title(parsed.concept),
        problem=identify_problem(parsed.concept),
        solution=propose_solution(parsed.concept),
        themes=extract_themes(parsed.concept),
    )


def generate_components(parsed: ParsedPrompt) -> Tuple[Component, ...]:
    if parsed.domain is IdeationDomain.SOFTWARE:
        base_tech = ("Python", "asyncio")
    else:
        base_tech = ("Strategy",)
    experience_tech = ("Design Systems", "Figma") if parsed.domain is IdeationDomain.BRANDS else ("Markdown",)
    return (
        Component(
            name="Core Engine",
            function="Coordinates the ideation flow and orchestrates outputs.",
            owner="Core Team",
            integration="Integrates with domain-specific handlers.",
            tech=base_tech,
            features=("Prompt parsing", "Concept synthesis", "Quality scoring"),
        ),
        Component(
            name="Experience Layer",
            function="Delivers the result to stakeholders with clarity.",
            owner="Experience Team",
            integration="Connects to export and distribution channels.",
            tech=experience_tech,
            features=("Narrative framing", "Visualization", "Export readiness"),
        ),
    )


def mentions(constraints: Sequence[str], keyword: str) -> bool:
    """True if any constraint contains keyword (case-insensitive)."""
    return any(keyword in item.lower() for item in constraints)


def define_architecture(
    components: Sequence[Component],
    constraints: Sequence[str],
) -> Architecture:
    realtime = mentions(constraints, "realtime")
    return Architecture(
        storage="Event-sourced data store" if realtime else "Document-oriented store",
        computation="Modular services with deterministic pipelines",
        interface="Streaming dashboard" if realtime else "Insight portal",
        ecosystem_mapping=tuple(component.name for component in components),
    )
