"""
Software Domain Handler

Keyword-driven pattern detection for software concepts, mapped to a tech
stack, component set and deployment architecture.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..contracts import Architecture, Component
from ..ideation import mentions


@dataclass(frozen=True)
class SoftwarePatterns:
    is_api: bool
    is_mobile: bool
    is_web: bool
    is_desktop: bool
    is_cli: bool
    needs_auth: bool
    needs_database: bool
    needs_realtime: bool
    is_ai: bool
    is_blockchain: bool


class SoftwareDomainHandler:

    def detect_patterns(self, concept: str, constraints: Sequence[str]) -> SoftwarePatterns:
        text = f"{concept} {' '.join(constraints)}".lower()
        return SoftwarePatterns(
            is_api="api" in text,
            is_mobile="mobile" in text,
            is_web="web" in text or "browser" in text,
            is_desktop="desktop" in text or "electron" in text,
            is_cli="cli" in text or "terminal" in text,
            needs_auth="auth" in text or "login" in text,
            needs_database="database" in text or "storage" in text,
            needs_realtime="realtime" in text or "stream" in text,
            is_ai="ai" in text or "machine learning" in text,
            is_blockchain="blockchain" in text or "web3" in text,
        )

    def select_tech_stack(self, patterns: SoftwarePatterns) -> Tuple[str, ...]:
        stack: List[str] = ["Python", "asyncio"]
        if patterns.is_web:
            stack.extend(["FastAPI", "React"])
        if patterns.is_mobile:
            stack.append("React Native")
        if patterns.is_desktop:
            stack.append("Qt")
        if patterns.needs_database:
            stack.append("PostgreSQL")
        if patterns.needs_realtime:
            stack.append("WebSockets")
        if patterns.is_ai:
            stack.append("Vector DB")
        if patterns.is_blockchain:
            stack.append("Smart Contracts")
        return tuple(stack)

    def generate_components(self, concept: str, constraints: Sequence[str]) -> Tuple[Component, ...]:
        patterns = self.detect_patterns(concept, constraints)
        return (
            Component(
                name="Product Core",
                function="Orchestrates primary workflows and domain logic.",
                owner="Platform Engineering",
                integration="Connects to data and interface layers.",
                tech=self.select_tech_stack(patterns),
                features=("State management", "Policy enforcement", "Workflow engine"),
            ),
            Component(
                name="Interface Gateway",
                function="Delivers experiences across devices and channels.",
                owner="Experience Engineering",
                integration="Syncs with API and analytics layers.",
                tech=("React Native", "Expo") if patterns.is_mobile else ("React", "Next.js"),
                features=("Adaptive UI", "Personalization", "Accessibility"),
            ),
            Component(
                name="Intelligence Layer",
                function="Provides automation, insights, and recommendation systems.",
                owner="AI Systems",
                integration="Feeds signals back to core workflows.",
                tech=("Embeddings", "Inference Pipeline") if patterns.is_ai else ("Rules Engine",),
                features=("Signal scoring", "Guidance loops", "Adaptive routing"),
            ),
        )

    def define_architecture(self, constraints: Sequence[str]) -> Architecture:
        return Architecture(
            storage=(
                "Encrypted local-first storage" if mentions(constraints, "privacy")
                else "Managed relational store"
            ),
            computation=(
                "Edge functions with regional caching" if mentions(constraints, "edge")
                else "Service mesh orchestration"
            ),
            interface=(
                "Progressive web shell with sync" if mentions(constraints, "offline")
                else "API-driven experience layer"
            ),
            ecosystem_mapping=(
                "Serverless functions" if mentions(constraints, "serverless") else "Containerized services",
                "Observability suite",
                "Security posture management",
            ),
        )

    def recommend_security(self, patterns: SoftwarePatterns) -> Tuple[str, ...]:
        strategies = ["Zero trust authentication", "Encrypted secrets management"]
        if patterns.needs_auth:
            strategies.append("MFA and adaptive access policies")
        if patterns.needs_database:
            strategies.append("Row-level security controls")
        return tuple(strategies)

    def recommend_deployment(self, patterns: SoftwarePatterns) -> Tuple[str, ...]:
        deployments = ["Blue/green deployment", "Automated rollback"]
        if patterns.needs_realtime:
            deployments.append("Edge caching with websocket routing")
        if patterns.is_ai:
            deployments.append("Model observability and drift detection")
        return tuple(deployments)
