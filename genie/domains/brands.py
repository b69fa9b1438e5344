"""
Brands Domain Handler

Derives brand characteristics from concept wording and maps them to an
identity system.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple

from ..contracts import Architecture, Component


@dataclass(frozen=True)
class BrandCharacteristics:
    industry: str
    personality: Tuple[str, ...]
    target_audience: str
    price_point: str
    values: Tuple[str, ...]


class BrandsDomainHandler:

    def analyze_characteristics(self, concept: str) -> BrandCharacteristics:
        text = concept.lower()
        if "luxury" in text:
            industry = "Luxury"
        elif "wellness" in text:
            industry = "Wellness"
        else:
            industry = "Lifestyle"
        return BrandCharacteristics(
            industry=industry,
            personality=("Bold", "Visionary") if "bold" in text else ("Refined", "Empathic"),
            target_audience="Gen Z pioneers" if "gen z" in text else "Emerging tastemakers",
            price_point="Premium" if ("premium" in text or "luxury" in text) else "Accessible",
            values=("Authenticity", "Craft", "Cultural resonance"),
        )

    def generate_aesthetic_direction(self, characteristics: BrandCharacteristics) -> str:
        return (
            f"Palette inspired by {characteristics.industry} cues, typography that signals "
            f"{characteristics.personality[0].lower()} clarity, and visual motifs that speak to "
            f"{characteristics.target_audience}."
        )

    def generate_components(self, characteristics: BrandCharacteristics) -> Tuple[Component, ...]:
        return (
            Component(
                name="Visual Identity System",
                function="Defines color, typography, and symbol language.",
                owner="Brand Design",
                integration="Feeds all touchpoints and collateral.",
                tech=("Color Systems", "Typography", "Logo Suite"),
                features=("Signature palette", "Iconography", "Runic overlays"),
            ),
            Component(
                name="Brand Voice & Messaging",
                function="Aligns tone, language, and narrative pillars.",
                owner="Brand Strategy",
                integration="Guides campaigns and product narratives.",
                tech=("Narrative Frameworks", "Messaging Matrix"),
                features=("Taglines", "Voice pillars", "Cultural lexicon"),
            ),
            Component(
                name="Brand Experience Design",
                function="Shapes the multisensory experience across channels.",
                owner="Experience Design",
                integration="Coordinates retail, digital, and community touchpoints.",
                tech=("Service Blueprints", "Journey Mapping"),
                features=("Ritual moments", "Community activation", "Experiential storytelling"),
            ),
            Component(
                name="Brand Guidelines",
                function="Codifies governance and usage standards.",
                owner="Brand Ops",
                integration="Ensures consistency for partners.",
                tech=("Governance Playbook",),
                features=("Usage rules", "Asset management", "Launch checklist"),
            ),
        )

    def define_architecture(self, characteristics: BrandCharacteristics) -> Architecture:
        return Architecture(
            storage="Asset library with versioned governance",
            computation=f"Strategy hub aligning {', '.join(characteristics.personality)} positioning",
            interface="Brand portal for stakeholders",
            ecosystem_mapping=("Guidelines library", "Campaign toolkit", "Community rituals"),
        )
