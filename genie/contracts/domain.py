"""
Ideation Domains

The fixed set of domains an idea can be generated for.
"""

from __future__ import annotations
from enum import Enum
from typing import Dict


class IdeationDomain(Enum):
    """Domains understood by the ideation engine."""
    SOFTWARE = "software"
    BRANDS = "brands"
    PRODUCTS = "products"
    CONTENT = "content"
    BUSINESS = "business"
    SYSTEMS = "systems"
    CREATIVE = "creative"
    RESEARCH = "research"
    EVENTS = "events"
    EDUCATION = "education"


DOMAIN_METADATA: Dict[IdeationDomain, Dict[str, object]] = {
    IdeationDomain.SOFTWARE: {
        "description": "Digital products, platforms, and technical systems.",
        "primary_signals": ("stack", "architecture", "users"),
    },
    IdeationDomain.BRANDS: {
        "description": "Identity, positioning, and experiential brand systems.",
        "primary_signals": ("aesthetic", "voice", "audience"),
    },
    IdeationDomain.PRODUCTS: {
        "description": "Physical or digital offerings and their ecosystems.",
        "primary_signals": ("materials", "manufacturing", "distribution"),
    },
    IdeationDomain.CONTENT: {
        "description": "Narratives, media strategies, and publishing systems.",
        "primary_signals": ("story", "format", "distribution"),
    },
    IdeationDomain.BUSINESS: {
        "description": "Operating models, go-to-market, and revenue engines.",
        "primary_signals": ("model", "market", "ops"),
    },
    IdeationDomain.SYSTEMS: {
        "description": "Complex infrastructures and interconnected processes.",
        "primary_signals": ("flows", "dependencies", "optimization"),
    },
    IdeationDomain.CREATIVE: {
        "description": "Artistic explorations, concepts, and experiential design.",
        "primary_signals": ("expression", "medium", "emotion"),
    },
    IdeationDomain.RESEARCH: {
        "description": "Investigation, discovery, and experimental programs.",
        "primary_signals": ("hypothesis", "method", "insight"),
    },
    IdeationDomain.EVENTS: {
        "description": "Experiential gatherings, rituals, and live engagements.",
        "primary_signals": ("journey", "venue", "participation"),
    },
    IdeationDomain.EDUCATION: {
        "description": "Learning systems, curricula, and knowledge transfer.",
        "primary_signals": ("curriculum", "pedagogy", "outcomes"),
    },
}


def parse_domain(value: object) -> IdeationDomain:
    """Resolve a wire value to a domain, raising ValueError if unknown."""
    if isinstance(value, IdeationDomain):
        return value
    try:
        return IdeationDomain(value)
    except ValueError:
        known = ", ".join(d.value for d in IdeationDomain)
        raise ValueError(f"Unknown domain: {value!r} (expected one of: {known})") from None


