"""
Ideation Contract Tests

Boundary validation of prompts and the stable wire shape of artifacts.
"""

import pytest

from genie.contracts import (
    IdeaArtifact,
    IdeationDomain,
    IdeationPrompt,
    Lineage,
    parse_domain,
)
from genie.engine import GenieConfig, NeonGenie


class TestIdeationPrompt:

    def test_minimal(self):
        prompt = IdeationPrompt.from_dict({"concept": "X", "domain": "software"})
        assert prompt == IdeationPrompt(concept="X", domain=IdeationDomain.SOFTWARE)

    def test_full(self):
        prompt = IdeationPrompt.from_dict({
            "concept": "Night market",
            "domain": "events",
            "constraints": ["outdoor"],
            "aestheticDirection": "neon",
            "tags": ["food"],
            "mode": "overlay",
        })
        assert prompt.constraints == ("outdoor",)
        assert prompt.aesthetic_direction == "neon"
        assert prompt.to_dict()["aestheticDirection"] == "neon"

    @pytest.mark.parametrize("data", [
        {"domain": "software"},
        {"concept": "   ", "domain": "software"},
        {"concept": 7, "domain": "software"},
        {"concept": "X"},
        {"concept": "X", "domain": "astrology"},
        {"concept": "X", "domain": "software", "constraints": [1]},
        {"concept": "X", "domain": "software", "aestheticDirection": 3},
    ])
    def test_rejects(self, data):
        with pytest.raises(ValueError):
            IdeationPrompt.from_dict(data)


class TestDomain:

    def test_all_values(self):
        assert len(IdeationDomain) == 10
        assert parse_domain("brands") is IdeationDomain.BRANDS
        assert parse_domain(IdeationDomain.CONTENT) is IdeationDomain.CONTENT

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown domain"):
            parse_domain("astrology")


class TestArtifactWireShape:

    def test_keys(self, tmp_path):
        artifact = NeonGenie(GenieConfig(corpus_path=str(tmp_path))).generate(
            IdeationPrompt(concept="Night market", domain=IdeationDomain.EVENTS, aesthetic_direction="neon")
        )
        data = artifact.to_dict()
        assert list(data) == [
            "id", "title", "domain", "concept", "problem", "solution", "themes",
            "components", "architecture", "quality", "provenance", "lineage", "metadata",
        ]
        assert data["metadata"]["createdAt"] == artifact.metadata.created_at
        assert data["metadata"]["aestheticDirection"] == "neon"
        assert "ecosystem_mapping" in data["architecture"]
        assert "parent" not in data["lineage"]
        assert IdeaArtifact.from_dict(data) == artifact

    def test_lineage_optional_keys(self):
        assert Lineage().to_dict() == {"children": []}
        assert Lineage(parent="p", hash="h").to_dict() == {"parent": "p", "children": [], "hash": "h"}
