"""
Neon Genie Engine Tests
=======================

INVARIANTS TESTED:
1. Content fields are pure functions of the prompt
2. Every clock/entropy read goes through generate_id()/now_iso()
3. Generated and evolved artifacts are persisted before return
4. Corpus queries are ordered deterministically
"""

import json
import re

import pytest

from genie.contracts import IdeationDomain, IdeationPrompt, QualityScore
from genie.engine import EXPORT_FORMATS, GenieConfig, NeonGenie, utc_now_iso
from genie.enhanced import EnhancedNeonGenie
from genie.quality import QualityScorer


FIXED_TS = "2025-02-01T09:30:00.000Z"


class CountingGenie(NeonGenie):
    """Engine with both hooks pinned: sequential ids, fixed clock."""

    def __init__(self, config=None):
        super().__init__(config)
        self.issued = 0

    def generate_id(self) -> str:
        self.issued += 1
        return f"idea_{self.issued:04d}"

    def now_iso(self) -> str:
        return FIXED_TS


class CountingEnhancedGenie(EnhancedNeonGenie):

    def generate_id(self) -> str:
        return "idea_enhanced"

    def now_iso(self) -> str:
        return FIXED_TS


def make_prompt(concept="Community solar microgrid planner", domain=IdeationDomain.SYSTEMS, **kwargs) -> IdeationPrompt:
    return IdeationPrompt(concept=concept, domain=domain, **kwargs)


def make_genie(tmp_path, mode="standalone") -> CountingGenie:
    return CountingGenie(GenieConfig(corpus_path=str(tmp_path), mode=mode))


class TestHooks:

    def test_default_id_shape(self, tmp_path):
        genie = NeonGenie(GenieConfig(corpus_path=str(tmp_path)))
        assert re.fullmatch(r"idea_\d+_[a-z0-9]{6}", genie.generate_id())

    def test_default_clock_shape(self):
        assert re.fullmatch(r"\d{4}-\d\d-\d\dT\d\d:\d\d:\d\d\.\d{3}Z", utc_now_iso())

    def test_hooks_control_all_nondeterminism(self, tmp_path):
        """Pinned hooks -> two engines produce identical artifacts."""
        first = make_genie(tmp_path / "a").generate(make_prompt())
        second = make_genie(tmp_path / "b").generate(make_prompt())
        assert first.to_dict() == second.to_dict()
        assert first.provenance.timestamp == FIXED_TS
        assert first.metadata.created_at == FIXED_TS


class TestGenerate:

    def test_content_fields(self, tmp_path):
        artifact = make_genie(tmp_path).generate(make_prompt(tags=("energy",), constraints=("realtime ops",)))
        assert artifact.title == "Community solar microgrid planner"
        assert artifact.themes == ("community", "solar", "microgrid", "planner")
        assert artifact.problem.endswith("community solar microgrid planner.")
        assert artifact.architecture.storage == "Event-sourced data store"
        assert artifact.architecture.ecosystem_mapping == ("Core Engine", "Experience Layer")
        assert artifact.metadata.tags == ("energy",)
        assert artifact.provenance.generator == "neon-genie"
        assert artifact.lineage.parent is None
        assert isinstance(artifact.quality, QualityScore)

    def test_software_tech(self, tmp_path):
        artifact = make_genie(tmp_path).generate(make_prompt(domain=IdeationDomain.SOFTWARE))
        assert artifact.components[0].tech == ("Python", "asyncio")

    def test_persisted(self, tmp_path):
        genie = make_genie(tmp_path)
        artifact = genie.generate(make_prompt())
        assert genie.storage.retrieve(artifact.id).to_dict() == artifact.to_dict()

    def test_concept_whitespace_trimmed(self, tmp_path):
        artifact = make_genie(tmp_path).generate(make_prompt(concept="  Tidal library  "))
        assert artifact.concept == "Tidal library"

    def test_quality_scored_on_untrimmed_concept(self, tmp_path):
        """Surrounding whitespace is stripped from the text but still scored."""
        raw = "  Tidal library  "
        artifact = make_genie(tmp_path).generate(make_prompt(concept=raw))
        assert artifact.quality == QualityScorer().score(raw)
        assert artifact.quality != QualityScorer().score("Tidal library")

    def test_mode_recorded(self, tmp_path):
        genie = make_genie(tmp_path, mode="overlay")
        assert genie.get_mode() == "overlay"
        assert genie.generate(make_prompt()).metadata.mode == "overlay"


class TestAnalyze:

    def test_report_fields(self, tmp_path):
        genie = make_genie(tmp_path)
        report = genie.analyze(make_prompt())
        assert report.id == "idea_0001"
        assert report.summary == "Analysis for Community solar microgrid planner in systems."
        assert report.recommendations == report.score.breakdown.refinements
        assert report.risks and report.opportunities

    def test_analyze_stores_artifact(self, tmp_path):
        genie = make_genie(tmp_path)
        report = genie.analyze(make_prompt())
        assert genie.storage.retrieve(report.id) is not None


class TestEvolve:

    def test_unknown_parent(self, tmp_path):
        assert make_genie(tmp_path).evolve("idea_nope", ["x"]) is None

    def test_child_lineage(self, tmp_path):
        genie = make_genie(tmp_path)
        parent = genie.generate(make_prompt(tags=("energy",)))
        child = genie.evolve(parent.id, ["storage", "pricing"])

        assert child.lineage.parent == parent.id
        assert child.concept == "Community solar microgrid planner refined with storage, pricing"
        assert child.metadata.tags == ("energy",)
        assert child.provenance.transformations == ("Evolved with feedback",)
        assert genie.storage.retrieve(parent.id).lineage.children == (child.id,)

    def test_children_accumulate(self, tmp_path):
        genie = make_genie(tmp_path)
        parent = genie.generate(make_prompt())
        first = genie.evolve(parent.id, ["a"])
        second = genie.evolve(parent.id, ["b"])
        assert genie.storage.retrieve(parent.id).lineage.children == (first.id, second.id)


class TestQueries:

    def test_search_case_insensitive(self, tmp_path):
        genie = make_genie(tmp_path)
        solar = genie.generate(make_prompt())
        genie.generate(make_prompt(concept="Neighborhood tool library"))
        assert [a.id for a in genie.search("SOLAR")] == [solar.id]

    def test_search_no_match(self, tmp_path):
        genie = make_genie(tmp_path)
        genie.generate(make_prompt())
        assert genie.search("zeppelin") == []

    def test_find_similar_ranks_and_filters(self, tmp_path):
        genie = make_genie(tmp_path)
        anchor = genie.generate(make_prompt(concept="Solar grid", tags=("energy", "civic")))
        close = genie.generate(make_prompt(concept="Solar grid sharing", tags=("energy", "civic")))
        far = genie.generate(make_prompt(concept="Quiet reading room", tags=("books",)))
        genie.generate(make_prompt(concept="Solar grid", domain=IdeationDomain.BRANDS, tags=("energy",)))

        similar = genie.find_similar(anchor.id)
        assert [a.id for a in similar] == [close.id, far.id]

    def test_find_similar_limit_and_unknown(self, tmp_path):
        genie = make_genie(tmp_path)
        anchor = genie.generate(make_prompt())
        for i in range(3):
            genie.generate(make_prompt(concept=f"Variant {i}"))
        assert len(genie.find_similar(anchor.id, limit=2)) == 2
        assert genie.find_similar("idea_missing") == []

    def test_stats(self, tmp_path):
        genie = make_genie(tmp_path)
        genie.generate(make_prompt())
        genie.generate(make_prompt(domain=IdeationDomain.BRANDS))
        stats = genie.get_stats()
        assert stats.total == 2
        assert stats.by_domain == {"systems": 1, "brands": 1}


class TestExport:

    def test_formats(self):
        assert EXPORT_FORMATS == ("json", "markdown")

    def test_json(self, tmp_path):
        genie = make_genie(tmp_path)
        artifact = genie.generate(make_prompt())
        assert json.loads(genie.export(artifact.id, "json")) == artifact.to_dict()

    def test_markdown(self, tmp_path):
        genie = make_genie(tmp_path)
        artifact = genie.generate(make_prompt())
        text = genie.export(artifact.id, "markdown")
        lines = text.split("\n")
        assert lines[0] == "# Community solar microgrid planner"
        assert "**Domain:** systems" in lines
        assert "- Core Engine: Coordinates the ideation flow and orchestrates outputs." in lines
        assert lines[-1] == f"Composite Score: {artifact.quality.composite:.2f}"

    def test_unknown_id(self, tmp_path):
        assert make_genie(tmp_path).export("idea_missing", "json") is None

    def test_unsupported_format(self, tmp_path):
        with pytest.raises(ValueError, match="Unsupported export format"):
            make_genie(tmp_path).export("idea_missing", "pdf")


class TestEnhanced:

    def test_software_components(self, tmp_path):
        genie = CountingEnhancedGenie(GenieConfig(corpus_path=str(tmp_path)))
        artifact = genie.generate_enhanced(make_prompt(
            concept="Web dashboard with database sync",
            domain=IdeationDomain.SOFTWARE,
            constraints=("privacy",),
        ))
        assert artifact.provenance.generator == "neon-genie-enhanced"
        assert [c.name for c in artifact.components] == ["Product Core", "Interface Gateway", "Intelligence Layer"]
        assert "FastAPI" in artifact.components[0].tech
        assert "PostgreSQL" in artifact.components[0].tech
        assert artifact.architecture.storage == "Encrypted local-first storage"

    def test_brand_components(self, tmp_path):
        genie = CountingEnhancedGenie(GenieConfig(corpus_path=str(tmp_path)))
        artifact = genie.generate_enhanced(make_prompt(concept="Bold wellness label", domain=IdeationDomain.BRANDS))
        assert len(artifact.components) == 4
        assert artifact.architecture.computation == "Strategy hub aligning Bold, Visionary positioning"

    def test_other_domains_use_generic_templates(self, tmp_path):
        genie = CountingEnhancedGenie(GenieConfig(corpus_path=str(tmp_path)))
        artifact = genie.generate_enhanced(make_prompt())
        assert [c.name for c in artifact.components] == ["Core Engine", "Experience Layer"]

    def test_indexed_and_searchable(self, tmp_path):
        genie = CountingEnhancedGenie(GenieConfig(corpus_path=str(tmp_path)))
        artifact = genie.generate_enhanced(make_prompt())
        assert genie.get_semantic_stats().count == 1
        assert genie.search_semantic("solar microgrid")[0].id == artifact.id

    def test_load_corpus_index(self, tmp_path):
        writer = make_genie(tmp_path)
        writer.generate(make_prompt())
        writer.generate(make_prompt(concept="Another one"))
        genie = EnhancedNeonGenie(GenieConfig(corpus_path=str(tmp_path)))
        assert genie.load_corpus_index() == 2

    def test_detect_duplicates(self, tmp_path):
        genie = EnhancedNeonGenie(GenieConfig(corpus_path=str(tmp_path)))
        genie.generate_enhanced(make_prompt(concept="Solar microgrid planner"))
        genie.generate_enhanced(make_prompt(concept="Solar microgrid planner"))
        genie.generate_enhanced(make_prompt(concept="Ceramic studio subscription"))
        duplicates = genie.detect_duplicates()
        assert len(duplicates) == 1
        assert duplicates[0][0].concept == duplicates[0][1].concept
