"""
Corpus Storage Tests

One JSON document per artifact; overwrite by id; deterministic listing.
"""

import json
import os
from dataclasses import replace

import pytest

from genie.contracts import IdeationDomain, IdeationPrompt
from genie.engine import GenieConfig, NeonGenie
from genie.storage import CorpusFilter, CorpusStorage


class SequentialGenie(NeonGenie):

    def __init__(self, config):
        super().__init__(config)
        self.issued = 0

    def generate_id(self) -> str:
        self.issued += 1
        return f"idea_{self.issued:04d}"


def make_prompt(concept="Community solar microgrid planner", domain=IdeationDomain.SYSTEMS) -> IdeationPrompt:
    return IdeationPrompt(concept=concept, domain=domain)


def make_artifacts(tmp_path, *prompts):
    """Artifacts idea_0001.. built in a scratch corpus."""
    genie = SequentialGenie(GenieConfig(corpus_path=str(tmp_path / "scratch")))
    return [genie.generate(prompt) for prompt in prompts]


@pytest.fixture
def storage(tmp_path):
    return CorpusStorage(str(tmp_path / "corpus"))


class TestStoreRetrieve:

    def test_round_trip(self, tmp_path, storage):
        (artifact,) = make_artifacts(tmp_path, make_prompt())
        storage.store(artifact)
        assert storage.retrieve(artifact.id) == artifact

    def test_file_layout(self, tmp_path, storage):
        (artifact,) = make_artifacts(tmp_path, make_prompt())
        storage.store(artifact)
        path = os.path.join(storage.root_path, f"{artifact.id}.json")
        with open(path, encoding="utf-8") as f:
            assert json.load(f)["id"] == artifact.id

    def test_missing_returns_none(self, storage):
        assert storage.retrieve("idea_missing") is None

    def test_overwrite_by_id(self, tmp_path, storage):
        (artifact,) = make_artifacts(tmp_path, make_prompt())
        storage.store(artifact)
        storage.store(replace(artifact, title="Renamed"))
        assert storage.retrieve(artifact.id).title == "Renamed"
        assert len(storage.list()) == 1

    @pytest.mark.parametrize("bad_id", ["", ".", "..", "../x", "a/b"])
    def test_rejects_path_like_ids(self, storage, bad_id):
        with pytest.raises(ValueError):
            storage.retrieve(bad_id)


class TestListing:

    def test_empty_corpus_created(self, storage):
        assert storage.list() == []
        assert os.path.isdir(storage.root_path)

    def test_sorted_by_file_name(self, tmp_path, storage):
        artifacts = make_artifacts(tmp_path, make_prompt(), make_prompt(concept="B"), make_prompt(concept="C"))
        for artifact in reversed(artifacts):
            storage.store(artifact)
        assert [a.id for a in storage.list()] == ["idea_0001", "idea_0002", "idea_0003"]

    def test_ignores_non_json(self, tmp_path, storage):
        (artifact,) = make_artifacts(tmp_path, make_prompt())
        storage.store(artifact)
        with open(os.path.join(storage.root_path, "notes.txt"), "w") as f:
            f.write("not an artifact")
        assert len(storage.list()) == 1

    def test_filters(self, tmp_path, storage):
        systems, brands = make_artifacts(
            tmp_path, make_prompt(), make_prompt(domain=IdeationDomain.BRANDS)
        )
        storage.store(systems)
        storage.store(brands)
        assert storage.list(CorpusFilter(domain=IdeationDomain.BRANDS)) == [brands]
        assert storage.list(CorpusFilter(mode="other")) == []
        assert storage.list(CorpusFilter(min_quality=1.01)) == []
        assert len(storage.list(CorpusFilter(min_quality=0.0))) == 2


class TestMutation:

    def test_update(self, tmp_path, storage):
        (artifact,) = make_artifacts(tmp_path, make_prompt())
        storage.store(artifact)
        updated = storage.update(artifact.id, title="New title")
        assert updated.title == "New title"
        assert storage.retrieve(artifact.id).title == "New title"

    def test_update_missing(self, storage):
        assert storage.update("idea_missing", title="x") is None

    def test_delete(self, tmp_path, storage):
        (artifact,) = make_artifacts(tmp_path, make_prompt())
        storage.store(artifact)
        assert storage.delete(artifact.id) is True
        assert storage.delete(artifact.id) is False
        assert storage.retrieve(artifact.id) is None


class TestStats:

    def test_empty(self, storage):
        stats = storage.get_stats()
        assert stats.total == 0
        assert stats.avg_quality == 0.0

    def test_counts_and_average(self, tmp_path, storage):
        artifacts = make_artifacts(
            tmp_path, make_prompt(), make_prompt(concept="B"), make_prompt(domain=IdeationDomain.BRANDS)
        )
        for artifact in artifacts:
            storage.store(artifact)
        stats = storage.get_stats()
        assert stats.to_dict()["byDomain"] == {"systems": 2, "brands": 1}
        assert stats.to_dict()["byMode"] == {"standalone": 3}
        expected = sum(a.quality.composite for a in artifacts) / 3
        assert stats.avg_quality == pytest.approx(expected)
