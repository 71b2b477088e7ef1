"""
Shared fixtures: a small corpus whose aggregates are worked out by hand in the tests.
"""

import json

import pytest

from core.models.domain import ImageRecord


def make_record(path, author="", reactors=(), **tags):
    return ImageRecord(image_path=path, author=author, reactors=list(reactors), tags={k: list(v) for k, v in tags.items()})


@pytest.fixture
def corpus():
    """Five records covering authorship, reactions, self-reactions and an authorless post."""
    return [
        make_record("r1.png", "alice", ["bob", "carol"], character=["X"], general=["g1"]),
        make_record("r2.png", "bob", ["alice"], character=["X"], copyright=["C"], general=["g1", "g2"]),
        make_record("r3.png", "carol", [], artist=["A"], general=["g2"]),
        make_record("r4.png", "", ["dave"], general=["g3"]),
        make_record("r5.png", "alice", ["alice", "bob"], character=["Y"]),
    ]


@pytest.fixture
def scenario_record():
    """The single record used by the worked scenarios."""
    return make_record("s.png", "alice", ["bob", "carol"], character=["X"], general=["g1"])


@pytest.fixture
def data_dir(tmp_path, corpus):
    """A dataset folder with records and a non-generic tag list on disk."""
    (tmp_path / "output.json").write_text(json.dumps([record.to_dict() for record in corpus]), encoding="utf-8")
    (tmp_path / "output_gelbooru.json").write_text(
        json.dumps([{"imagePath": "gb.png", "author": "erin", "reactors": [], "tags": {"general": ["g9"]}}]),
        encoding="utf-8",
    )
    (tmp_path / "non_generic_tags.json").write_text(json.dumps(["g1"]), encoding="utf-8")
    return tmp_path
