"""
Tests for dataset loading and record parsing.
"""

import json

import pytest

from config.settings import DatasetSettings
from core.datasets import DatasetLoadError, DatasetLoader, read_records, read_tag_list
from core.models.domain import Category, ImageRecord


class TestImageRecordFromDict:
    """Test tolerant parsing of raw records."""

    def test_camel_case_payload(self):
        record = ImageRecord.from_dict(
            {
                "imagePath": "a.png",
                "author": "alice",
                "reactors": ["bob"],
                "tags": {"character": ["X"], "meta": ["highres"]},
                "sourceUrl": "https://example.org/a",
                "similarity": 0.5,
            }
        )
        assert record.image_path == "a.png"
        assert record.tags_in(Category.CHARACTER) == ["X"]
        assert record.tags_in("general") == []
        assert record.source_url == "https://example.org/a"
        assert record.similarity == 0.5

    def test_missing_and_null_fields_are_empty(self):
        record = ImageRecord.from_dict({"author": None, "reactors": None, "tags": {"general": None}})
        assert record.author == ""
        assert record.reactors == []
        assert record.tags_in("general") == []

    def test_people_dedupes_author(self):
        record = ImageRecord(image_path="p", author="alice", reactors=["bob", "alice", "bob"])
        assert record.people() == ["bob", "alice"]


class TestReadRecords:
    """Test low-level JSON readers."""

    def test_skips_non_object_entries(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"imagePath": "a", "author": "x"}, "junk", 3]), encoding="utf-8")
        records = read_records(path)
        assert [record.image_path for record in records] == ["a"]

    def test_rejects_non_list(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"records": []}), encoding="utf-8")
        with pytest.raises(DatasetLoadError):
            read_records(path)

    def test_rejects_invalid_json(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetLoadError):
            read_records(path)

    def test_tag_list_fallbacks(self, tmp_path):
        assert read_tag_list(tmp_path / "missing.json") == []
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"g1": True}), encoding="utf-8")
        assert read_tag_list(bad) == []


class TestDatasetLoader:
    """Test dataset resolution and graceful failure."""

    def test_loads_default_dataset(self, data_dir):
        loaded = DatasetLoader(DatasetSettings(data_dir=data_dir)).load()
        assert loaded.ok
        assert loaded.dataset == "default"
        assert len(loaded.records) == 5
        assert loaded.records[0].reactors == ["bob", "carol"]
        assert loaded.whitelist == frozenset({"g1"})

    def test_named_dataset(self, data_dir):
        loaded = DatasetLoader(DatasetSettings(data_dir=data_dir)).load("gelbooru")
        assert loaded.dataset == "gelbooru"
        assert [record.author for record in loaded.records] == ["erin"]

    def test_unknown_name_uses_default_file(self, data_dir):
        loaded = DatasetLoader(DatasetSettings(data_dir=data_dir)).load("mystery")
        assert loaded.dataset == "mystery"
        assert len(loaded.records) == 5

    def test_missing_records_file_reports_error(self, tmp_path):
        loaded = DatasetLoader(DatasetSettings(data_dir=tmp_path)).load("gelbooru")
        assert not loaded.ok
        assert loaded.records == [] and loaded.non_generic_tags == []
        assert loaded.dataset == "default"
        assert "Failed to load data" in loaded.error

    def test_missing_whitelist_disables_filtering(self, data_dir):
        (data_dir / "non_generic_tags.json").unlink()
        loaded = DatasetLoader(DatasetSettings(data_dir=data_dir)).load()
        assert loaded.ok
        assert loaded.non_generic_tags == []
        assert loaded.whitelist is None
