"""Tests for the enablement store."""

from __future__ import annotations

import json
from pathlib import Path

from openwork_skills.skills.enablement import EnablementStore


class TestEnablementStore:
    def test_defaults_to_enabled(self, tmp_path: Path):
        store = EnablementStore(tmp_path / "skills.json")
        assert store.is_enabled("anything") is True
        assert not (tmp_path / "skills.json").exists()

    def test_disable_and_enable(self, tmp_path: Path):
        store = EnablementStore(tmp_path / "skills.json")
        store.set_enabled("pdf-report", False)
        assert store.is_enabled("pdf-report") is False

        store.set_enabled("pdf-report", True)
        assert store.is_enabled("pdf-report") is True

    def test_only_disabled_skills_are_recorded(self, tmp_path: Path):
        path = tmp_path / "skills.json"
        store = EnablementStore(path)
        store.set_enabled("off", False)
        store.set_enabled("on", True)

        assert json.loads(path.read_text()) == {"off": {"enabled": False}}

    def test_persists_across_instances(self, tmp_path: Path):
        path = tmp_path / "nested" / "skills.json"
        EnablementStore(path).set_enabled("sticky", False)
        assert EnablementStore(path).is_enabled("sticky") is False

    def test_remove(self, tmp_path: Path):
        store = EnablementStore(tmp_path / "skills.json")
        store.set_enabled("gone", False)
        store.remove("gone")
        assert store.is_enabled("gone") is True
        assert store.disabled() == set()

    def test_remove_absent_does_not_write(self, tmp_path: Path):
        path = tmp_path / "skills.json"
        store = EnablementStore(path)
        store.remove("never")
        assert not path.exists()

    def test_disabled(self, tmp_path: Path):
        store = EnablementStore(tmp_path / "skills.json")
        store.set_enabled("a", False)
        store.set_enabled("b", False)
        store.set_enabled("c", True)
        assert store.disabled() == {"a", "b"}

    def test_keeps_unknown_keys(self, tmp_path: Path):
        path = tmp_path / "skills.json"
        path.write_text(json.dumps({"pinned": {"enabled": False, "note": "keep"}}))
        store = EnablementStore(path)

        store.set_enabled("pinned", True)

        assert json.loads(path.read_text()) == {"pinned": {"note": "keep"}}
        assert store.is_enabled("pinned") is True

    def test_corrupt_file_reads_as_empty(self, tmp_path: Path):
        path = tmp_path / "skills.json"
        path.write_text("{not json")
        store = EnablementStore(path)

        assert store.is_enabled("x") is True

        store.set_enabled("x", False)
        assert json.loads(path.read_text()) == {"x": {"enabled": False}}

    def test_non_object_file_reads_as_empty(self, tmp_path: Path):
        path = tmp_path / "skills.json"
        path.write_text("[1, 2, 3]")
        assert EnablementStore(path).is_enabled("x") is True

    def test_non_boolean_flag_treated_as_enabled(self, tmp_path: Path):
        path = tmp_path / "skills.json"
        path.write_text(json.dumps({"odd": {"enabled": "no"}, "bare": True}))
        store = EnablementStore(path)
        assert store.is_enabled("odd") is True
        assert store.is_enabled("bare") is True
