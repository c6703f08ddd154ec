"""Tests for paperchaser.state module."""

from __future__ import annotations

import json

import pytest

from paperchaser.state import StateFileError, flush_state, load_id_list


class TestFlushState:
    def test_writes_both_lists(self, tmp_path):
        written = flush_state("run", ["a", "b"], ["c"], tmp_path)

        assert written.visited == tmp_path / "crawled-ids-run.json"
        assert written.frontier == tmp_path / "crawl-remaining-queue-run.json"
        assert json.loads(written.visited.read_text()) == ["a", "b"]
        assert json.loads(written.frontier.read_text()) == ["c"]

    def test_empty_collections_skipped(self, tmp_path):
        written = flush_state("run", [], [], tmp_path)

        assert written.visited is None
        assert written.frontier is None
        assert list(tmp_path.iterdir()) == []

    def test_creates_directory(self, tmp_path):
        target = tmp_path / "nested" / "out"
        written = flush_state("run", ["a"], [], target)
        assert written.visited is not None
        assert written.visited.parent == target

    def test_overwrites_previous_flush(self, tmp_path):
        flush_state("run", ["a"], ["b", "c"], tmp_path)
        written = flush_state("run", ["a", "b"], ["c"], tmp_path)
        assert json.loads(written.frontier.read_text()) == ["c"]


class TestLoadIdList:
    def test_reads_flushed_list(self, tmp_path):
        written = flush_state("run", ["a", "b"], [], tmp_path)
        assert load_id_list(written.visited) == ["a", "b"]

    def test_accepts_string_path(self, tmp_path):
        path = tmp_path / "ids.json"
        path.write_text('["x"]', encoding="utf-8")
        assert load_id_list(str(path)) == ["x"]

    def test_missing(self, tmp_path):
        with pytest.raises(StateFileError, match="not found"):
            load_id_list(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "ids.json"
        path.write_text("[", encoding="utf-8")
        with pytest.raises(StateFileError, match="invalid JSON"):
            load_id_list(path)

    @pytest.mark.parametrize("content", ['{"ids": []}', '["a", 1]', '"a"'])
    def test_wrong_shape(self, tmp_path, content):
        path = tmp_path / "ids.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(StateFileError, match="JSON array"):
            load_id_list(path)
