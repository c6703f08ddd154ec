"""Tests for paperchaser.config module."""

from __future__ import annotations

import logging

import pytest

from paperchaser.config import SELECTORS, CrawlOptions, load_crawl_options
from paperchaser.document import MIME_DOCUMENT, MIME_FOLDER, MIME_PRESENTATION, MIME_SPREADSHEET


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PAPERCHASER_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("PAPERCHASER_TRAVERSAL", raising=False)


class TestSelectors:
    def test_types_with_bodies(self):
        assert set(SELECTORS) == {MIME_DOCUMENT, MIME_SPREADSHEET, MIME_PRESENTATION}
        assert MIME_FOLDER not in SELECTORS

    def test_document_selectors(self):
        native, text = SELECTORS[MIME_DOCUMENT]
        assert native == ["['link']['url']"]
        assert "['textRun']['content']" in text

    def test_spreadsheet_selectors(self):
        native, text = SELECTORS[MIME_SPREADSHEET]
        assert native == ["['link']['uri']"]
        assert "['note']" in text


class TestLoadCrawlOptions:
    def test_defaults(self):
        assert load_crawl_options() == CrawlOptions(output_dir=".", traversal="depth")

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("PAPERCHASER_OUTPUT_DIR", "/tmp/out")
        monkeypatch.setenv("PAPERCHASER_TRAVERSAL", "Breadth")
        options = load_crawl_options()
        assert options.output_dir == "/tmp/out"
        assert options.traversal == "breadth"

    def test_explicit_wins(self, monkeypatch):
        monkeypatch.setenv("PAPERCHASER_OUTPUT_DIR", "/tmp/out")
        monkeypatch.setenv("PAPERCHASER_TRAVERSAL", "breadth")
        options = load_crawl_options(output_dir="results", traversal="depth")
        assert options.output_dir == "results"
        assert options.traversal == "depth"

    def test_unknown_traversal_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("PAPERCHASER_TRAVERSAL", "sideways")
        with caplog.at_level(logging.WARNING, logger="paperchaser.config"):
            options = load_crawl_options()
        assert options.traversal == "depth"
        assert "sideways" in caplog.text
