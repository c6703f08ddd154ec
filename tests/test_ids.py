"""Tests for paperchaser.ids module."""

from __future__ import annotations

import pytest

from paperchaser.ids import resolve_id, resolve_ids, url_origin

DRIVE_ID = "ABCDEFGHIJKLMNOPQRSTUVWXY"
SHEET_ID = "1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms"


class TestUrlOrigin:
    def test_basic(self):
        assert url_origin("https://docs.google.com/document/d/x") == "https://docs.google.com"

    def test_lowercases_host(self):
        assert url_origin("https://Docs.Google.com/x") == "https://docs.google.com"

    def test_default_port_dropped(self):
        assert url_origin("https://docs.google.com:443/x") == "https://docs.google.com"

    def test_custom_port_kept(self):
        assert url_origin("https://docs.google.com:8443/x") == "https://docs.google.com:8443"

    def test_userinfo_ignored(self):
        assert url_origin("https://user:pw@drive.google.com/x") == "https://drive.google.com"

    def test_unparsable(self):
        assert url_origin("https://[::1/x") is None
        assert url_origin("not a url") is None
        assert url_origin("https://docs.google.com:99999/x") is None


class TestResolveId:
    def test_open_link(self):
        assert resolve_id(f"https://drive.google.com/open?id={DRIVE_ID}") == DRIVE_ID

    def test_sheet_edit_link(self):
        url = f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit#gid=0"
        assert resolve_id(url) == SHEET_ID

    def test_sheets_origin(self):
        assert resolve_id(f"https://sheets.google.com/d/{DRIVE_ID}") == DRIVE_ID

    def test_http_is_upgraded(self):
        assert resolve_id(f"http://drive.google.com/open?id={DRIVE_ID}") == DRIVE_ID

    @pytest.mark.parametrize(
        "url",
        [
            f"https://example.com/open?id={DRIVE_ID}",
            f"https://drive.google.com.evil.net/open?id={DRIVE_ID}",
            f"https://evil.net/?next=https://drive.google.com/open?id={DRIVE_ID}",
            f"ftp://drive.google.com/open?id={DRIVE_ID}",
            f"https://drive.google.com:8443/open?id={DRIVE_ID}",
        ],
    )
    def test_origin_not_allowed(self, url):
        assert resolve_id(url) is None

    def test_short_token(self):
        assert resolve_id("https://drive.google.com/open?id=short") is None

    def test_no_token(self):
        assert resolve_id("https://drive.google.com/") is None

    def test_non_string(self):
        assert resolve_id(None) is None
        assert resolve_id(12345) is None
        assert resolve_id({"url": DRIVE_ID}) is None

    def test_unparsable(self):
        assert resolve_id("https://[drive.google.com/open?id=" + DRIVE_ID) is None

    def test_non_ascii_letters_are_not_id_characters(self):
        url = "https://docs.google.com/document/d/éABCDEFGHIJKLMNOPQRSTUVWXYZ/edit"
        assert resolve_id(url) == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def test_non_ascii_token_rejected(self):
        assert resolve_id("https://drive.google.com/open?id=" + "é" * 30) is None

    def test_rightmost_token_per_url(self):
        other = "ZYXWVUTSRQPONMLKJIHGFEDCBA"
        url = f"https://docs.google.com/d/{DRIVE_ID}/x/{other}"
        assert resolve_id(url) == other


class TestResolveIds:
    def test_dedup_preserves_first_seen_order(self):
        urls = [
            f"https://docs.google.com/document/d/{SHEET_ID}/edit",
            f"https://drive.google.com/open?id={DRIVE_ID}",
            f"https://docs.google.com/spreadsheets/d/{SHEET_ID}/edit",
        ]
        assert resolve_ids(urls) == [SHEET_ID, DRIVE_ID]

    def test_filters_invalid(self):
        urls = ["", "garbage", None, f"https://example.com/{DRIVE_ID}"]
        assert resolve_ids(urls) == []

    def test_accepts_generator(self):
        assert resolve_ids(
            url for url in [f"https://drive.google.com/open?id={DRIVE_ID}"]
        ) == [DRIVE_ID]
