"""Tests for getmeds/common/text_utils.py"""

import pytest

from getmeds.common.text_utils import absolutize_url, clean_text, is_placeholder_image
from getmeds.retailers.parsers.search_page import PLACEHOLDER_IMAGE_MARKERS


class TestCleanText:
    def test_strips_whitespace(self):
        assert clean_text("  hello   world  ") == "hello world"

    def test_newlines_collapsed(self):
        assert clean_text("Аспирин\n   100 мг") == "Аспирин 100 мг"

    def test_empty_returns_empty(self):
        assert clean_text("") == ""

    def test_none_returns_empty(self):
        assert clean_text(None) == ""


class TestAbsolutizeUrl:
    @pytest.mark.parametrize("url,expected", [
        ("/medias/a.jpg", "https://sopharmacy.bg/medias/a.jpg"),
        ("medias/a.jpg", "https://sopharmacy.bg/medias/a.jpg"),
        ("https://cdn.example.bg/a.jpg", "https://cdn.example.bg/a.jpg"),
        ("//cdn.example.bg/a.jpg", "https://cdn.example.bg/a.jpg"),
    ])
    def test_absolutizes(self, url, expected):
        assert absolutize_url(url, "https://sopharmacy.bg") == expected

    def test_empty_returns_none(self):
        assert absolutize_url("", "https://sopharmacy.bg") is None
        assert absolutize_url(None, "https://sopharmacy.bg") is None


class TestIsPlaceholderImage:
    def test_marker_matches(self):
        assert is_placeholder_image("https://x.bg/img/placeholder.png", ["placeholder"]) is True

    def test_real_image(self):
        assert is_placeholder_image("https://x.bg/medias/a.jpg", ["placeholder"]) is False

    def test_data_uri_is_placeholder(self):
        assert is_placeholder_image("data:image/gif;base64,R0lGOD", []) is True

    def test_missing_is_placeholder(self):
        assert is_placeholder_image(None, []) is True

    @pytest.mark.parametrize("url", [
        "https://sopharmacy.bg/_ui/responsive/images/placeholder.png",
        "https://sopharmacy.bg/images/missing.png",
        "https://sopharmacy.bg/images/no-image.jpg?v=2",
        "https://sopharmacy.bg/img/spacer.gif",
    ])
    def test_default_markers_filter_placeholders(self, url):
        assert is_placeholder_image(url, PLACEHOLDER_IMAGE_MARKERS) is True

    @pytest.mark.parametrize("url", [
        "https://sopharmacy.bg/medias/missing-tooth-gel.jpg",
        "https://sopharmacy.bg/medias/placeholders/aspirin.jpg",
        "https://sopharmacy.bg/medias/aspirin.jpg?fallback=placeholder",
        "https://sopharmacy.bg/medias/vitamin-c-logo.svg",
    ])
    def test_default_markers_keep_product_images(self, url):
        assert is_placeholder_image(url, PLACEHOLDER_IMAGE_MARKERS) is False
