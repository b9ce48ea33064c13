"""Tests for getmeds/retailers/parsers/product_page.py"""

from getmeds.retailers.parsers import ProductImageParser

ORIGIN = "https://sopharmacy.bg"


class TestProductImageParser:
    def setup_method(self):
        self.parser = ProductImageParser(ORIGIN)

    def test_open_graph_image_wins(self, sopharmacy_product_html):
        assert self.parser.parse(sopharmacy_product_html) == \
            "https://sopharmacy.bg/medias/aspirin-cardio-og.jpg"

    def test_twitter_image_when_no_open_graph(self):
        html = '<html><head><meta name="twitter:image" content="https://cdn.test/tw.jpg"></head></html>'
        assert self.parser.parse(html) == "https://cdn.test/tw.jpg"

    def test_in_page_image(self):
        html = '<div class="pdp-image"><img src="/medias/pdp.jpg"></div>'
        assert self.parser.parse(html) == "https://sopharmacy.bg/medias/pdp.jpg"

    def test_placeholder_meta_falls_through(self):
        html = (
            '<html><head><meta property="og:image" content="/images/no-image.png"></head>'
            '<body><div class="product-image"><img src="/medias/real.jpg"></div></body></html>'
        )
        assert self.parser.parse(html) == "https://sopharmacy.bg/medias/real.jpg"

    def test_no_image(self):
        assert self.parser.parse("<html><body><h1>Продукт</h1></body></html>") is None
