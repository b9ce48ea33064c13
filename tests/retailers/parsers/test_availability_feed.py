"""Tests for getmeds/retailers/parsers/availability_feed.py"""

import pytest

from getmeds.models import Coordinates
from getmeds.retailers.parsers import AvailabilityFeedParser


class TestAvailabilityFeedParser:
    def setup_method(self):
        self.parser = AvailabilityFeedParser()

    def test_one_location_per_feature(self, sopharmacy_availability):
        locations = self.parser.parse(sopharmacy_availability)
        assert [loc.city for loc in locations] == ["Пловдив", "София", "Варна", "Бургас"]

    def test_full_feature(self, sopharmacy_availability):
        plovdiv = self.parser.parse(sopharmacy_availability)[0]

        assert plovdiv.name == "SOpharmacy Пловдив Център"
        assert plovdiv.address == "ул. Княз Александър I 12"
        assert plovdiv.phone == "032 123 456"
        assert plovdiv.working_hours == "Пон-Пет: 08:00-20:00, Съб-Нед: 09:00-18:00"
        assert plovdiv.status_type == "warning"
        assert plovdiv.status_text == "Ограничена наличност"

    def test_coordinates_are_longitude_first(self, sopharmacy_availability):
        plovdiv = self.parser.parse(sopharmacy_availability)[0]
        assert plovdiv.coordinates == Coordinates(lat=42.1354, lng=24.7453)

    def test_missing_optional_fields(self, sopharmacy_availability):
        varna, burgas = self.parser.parse(sopharmacy_availability)[2:]

        assert varna.phone == ""
        assert varna.working_hours == ""
        assert burgas.phone == ""
        assert burgas.status_type == "success"
        assert burgas.status_text == ""

    @pytest.mark.parametrize("data", [
        None,
        [],
        {},
        {"contact-map": None},
        {"contact-map": {"features": "nope"}},
    ])
    def test_malformed_document(self, data):
        assert self.parser.parse(data) == []

    def test_malformed_features_are_skipped(self):
        data = {"contact-map": {"features": [
            "garbage",
            {"geometry": None},
            {"properties": {"name": "Аптека", "city": "Русе", "status": {"type": "success"}},
             "geometry": {"coordinates": ["x", "y"]}},
        ]}}
        locations = self.parser.parse(data)

        assert len(locations) == 1
        assert locations[0].city == "Русе"
        assert locations[0].coordinates is None
