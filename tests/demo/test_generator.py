"""Tests for getmeds/demo/generator.py"""

import random

from getmeds.demo import DEMO_MEDICINES, DEMO_PHARMACIES, DemoDataGenerator
from getmeds.models import AvailabilityClass


class TestDemoDataGenerator:
    def test_matching_medicine_crossed_with_pharmacies(self):
        results = DemoDataGenerator(random.Random(1)).generate("аспирин")

        assert len(results) == 3
        assert {r.medicine.name for r in results} == {"Аспирин 100мг"}
        assert {r.pharmacy for r in results} == set(DEMO_PHARMACIES)

    def test_match_is_case_insensitive(self):
        results = DemoDataGenerator(random.Random(1)).generate("ИБУПРОФЕН")
        assert {r.medicine.name for r in results} == {"Ибупрофен 400мг"}

    def test_no_match_uses_whole_catalog(self):
        results = DemoDataGenerator(random.Random(1)).generate("xyz")
        assert len(results) == len(DEMO_MEDICINES) * len(DEMO_PHARMACIES)

    def test_records_are_consistent(self):
        results = DemoDataGenerator(random.Random(7)).generate("xyz")

        for result in results:
            assert result.retailer == "Demo"
            assert 5 <= float(result.price) <= 20
            if result.stock.in_stock:
                assert 1 <= result.stock.quantity <= 50
                assert result.stock.availability in (AvailabilityClass.AVAILABLE, AvailabilityClass.LIMITED)
            else:
                assert result.stock.quantity == 0
                assert result.stock.availability == AvailabilityClass.UNAVAILABLE

    def test_sorted_in_stock_then_price(self):
        results = DemoDataGenerator(random.Random(3)).generate("xyz")
        keys = [(not r.stock.in_stock, float(r.price)) for r in results]
        assert keys == sorted(keys)

    def test_reproducible_with_seed(self):
        first = DemoDataGenerator(random.Random(42)).generate("парацетамол")
        second = DemoDataGenerator(random.Random(42)).generate("парацетамол")
        assert first == second
