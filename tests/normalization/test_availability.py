"""Tests for getmeds/normalization/availability.py"""

import pytest

from getmeds.models import AvailabilityClass
from getmeds.normalization import classify_quantity, classify_status_type, stock_from_class


class TestClassifyStatusType:
    @pytest.mark.parametrize("status_type,expected", [
        ("success", AvailabilityClass.AVAILABLE),
        ("warning", AvailabilityClass.LIMITED),
        ("SUCCESS", AvailabilityClass.AVAILABLE),
        ("error", AvailabilityClass.UNAVAILABLE),
        ("danger", AvailabilityClass.UNAVAILABLE),
        ("", AvailabilityClass.UNAVAILABLE),
        (None, AvailabilityClass.UNAVAILABLE),
    ])
    def test_mapping(self, status_type, expected):
        assert classify_status_type(status_type) is expected


class TestClassifyQuantity:
    @pytest.mark.parametrize("quantity,expected", [
        (50, AvailabilityClass.AVAILABLE),
        (21, AvailabilityClass.AVAILABLE),
        (20, AvailabilityClass.LIMITED),
        (1, AvailabilityClass.LIMITED),
        (0, AvailabilityClass.UNAVAILABLE),
    ])
    def test_thresholds(self, quantity, expected):
        assert classify_quantity(quantity) is expected


class TestStockFromClass:
    def test_available_gets_placeholder_quantity(self):
        stock = stock_from_class(AvailabilityClass.AVAILABLE, "В наличност")
        assert stock.in_stock is True
        assert stock.quantity == 10
        assert stock.status_text == "В наличност"

    def test_limited_gets_smaller_quantity(self):
        stock = stock_from_class(AvailabilityClass.LIMITED)
        assert stock.in_stock is True
        assert stock.quantity == 3

    def test_quantity_override(self):
        assert stock_from_class(AvailabilityClass.AVAILABLE, quantity=5).quantity == 5

    @pytest.mark.parametrize("availability", [AvailabilityClass.UNAVAILABLE, AvailabilityClass.UNKNOWN])
    def test_out_of_stock_classes_have_zero(self, availability):
        stock = stock_from_class(availability, quantity=5)
        assert stock.in_stock is False
        assert stock.quantity == 0
        assert stock.availability is availability
