"""Tests for getmeds/models/result.py"""

import dataclasses

import pytest

from getmeds.models import (
    AvailabilityClass,
    CanonicalResult,
    Coordinates,
    Medicine,
    PharmacyLocation,
    Stock,
)


class TestStockInvariants:
    def test_valid_available(self):
        stock = Stock(in_stock=True, quantity=10, availability=AvailabilityClass.AVAILABLE)
        assert stock.in_stock is True

    def test_available_requires_in_stock(self):
        with pytest.raises(ValueError, match="in stock"):
            Stock(in_stock=False, quantity=5, availability=AvailabilityClass.AVAILABLE)

    @pytest.mark.parametrize("availability", [AvailabilityClass.AVAILABLE, AvailabilityClass.LIMITED])
    def test_zero_quantity_rejects_positive_classes(self, availability):
        with pytest.raises(ValueError, match="Zero quantity"):
            Stock(in_stock=True, quantity=0, availability=availability)

    @pytest.mark.parametrize("availability", [AvailabilityClass.UNAVAILABLE, AvailabilityClass.UNKNOWN])
    def test_zero_quantity_allows_unavailable_and_unknown(self, availability):
        stock = Stock(in_stock=False, quantity=0, availability=availability)
        assert stock.quantity == 0

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            Stock(in_stock=False, quantity=-1, availability=AvailabilityClass.UNAVAILABLE)


class TestCanonicalResult:
    @pytest.fixture
    def result(self):
        return CanonicalResult(
            medicine=Medicine(
                name="Аспирин 100мг",
                manufacturer="Bayer",
                packaging="28 таблетки",
                image_url="https://sopharmacy.bg/medias/a.jpg",
                product_link="https://sopharmacy.bg/bg/product/1",
            ),
            pharmacy=PharmacyLocation(
                name="SOpharmacy Витоша",
                address="бул. Витоша 50, София",
                working_hours="Пон-Нед: 00:00-24:00",
                city="София",
                phone="02 987 6543",
                coordinates=Coordinates(lat=42.6977, lng=23.3219),
            ),
            stock=Stock(in_stock=True, quantity=10, availability=AvailabilityClass.AVAILABLE,
                        status_text="В наличност"),
            price="8.49",
            retailer="Sopharmacy",
        )

    def test_is_immutable(self, result):
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.price = "1.00"

    def test_in_stock_shortcut(self, result):
        assert result.in_stock is True

    def test_to_dict_shape(self, result):
        data = result.to_dict()
        assert data["medicine"]["prescriptionRequired"] is False
        assert data["medicine"]["productLink"] == "https://sopharmacy.bg/bg/product/1"
        assert data["pharmacy"]["workingHours"] == "Пон-Нед: 00:00-24:00"
        assert data["pharmacy"]["coordinates"] == {"lat": 42.6977, "lng": 23.3219}
        assert data["stock"] == {
            "inStock": True,
            "quantity": 10,
            "availabilityClass": "available",
            "statusText": "В наличност",
        }
        assert data["price"] == "8.49"
        assert data["retailer"] == "Sopharmacy"

    def test_to_dict_without_coordinates(self, result):
        result = dataclasses.replace(
            result, pharmacy=dataclasses.replace(result.pharmacy, coordinates=None)
        )
        assert result.to_dict()["pharmacy"]["coordinates"] is None

    def test_equal_records_compare_equal(self, result):
        assert result == dataclasses.replace(result)
