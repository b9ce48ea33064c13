"""
Demo Data Generator

Produces plausible results without network access. Shapes are fixed
(a small medicine catalog crossed with a small pharmacy catalog);
stock and prices are random.
"""

import random
from typing import List, Optional

from ..models import CanonicalResult, Medicine, PharmacyLocation, Stock
from ..normalization import classify_quantity, sort_by_stock_then_price

DEMO_RETAILER = "Demo"

DEMO_MEDICINES = (
    Medicine(name="Парацетамол 500мг", manufacturer="Sopharma", packaging="20 таблетки"),
    Medicine(name="Ибупрофен 400мг", manufacturer="Actavis", packaging="30 таблетки"),
    Medicine(name="Аспирин 100мг", manufacturer="Bayer", packaging="28 таблетки"),
)

DEMO_PHARMACIES = (
    PharmacyLocation(
        name="Аптека Sopharmacy",
        address="бул. Витоша 15, София",
        city="София",
        phone="02 123 4567",
        working_hours="Пон-Пет: 8:00-20:00, Съб: 9:00-18:00",
    ),
    PharmacyLocation(
        name="Аптека Remedium",
        address="ул. Граф Игнатиев 32, София",
        city="София",
        phone="02 234 5678",
        working_hours="Пон-Нед: 8:00-22:00",
    ),
    PharmacyLocation(
        name="Аптека Субра",
        address="бул. Христо Ботев 48, София",
        city="София",
        phone="02 345 6789",
        working_hours="Пон-Пет: 8:30-19:00",
    ),
)


class DemoDataGenerator:
    """
    Generates demo search results.

    Usage:
        results = DemoDataGenerator().generate("аспирин")
        results = DemoDataGenerator(random.Random(42)).generate("x")  # reproducible
    """

    IN_STOCK_PROBABILITY = 0.7

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate(self, query: str) -> List[CanonicalResult]:
        """
        Generate results for a query.

        Medicines are matched by case-insensitive substring; when nothing
        matches the whole catalog is used.
        """
        needle = query.strip().casefold()
        medicines = [m for m in DEMO_MEDICINES if needle in m.name.casefold()]
        if not medicines:
            medicines = list(DEMO_MEDICINES)

        results = [
            self._draw(medicine, pharmacy)
            for medicine in medicines
            for pharmacy in DEMO_PHARMACIES
        ]
        return sort_by_stock_then_price(results)

    def _draw(self, medicine: Medicine, pharmacy: PharmacyLocation) -> CanonicalResult:
        in_stock = self.rng.random() < self.IN_STOCK_PROBABILITY
        quantity = self.rng.randint(1, 50) if in_stock else 0
        price = 5 + self.rng.random() * 15

        stock = Stock(
            in_stock=in_stock,
            quantity=quantity,
            availability=classify_quantity(quantity),
        )
        return CanonicalResult(
            medicine=medicine,
            pharmacy=pharmacy,
            stock=stock,
            price=f"{price:.2f}",
            retailer=DEMO_RETAILER,
        )
