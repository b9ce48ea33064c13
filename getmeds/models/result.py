"""
Canonical result models.

Immutable value objects shared by every retailer adapter and the demo
generator. Adapters create them; everything downstream only filters,
sorts and renders them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class AvailabilityClass(str, Enum):
    """Normalized stock signal."""
    AVAILABLE = "available"
    LIMITED = "limited"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Coordinates:
    """Geographic position of a pharmacy."""
    lat: float
    lng: float


@dataclass(frozen=True)
class Medicine:
    """Product as listed by a retailer."""
    name: str
    manufacturer: str = ""
    packaging: str = ""
    prescription_required: bool = False
    image_url: Optional[str] = None
    product_link: Optional[str] = None


@dataclass(frozen=True)
class PharmacyLocation:
    """Physical (or virtual) pharmacy where a product is offered."""
    name: str
    address: str
    working_hours: str
    city: Optional[str] = None
    phone: Optional[str] = None
    coordinates: Optional[Coordinates] = None


@dataclass(frozen=True)
class Stock:
    """Stock state of one product at one location."""
    in_stock: bool
    quantity: int
    availability: AvailabilityClass
    status_text: Optional[str] = None

    def __post_init__(self):
        """Validate stock invariants after initialization."""
        if self.quantity < 0:
            raise ValueError("Stock quantity cannot be negative")
        if self.availability == AvailabilityClass.AVAILABLE and not self.in_stock:
            raise ValueError("Available stock must be in stock")
        if self.quantity == 0 and self.availability not in (
            AvailabilityClass.UNAVAILABLE, AvailabilityClass.UNKNOWN
        ):
            raise ValueError(
                f"Zero quantity is incompatible with availability '{self.availability.value}'"
            )


@dataclass(frozen=True)
class CanonicalResult:
    """
    One product at one pharmacy location.

    Every record belongs to exactly one retailer and one location.
    The price is a pre-formatted string (e.g., "12.50") or the
    "no price" sentinel.
    """
    medicine: Medicine
    pharmacy: PharmacyLocation
    stock: Stock
    price: str
    retailer: str = ""

    @property
    def in_stock(self) -> bool:
        return self.stock.in_stock

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape consumed by the UI."""
        coordinates = None
        if self.pharmacy.coordinates is not None:
            coordinates = {
                "lat": self.pharmacy.coordinates.lat,
                "lng": self.pharmacy.coordinates.lng,
            }

        return {
            "retailer": self.retailer,
            "medicine": {
                "name": self.medicine.name,
                "manufacturer": self.medicine.manufacturer,
                "packaging": self.medicine.packaging,
                "prescriptionRequired": self.medicine.prescription_required,
                "imageUrl": self.medicine.image_url,
                "productLink": self.medicine.product_link,
            },
            "pharmacy": {
                "name": self.pharmacy.name,
                "address": self.pharmacy.address,
                "city": self.pharmacy.city,
                "phone": self.pharmacy.phone,
                "workingHours": self.pharmacy.working_hours,
                "coordinates": coordinates,
            },
            "stock": {
                "inStock": self.stock.in_stock,
                "quantity": self.stock.quantity,
                "availabilityClass": self.stock.availability.value,
                "statusText": self.stock.status_text,
            },
            "price": self.price,
        }
