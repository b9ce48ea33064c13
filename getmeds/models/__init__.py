"""
Data models for the search pipeline.

This module contains pure data classes with no business logic.
"""

from .result import (
    AvailabilityClass,
    CanonicalResult,
    Coordinates,
    Medicine,
    PharmacyLocation,
    Stock,
)
from .retailer import RetailerConfig, ScrapedProductRef, SearchStrategy

__all__ = [
    'AvailabilityClass',
    'CanonicalResult',
    'Coordinates',
    'Medicine',
    'PharmacyLocation',
    'Stock',
    'RetailerConfig',
    'ScrapedProductRef',
    'SearchStrategy',
]
