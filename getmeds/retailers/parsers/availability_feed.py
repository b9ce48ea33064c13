"""
Availability Feed Parser

Parses the per-product availability JSON (a GeoJSON-like "contact-map"
feature collection). Each feature is one pharmacy location with a
status classifier, coordinates, and contact/hours fields.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ...common.text_utils import clean_text
from ...models import Coordinates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationAvailability:
    """One location entry from the availability feed."""
    name: str
    address: str
    city: str
    phone: str
    working_hours: str
    status_type: str
    status_text: str
    coordinates: Optional[Coordinates] = None


class AvailabilityFeedParser:
    """
    Parses availability feed documents.

    Usage:
        locations = AvailabilityFeedParser().parse(data)
    """

    def parse(self, data: Any) -> List[LocationAvailability]:
        """
        Extract locations from a feed document.

        Malformed features are skipped; a malformed document yields [].
        """
        if not isinstance(data, dict):
            return []

        contact_map = data.get('contact-map') or {}
        features = contact_map.get('features') if isinstance(contact_map, dict) else None
        if not isinstance(features, list):
            return []

        locations = []
        for feature in features:
            location = self.parse_feature(feature)
            if location is not None:
                locations.append(location)
        return locations

    def parse_feature(self, feature: Any) -> Optional[LocationAvailability]:
        if not isinstance(feature, dict):
            return None
        props = feature.get('properties')
        if not isinstance(props, dict):
            logger.debug("Skipping feature without properties")
            return None

        status = props.get('status') or {}
        contacts = props.get('contacts') or {}

        return LocationAvailability(
            name=clean_text(props.get('name')),
            address=clean_text(props.get('address')),
            city=clean_text(props.get('city')),
            phone=clean_text(contacts.get('phone')) if isinstance(contacts, dict) else "",
            working_hours=self._join_hours(props.get('worktime')),
            status_type=str(status.get('type') or '') if isinstance(status, dict) else "",
            status_text=clean_text(status.get('text')) if isinstance(status, dict) else "",
            coordinates=self._parse_coordinates(feature.get('geometry')),
        )

    @staticmethod
    def _join_hours(worktime: Any) -> str:
        if isinstance(worktime, list):
            return ', '.join(clean_text(str(part)) for part in worktime if part)
        if isinstance(worktime, str):
            return clean_text(worktime)
        return ""

    @staticmethod
    def _parse_coordinates(geometry: Any) -> Optional[Coordinates]:
        """GeoJSON points are [longitude, latitude]."""
        if not isinstance(geometry, dict):
            return None
        coords = geometry.get('coordinates')
        if not isinstance(coords, (list, tuple)) or len(coords) < 2:
            return None
        try:
            return Coordinates(lat=float(coords[1]), lng=float(coords[0]))
        except (TypeError, ValueError):
            return None
