"""Shared test fixtures."""

import json
from pathlib import Path

import httpx
import pytest

from getmeds.models import (
    AvailabilityClass,
    CanonicalResult,
    Medicine,
    PharmacyLocation,
    RetailerConfig,
    SearchStrategy,
    Stock,
)
from getmeds.transport import RelayClient

FIXTURES_DIR = Path(__file__).parent / "fixtures"

RELAY_URL = "https://relay.test/"


def load_fixture_text(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def load_fixture_json(name: str):
    return json.loads(load_fixture_text(name))


def make_relay_client(handler, relay_url: str = RELAY_URL, use_relay: bool = True) -> RelayClient:
    """Create a RelayClient whose HTTP calls are answered by handler(request)."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RelayClient(client, relay_url, use_relay)


def make_result(
    name: str = "Аспирин 100мг",
    city: str = "София",
    in_stock: bool = True,
    price: str = "9.99",
    retailer: str = "Test",
    pharmacy_name: str = "Аптека Тест",
) -> CanonicalResult:
    """Build a minimal valid CanonicalResult."""
    if in_stock:
        stock = Stock(in_stock=True, quantity=10, availability=AvailabilityClass.AVAILABLE)
    else:
        stock = Stock(in_stock=False, quantity=0, availability=AvailabilityClass.UNAVAILABLE)
    return CanonicalResult(
        medicine=Medicine(name=name, manufacturer="TestBrand"),
        pharmacy=PharmacyLocation(
            name=pharmacy_name,
            address=f"ул. Тестова 1, {city}",
            working_hours="08:00-20:00",
            city=city,
        ),
        stock=stock,
        price=price,
        retailer=retailer,
    )


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def sopharmacy_config():
    return RetailerConfig(
        name="Sopharmacy",
        enabled=True,
        strategy=SearchStrategy.HTML_SCRAPE,
        origin="https://sopharmacy.bg",
        search_url="https://sopharmacy.bg/bg/sophSearch/?text={query}",
        availability_url="https://sopharmacy.bg/bg/mapbox/{product_id}/pdpProductAvailability.json",
        product_url="https://sopharmacy.bg/bg/product/{product_id}",
        relay_name="sopharmacy",
        product_limit=5,
        image_enrichment_limit=3,
    )


@pytest.fixture
def vmclub_config():
    return RetailerConfig(
        name="VMClub",
        enabled=True,
        strategy=SearchStrategy.STATEFUL_SESSION,
        origin="https://sofia.vmclub.bg",
        relay_name="vmclub",
    )


@pytest.fixture
def remedium_config():
    return RetailerConfig(
        name="Remedium",
        enabled=True,
        strategy=SearchStrategy.JSON_ENDPOINT,
        origin="https://remedium.bg",
        search_url="https://remedium.bg/api/search?q={query}",
        relay_name="remedium",
    )


@pytest.fixture
def sopharmacy_search_html():
    return load_fixture_text("sopharmacy_search.html")


@pytest.fixture
def sopharmacy_product_html():
    return load_fixture_text("sopharmacy_product.html")


@pytest.fixture
def sopharmacy_availability():
    return load_fixture_json("sopharmacy_availability.json")


@pytest.fixture
def vmclub_products():
    return load_fixture_json("vmclub_products.json")


@pytest.fixture
def vmclub_markup():
    return load_fixture_json("vmclub_markup.json")


@pytest.fixture
def relay_client_factory():
    """Factory: relay_client_factory(handler, use_relay=True) -> RelayClient over MockTransport."""
    return make_relay_client


@pytest.fixture
def result_factory():
    """Factory for minimal valid CanonicalResults."""
    return make_result
