"""
VMClub Session

VMClub's fast-search endpoint only answers same-origin AJAX calls that
carry the session cookies and the anti-forgery token from the landing
page. The search answer is a markup fragment, so each hit is enriched
from its product page and the store availability page:

1. GET the landing page (sets cookies, embeds the CSRF token)
2. POST the form-encoded search with the token in X-CSRF-TOKEN
3. For the first product links in the returned markup:
   - GET /pharmacy/<slug> and read its JSON-LD product data
   - GET /store-locations?check=<productID> and read the locations

A product whose pages fail is skipped. Sessions are never reused and
nothing is retried.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from ..common.constants import DEFAULT_ACCEPT_LANGUAGE, DEFAULT_USER_AGENT
from ..common.errors import UpstreamError

logger = logging.getLogger(__name__)

MAX_PRODUCTS = 10
DEFAULT_PRICE_CURRENCY = "EUR"
LOCATION_FIELDS = ('id', 'name', 'address', 'city', 'email', 'phone', 'lat', 'lon', 'status')

TOKEN_PATTERNS = [
    re.compile(r'<meta\s+name=["\']csrf-token["\']\s+content=["\']([^"\']+)["\']', re.IGNORECASE),
    re.compile(r'<meta\s+content=["\']([^"\']+)["\']\s+name=["\']csrf-token["\']', re.IGNORECASE),
    re.compile(r'name=["\']_token["\']\s+value=["\']([^"\']+)["\']', re.IGNORECASE),
]

PRODUCT_SLUG_PATTERN = re.compile(r'href=["\']/pharmacy/([\w-]+)["\']')


def extract_csrf_token(html: str) -> Optional[str]:
    """
    Extract the anti-forgery token from landing page markup.

    Returns:
        Token string, or None when the page carries no token
    """
    if not html:
        return None
    for pattern in TOKEN_PATTERNS:
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


def extract_product_slugs(html: str, limit: int = MAX_PRODUCTS) -> List[str]:
    """Product page slugs linked from search markup, first occurrence order."""
    slugs = []
    for slug in PRODUCT_SLUG_PATTERN.findall(html or ""):
        if slug not in slugs:
            slugs.append(slug)
        if len(slugs) >= limit:
            break
    return slugs


def parse_product_json_ld(html: str) -> Optional[Dict[str, Any]]:
    """
    Read the Product JSON-LD block of a product page.

    Returns:
        Product fields (productID, name, brand, price, ...) or None
        when the page has no usable JSON-LD
    """
    soup = BeautifulSoup(html or "", "lxml")
    for script in soup.find_all('script', type='application/ld+json'):
        try:
            data = json.loads(script.string or "")
        except ValueError:
            logger.debug("Skipping malformed JSON-LD block")
            continue
        if isinstance(data, list):
            data = next((item for item in data if isinstance(item, dict) and item.get('productID')), None)
        if isinstance(data, dict) and data.get('productID'):
            return data
    return None


def parse_store_locations(html: str) -> List[Dict[str, Any]]:
    """
    Read store entries from the availability page.

    Each store element carries its data as JSON in a data-text attribute;
    status 0 means available. Malformed entries are skipped.
    """
    soup = BeautifulSoup(html or "", "lxml")
    locations = []
    for element in soup.select('[data-text]'):
        data = _load_store_json(element['data-text'])
        if data is None:
            logger.debug("Skipping malformed store entry")
            continue
        if isinstance(data, dict):
            locations.append({field: data.get(field) for field in LOCATION_FIELDS})
    return locations


def _load_store_json(text: str) -> Any:
    """Decode a data-text payload; some pages backslash-escape its quotes."""
    for candidate in (text, text.replace('\\', '')):
        try:
            return json.loads(candidate)
        except ValueError:
            continue
    return None


def build_product(json_ld: Dict[str, Any], slug: str, product_url: str,
                  locations: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Flatten JSON-LD product data into the relay's product shape."""
    image = json_ld.get('image')
    if isinstance(image, list):
        image = image[0] if image else None

    brand = json_ld.get('brand')
    if isinstance(brand, dict):
        brand = brand.get('name')

    offers = json_ld.get('offers')
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    if not isinstance(offers, dict):
        offers = {}

    return {
        "productID": json_ld.get('productID'),
        "name": json_ld.get('name'),
        "description": json_ld.get('description'),
        "image": image or None,
        "sku": json_ld.get('sku'),
        "brand": brand or "",
        "price": offers.get('price') or None,
        "priceCurrency": offers.get('priceCurrency') or DEFAULT_PRICE_CURRENCY,
        "availability": offers.get('availability') or "",
        "productUrl": product_url,
        "slug": slug,
        "locations": locations,
    }


class VMClubSession:
    """
    One-shot VMClub search session.

    Usage:
        with VMClubSession(landing_url, search_url) as session:
            data = session.search("аспирин")
    """

    def __init__(
        self,
        landing_url: str,
        search_url: str,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
        timeout: float = 30,
        max_products: int = MAX_PRODUCTS,
    ):
        self.landing_url = landing_url
        self.search_url = search_url
        self.timeout = timeout
        self.max_products = max_products
        parsed = urlparse(landing_url)
        self.origin = f"{parsed.scheme}://{parsed.netloc}"

        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": user_agent,
            "Accept-Language": accept_language,
        })

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def fetch_token(self) -> str:
        """
        Load the landing page and return its CSRF token.

        Raises:
            UpstreamError: If the page fails to load or has no token
        """
        try:
            response = self.session.get(
                self.landing_url,
                headers={"Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise UpstreamError(f"Session bootstrap failed: {e}", url=self.landing_url) from e

        token = extract_csrf_token(response.text)
        if not token:
            raise UpstreamError("CSRF token not found on landing page", url=self.landing_url)

        logger.debug("VMClub session: token acquired, %d cookie(s)", len(self.session.cookies))
        return token

    def fast_search(self, query: str, token: str) -> Any:
        """
        POST the fast-search form and return its JSON.

        Raises:
            UpstreamError: If the request fails or the answer is not JSON
        """
        try:
            response = self.session.post(
                self.search_url,
                data={"q": query, "field": "fast-search"},
                headers={
                    "Accept": "application/json, text/javascript, */*; q=0.01",
                    "X-CSRF-TOKEN": token,
                    "X-Requested-With": "XMLHttpRequest",
                    "Origin": self.origin,
                    "Referer": self.landing_url,
                },
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            status = getattr(getattr(e, 'response', None), 'status_code', None)
            raise UpstreamError(f"Search request failed: {e}", status_code=status, url=self.search_url) from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Search returned invalid JSON: {e}", url=self.search_url) from e

    def _get_text(self, url: str, params: Optional[Dict[str, str]] = None) -> str:
        response = self.session.get(
            url,
            params=params,
            headers={"Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.text

    def fetch_product(self, slug: str) -> Optional[Dict[str, Any]]:
        """
        Fetch one product page and its store availability.

        Returns:
            Product dict, or None when the page has no JSON-LD product data

        Raises:
            requests.RequestException: If either page fails to load
        """
        product_url = f"{self.origin}/pharmacy/{slug}"
        json_ld = parse_product_json_ld(self._get_text(product_url))
        if json_ld is None:
            logger.debug("VMClub: no product data on %s", product_url)
            return None

        availability_html = self._get_text(
            f"{self.origin}/store-locations", params={"check": str(json_ld['productID'])}
        )
        return build_product(json_ld, slug, product_url, parse_store_locations(availability_html))

    def search(self, query: str) -> Dict[str, Any]:
        """
        Run the search and enrich every hit with product and store data.

        Returns:
            {"success": True, "query": ..., "totalProducts": n, "products": [...]}

        Raises:
            UpstreamError: If bootstrap or the search request fails
        """
        token = self.fetch_token()
        data = self.fast_search(query, token)

        html = data.get('html') if isinstance(data, dict) else None
        slugs = extract_product_slugs(html, self.max_products) if isinstance(html, str) else []

        products = []
        for slug in slugs:
            try:
                product = self.fetch_product(slug)
            except requests.RequestException as e:
                logger.warning("VMClub: failed to fetch product %s: %s", slug, e)
                continue
            if product is not None:
                products.append(product)

        logger.info("VMClub: %d of %d product(s) enriched for '%s'", len(products), len(slugs), query)
        return {
            "success": True,
            "query": query,
            "totalProducts": len(products),
            "products": products,
        }
