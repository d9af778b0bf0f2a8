"""Client utilities for the Overpass map-feature API."""

import logging
from typing import Any, Dict, List

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://overpass-api.de/api/interpreter"
REQUEST_TIMEOUT = 30

SHOP_PATTERN = "clothes|boutique|jewelry|fashion|tailor|shoes"
PLACE_PATTERN = "suburb|quarter|neighbourhood|market"


class OverpassError(RuntimeError):
    """Raised when the Overpass API returns a non-successful response."""


def build_around_query(tag: str, pattern: str, radius_m: int, lat: float, lon: float) -> str:
    """Overpass QL selecting nodes, ways and relations whose ``tag`` matches ``pattern``."""
    selector = f'["{tag}"~"{pattern}"](around:{radius_m},{lat},{lon});'
    return (
        "[out:json][timeout:25];\n"
        "(\n"
        f"  node{selector}\n"
        f"  way{selector}\n"
        f"  relation{selector}\n"
        ");\n"
        "out center;\n"
    )


def run_query(query: str) -> List[Dict[str, Any]]:
    response = _SESSION.post(_BASE_URL, data=query, timeout=REQUEST_TIMEOUT)
    if not response.ok:
        logger.error("Overpass query failed: status=%s body=%s", response.status_code, response.text[:200])
        raise OverpassError(f"Overpass returned status {response.status_code}")
    payload = response.json() or {}
    elements = payload.get("elements") or []
    logger.debug("Overpass returned %d elements", len(elements))
    return elements


def query_shops(lat: float, lon: float, radius_m: int = 20000) -> List[Dict[str, Any]]:
    """Clothing-adjacent shops around a point."""
    return run_query(build_around_query("shop", SHOP_PATTERN, radius_m, lat, lon))


def query_neighborhoods(lat: float, lon: float, radius_m: int = 20000) -> List[str]:
    """Names of suburb/quarter/neighbourhood/market places around a point."""
    elements = run_query(build_around_query("place", PLACE_PATTERN, radius_m, lat, lon))
    names = []
    for element in elements:
        name = ((element.get("tags") or {}).get("name") or "").strip()
        if name:
            names.append(name)
    return names
