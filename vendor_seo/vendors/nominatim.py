"""Client utilities for the Nominatim geocoding API."""

import logging
from typing import Optional

import requests

from vendor_seo.models import EnrichedLocation

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://nominatim.openstreetmap.org/search"
REQUEST_TIMEOUT = 10


class LocationLookupError(LookupError):
    """Raised when the geocoding service cannot be queried."""


def resolve_location(
    city: str,
    country: str = "nigeria",
    user_agent: str = "seo-keyword-service/1.0",
) -> Optional[EnrichedLocation]:
    """Geocode ``city`` within ``country``; returns None when nothing matches."""
    if not city or not city.strip():
        raise ValueError("city must be provided for geocoding")

    params = {
        "city": city,
        "country": country,
        "format": "json",
        "addressdetails": 1,
        "extratags": 1,
        "limit": 1,
    }
    response = _SESSION.get(
        _BASE_URL,
        params=params,
        headers={"User-Agent": user_agent},
        timeout=REQUEST_TIMEOUT,
    )
    if not response.ok:
        logger.error("resolve_location failed: city=%s status=%s", city, response.status_code)
        raise LocationLookupError(f"Failed to fetch location for {city}")

    try:
        results = response.json()
    except ValueError as exc:
        raise LocationLookupError(f"Invalid geocoding response for {city}") from exc
    if results and not isinstance(results, list):
        raise LocationLookupError(f"Unexpected geocoding response for {city}")
    if not results:
        logger.info("No geocoding results for city=%s", city)
        return None

    first = results[0]
    try:
        return EnrichedLocation(
            city=city,
            display_name=first.get("display_name", city),
            lat=float(first["lat"]),
            lon=float(first["lon"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise LocationLookupError(f"Invalid coordinates returned for {city}") from exc
