"""Competitor discovery and autosuggest enrichment for keyword prompts."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List

import requests

from vendor_seo.core.city_fallbacks import fallback_neighborhoods
from vendor_seo.etl.transform import (
    dedupe_by_name,
    generic_competitor,
    neighborhoods_to_competitors,
    suggestions_to_competitors,
    to_competitor,
)
from vendor_seo.models import AutosuggestSeed, Competitor
from vendor_seo.vendors import duckduckgo, overpass

logger = logging.getLogger(__name__)

SEARCH_RADIUS_METERS = 20000
MAX_SUGGESTION_COMPETITORS = 8


def find_competitors(
    city: str,
    niche: str,
    lat: float,
    lon: float,
    radius_m: int = SEARCH_RADIUS_METERS,
) -> List[Competitor]:
    """Return nearby competitors for ``niche``; the list is never empty.

    Shops found on the map are returned as-is. Otherwise search suggestions
    and neighbourhood-derived entries are merged, and a single generic entry is
    used when both come back empty.
    """
    elements = overpass.query_shops(lat, lon, radius_m)
    shops = [competitor for competitor in map(to_competitor, elements) if competitor is not None]
    if shops:
        logger.info("Found %d mapped shops around %s", len(shops), city)
        return dedupe_by_name(shops)

    logger.info("No mapped shops around %s; using fallback tiers", city)
    with ThreadPoolExecutor(max_workers=2) as executor:
        suggestions_future = executor.submit(_suggestion_competitors, city, niche)
        neighborhoods_future = executor.submit(_neighborhood_competitors, city, niche, lat, lon, radius_m)
        merged = suggestions_future.result() + neighborhoods_future.result()

    unique = dedupe_by_name(merged)
    if unique:
        return unique

    logger.info("Fallback tiers empty for %s; returning generic placeholder", city)
    return [generic_competitor(niche, city)]


def _suggestion_competitors(city: str, niche: str) -> List[Competitor]:
    try:
        phrases = duckduckgo.autosuggest(f"{niche} {city}")
    except (duckduckgo.DuckDuckGoError, requests.RequestException) as exc:
        logger.warning("Search suggestions unavailable for %s: %s", city, exc)
        return []
    return suggestions_to_competitors(phrases, city, limit=MAX_SUGGESTION_COMPETITORS)


def _neighborhood_competitors(city: str, niche: str, lat: float, lon: float, radius_m: int) -> List[Competitor]:
    try:
        mapped = overpass.query_neighborhoods(lat, lon, radius_m)
    except (overpass.OverpassError, requests.RequestException) as exc:
        logger.warning("Neighbourhood lookup failed for %s: %s", city, exc)
        mapped = []
    return neighborhoods_to_competitors(mapped + fallback_neighborhoods(city), niche)


def neighborhood_names(competitors: Iterable[Competitor]) -> List[str]:
    """Suburbs of the neighbourhood-derived competitors, in order."""
    return [c.suburb for c in competitors if c.type == "neighborhood" and c.suburb]


def expand_seeds(terms: Iterable[str]) -> List[AutosuggestSeed]:
    """Query autosuggest for each term in order, skipping failed lookups."""
    seeds: List[AutosuggestSeed] = []
    for term in terms:
        try:
            phrases = duckduckgo.autosuggest(term)
        except (duckduckgo.DuckDuckGoError, requests.RequestException) as exc:
            logger.warning("Autosuggest skipped for term=%s: %s", term, exc)
            continue
        seeds.extend(AutosuggestSeed(seed=term, suggestion=phrase) for phrase in phrases)
    logger.info("Collected %d autosuggest phrases", len(seeds))
    return seeds
