"""Utilities for transforming map-feature and autosuggest results into competitors."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from vendor_seo.models import Competitor

logger = logging.getLogger(__name__)


def _tag(tags: Dict[str, Any], key: str) -> Optional[str]:
    value = tags.get(key)
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def to_competitor(element: Dict[str, Any]) -> Optional[Competitor]:
    """Map an Overpass shop element; unnamed elements yield None."""
    tags = element.get("tags") or {}
    name = _tag(tags, "name")
    if not name:
        logger.debug("Skipping unnamed element id=%s", element.get("id"))
        return None
    return Competitor(
        name=name,
        type=_tag(tags, "shop") or "unknown",
        street=_tag(tags, "addr:street"),
        suburb=_tag(tags, "addr:suburb"),
    )


def suggestions_to_competitors(phrases: Iterable[str], city: str, limit: int = 8) -> List[Competitor]:
    competitors = [
        Competitor(name=phrase, type="search-suggestion", street=None, suburb=city)
        for phrase in phrases
        if phrase
    ]
    return competitors[:limit]


def neighborhoods_to_competitors(neighborhoods: Iterable[str], niche: str) -> List[Competitor]:
    return [
        Competitor(name=f"{niche} shop in {name}", type="neighborhood", street=None, suburb=name)
        for name in neighborhoods
    ]


def generic_competitor(niche: str, city: str) -> Competitor:
    return Competitor(name=f"{niche} shops in {city}", type="generic", street=None, suburb=city)


def dedupe_by_name(competitors: Iterable[Competitor]) -> List[Competitor]:
    """Drop repeated names, keeping the first occurrence and original order."""
    seen = set()
    unique = []
    for competitor in competitors:
        if competitor.name in seen:
            continue
        seen.add(competitor.name)
        unique.append(competitor)
    return unique
