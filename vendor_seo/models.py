"""Core data models shared by the enrichment and keyword pipeline."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


class ValidationError(ValueError):
    """Raised when caller supplied input is missing or malformed."""


@dataclass(slots=True)
class EnrichedLocation:
    """Geocoded city context; coordinates are always finite floats."""

    city: str
    display_name: str
    lat: float
    lon: float
    neighborhoods: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lat) and math.isfinite(self.lon)):
            raise ValueError(f"non-finite coordinates for {self.city}: {self.lat}, {self.lon}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "displayName": self.display_name,
            "lat": self.lat,
            "lon": self.lon,
            "neighborhoods": list(self.neighborhoods),
        }


@dataclass(slots=True)
class Competitor:
    name: str
    type: str
    street: Optional[str] = None
    suburb: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class AutosuggestSeed:
    seed: str
    suggestion: str


@dataclass(slots=True)
class KeywordParseResult:
    """Keywords extracted from a model reply.

    ``strict`` is True when the reply parsed as a JSON array of strings and
    False when the delimiter split was used instead.
    """

    keywords: List[str]
    strict: bool
    raw: str = field(default="", repr=False)


def _required_str(payload: Dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _optional_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _string_list(payload: Dict[str, Any], key: str) -> List[str]:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f"{key} must be an array of strings")
    return [item.strip() for item in value if item.strip()]


@dataclass(slots=True)
class VendorSEORequest:
    """Validated input for a keyword generation run."""

    vendor_id: str
    business_type: str
    business_model: str
    niche: str
    location: str
    nearest_areas: List[str] = field(default_factory=list)
    target_gender: Optional[str] = None
    price_tier: Optional[str] = None
    style_tags: List[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "VendorSEORequest":
        """Build a request from a camelCase JSON body, raising ValidationError."""
        fields = {
            "vendor_id": "vendorId",
            "business_type": "businessType",
            "business_model": "businessModel",
            "niche": "niche",
            "location": "location",
        }
        values = {attr: _required_str(payload, key) for attr, key in fields.items()}
        missing = [fields[attr] for attr, value in values.items() if not value]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        return cls(
            **values,
            nearest_areas=_string_list(payload, "nearestAreas"),
            target_gender=_optional_str(payload, "targetGender"),
            price_tier=_optional_str(payload, "priceTier"),
            style_tags=_string_list(payload, "styleTags"),
        )

    def to_record(self, keywords: List[str]) -> Dict[str, Any]:
        """Row for the vendor_seo_keywords table."""
        return {
            "vendor_id": self.vendor_id,
            "business_type": self.business_type,
            "business_model": self.business_model,
            "niche": self.niche,
            "location": self.location,
            "nearest_areas": list(self.nearest_areas),
            "target_gender": self.target_gender,
            "price_tier": self.price_tier,
            "style_tags": list(self.style_tags),
            "keywords": list(keywords),
        }
