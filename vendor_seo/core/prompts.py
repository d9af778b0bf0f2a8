"""Prompt assembly for SEO keyword generation."""

from datetime import date, datetime
from typing import Iterable, Optional, Tuple

from vendor_seo.models import AutosuggestSeed, Competitor, VendorSEORequest

MAX_KEYWORDS = 30
FALLBACK_KEYWORD = "I can't find any keyword"

SYSTEM_PROMPT = """
You are an experienced SEO strategist and keyword researcher.
Your task is to generate high-ranking, long-tail SEO keywords with strong buyer intent.
The output must always be a valid JSON array of strings.
"""

_USER_TEMPLATE = """
Context:
- Business type: {business_type}
- Business model: {business_model}
- Niche: {niche}
- Location: {location}
- Nearest areas: {nearest_areas}
- Competitors: {competitors}
- Autosuggest hints: {autosuggest}
- Target audience (gender): {target_gender}
- Price tier: {price_tier}
- Style tags: {style_tags}
- Timeframe: {window_start} to {window_end} (last 3 months)

Task:
Generate up to {max_keywords} SEO keywords that:
- Reflect real search behavior from users
- Show buyer intent (e.g., "buy", "order online", "affordable", "best")
- Are location-specific (include neighborhoods, suburbs, or city areas)
- Are fresh and relevant to the timeframe
- Exclude brand names unless provided in input
- Output ONLY as JSON array of strings

Example (generic across niches):
["best catering services in Lagos",
 "affordable bridal gowns Port Harcourt",
 "top luxury apartments Owerri",
 "buy organic groceries online Abuja",
 "children birthday costume rentals Ikeja"]

If no keywords are available, return ["{fallback}"].
"""


def _joined(values: Iterable[str], empty: str = "none") -> str:
    return ", ".join(values) or empty


def timeframe(today: Optional[date] = None) -> Tuple[str, str]:
    """Rolling three-month window as ("July 2026", "October 2026")."""
    today = today or datetime.now().date()
    month_index = today.year * 12 + (today.month - 1) - 3
    start = date(month_index // 12, month_index % 12 + 1, 1)
    return start.strftime("%B %Y"), today.strftime("%B %Y")


def build_user_prompt(
    request: VendorSEORequest,
    competitors: Iterable[Competitor],
    seeds: Iterable[AutosuggestSeed],
    today: Optional[date] = None,
) -> str:
    window_start, window_end = timeframe(today)
    return _USER_TEMPLATE.format(
        business_type=request.business_type,
        business_model=request.business_model,
        niche=request.niche,
        location=request.location,
        nearest_areas=_joined(request.nearest_areas),
        competitors=_joined(c.name for c in competitors),
        autosuggest=_joined(s.suggestion for s in seeds),
        target_gender=request.target_gender or "all",
        price_tier=request.price_tier or "all",
        style_tags=_joined(request.style_tags),
        window_start=window_start,
        window_end=window_end,
        max_keywords=MAX_KEYWORDS,
        fallback=FALLBACK_KEYWORD,
    )
