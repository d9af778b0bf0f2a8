from datetime import date

from vendor_seo.core import prompts
from vendor_seo.models import AutosuggestSeed, Competitor, VendorSEORequest


def make_request(**overrides):
    payload = {
        "vendorId": "v1",
        "businessType": "fashion",
        "businessModel": "hybrid",
        "niche": "bridal gowns",
        "location": "Owerri",
    }
    payload.update(overrides)
    return VendorSEORequest.from_payload(payload)


def test_timeframe_crosses_year_boundary():
    assert prompts.timeframe(date(2026, 2, 10)) == ("November 2025", "February 2026")
    assert prompts.timeframe(date(2026, 10, 19)) == ("July 2026", "October 2026")


def test_user_prompt_uses_sentinels_when_empty():
    prompt = prompts.build_user_prompt(make_request(), [], [], today=date(2026, 10, 19))

    assert "- Competitors: none" in prompt
    assert "- Autosuggest hints: none" in prompt
    assert "- Nearest areas: none" in prompt
    assert "- Target audience (gender): all" in prompt
    assert "- Timeframe: July 2026 to October 2026 (last 3 months)" in prompt
    assert "Generate up to 30 SEO keywords" in prompt
    assert '["I can\'t find any keyword"]' in prompt


def test_user_prompt_embeds_context():
    request = make_request(nearestAreas=["Ikenegbu", "Wetheral"], styleTags=["lace"], priceTier="premium")
    competitors = [Competitor("Bella Bridals", "boutique"), Competitor("Owerri Gowns", "clothes")]
    seeds = [AutosuggestSeed("bridal gowns Owerri", "bridal gowns owerri price")]

    prompt = prompts.build_user_prompt(request, competitors, seeds, today=date(2026, 10, 19))

    assert "- Competitors: Bella Bridals, Owerri Gowns" in prompt
    assert "- Autosuggest hints: bridal gowns owerri price" in prompt
    assert "- Nearest areas: Ikenegbu, Wetheral" in prompt
    assert "- Style tags: lace" in prompt
    assert "- Price tier: premium" in prompt


def test_system_prompt_requests_json_array():
    assert "valid JSON array of strings" in prompts.SYSTEM_PROMPT
