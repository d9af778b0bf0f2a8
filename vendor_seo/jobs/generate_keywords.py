"""Keyword generation job: enrich a vendor profile, ask the model, persist."""

import argparse
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Any, Dict, List, Optional

import psycopg2

from vendor_seo.core.config import get_settings
from vendor_seo.core.db import insert_seo_log, upsert_vendor_keywords
from vendor_seo.core.enrichment import expand_seeds, find_competitors, neighborhood_names
from vendor_seo.core.prompts import SYSTEM_PROMPT, build_user_prompt
from vendor_seo.models import AutosuggestSeed, Competitor, VendorSEORequest
from vendor_seo.vendors.nominatim import resolve_location
from vendor_seo.vendors.openrouter import KeywordGateway, get_gateway

logger = logging.getLogger(__name__)


def build_seed_terms(request: VendorSEORequest, city: str) -> List[str]:
    candidates = [
        f"{request.niche} {city}",
        f"{request.business_type} {city}",
        f"{request.business_type} {city} {request.target_gender or ''}".strip(),
    ]
    terms: List[str] = []
    for term in candidates:
        if term not in terms:
            terms.append(term)
    return terms


def _log_safely(entity_id: str, action: str, inputs: Dict[str, Any], outputs: Dict[str, Any]) -> None:
    try:
        insert_seo_log(entity_id, action, inputs, outputs)
    except (psycopg2.Error, RuntimeError) as exc:
        logger.warning("Failed to write %s log for %s: %s", action, entity_id, exc)


def generate_vendor_keywords(
    request: VendorSEORequest,
    *,
    gateway: Optional[KeywordGateway] = None,
    today: Optional[date] = None,
    persist: bool = True,
) -> Dict[str, Any]:
    """Run the enrichment + keyword pipeline for one vendor."""
    settings = get_settings()
    gateway = gateway or get_gateway()

    competitors: List[Competitor] = []
    seeds: List[AutosuggestSeed] = []

    location = resolve_location(
        request.location,
        country=settings.geocoder_country,
        user_agent=settings.user_agent,
    )
    if location is None:
        logger.info("Location %s not resolved; generating without enrichment", request.location)
    else:
        with ThreadPoolExecutor(max_workers=2) as executor:
            competitors_future = executor.submit(
                find_competitors,
                location.city,
                request.niche,
                location.lat,
                location.lon,
                settings.competitor_radius_meters,
            )
            seeds_future = executor.submit(expand_seeds, build_seed_terms(request, location.city))
            competitors = competitors_future.result()
            seeds = seeds_future.result()
        location.neighborhoods = neighborhood_names(competitors)
        logger.info(
            "Enriched %s: competitors=%d suggestions=%d neighborhoods=%d",
            location.city,
            len(competitors),
            len(seeds),
            len(location.neighborhoods),
        )

    user_prompt = build_user_prompt(request, competitors, seeds, today=today)
    result = gateway.generate(SYSTEM_PROMPT, user_prompt)
    keywords = result.keywords

    inputs = {"vendorId": request.vendor_id, "niche": request.niche, "location": request.location}
    if persist:
        _log_safely(
            request.vendor_id,
            "debug_ai_output",
            inputs,
            {"rawResult": result.raw, "strict": result.strict, "keywords": keywords},
        )
        upsert_vendor_keywords(request.to_record(keywords))
        _log_safely(request.vendor_id, "generate", inputs, {"keywords": keywords})

    logger.info("Generated %d keywords for vendor %s", len(keywords), request.vendor_id)
    return {"vendorId": request.vendor_id, "keywords": keywords}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate SEO keywords for a vendor")
    parser.add_argument("--vendor-id", dest="vendorId", required=True, help="Vendor identifier")
    parser.add_argument("--business-type", dest="businessType", required=True, help="e.g. fashion")
    parser.add_argument(
        "--business-model",
        dest="businessModel",
        default="brick_and_mortar",
        help="online, brick_and_mortar or hybrid",
    )
    parser.add_argument("--niche", dest="niche", required=True, help="Product or service specialty")
    parser.add_argument("--location", dest="location", required=True, help="City name")
    parser.add_argument("--nearest-area", dest="nearestAreas", action="append", default=[], help="Repeatable")
    parser.add_argument("--target-gender", dest="targetGender", help="Target audience gender")
    parser.add_argument("--price-tier", dest="priceTier", help="Price tier")
    parser.add_argument("--style-tag", dest="styleTags", action="append", default=[], help="Repeatable")
    parser.add_argument("--no-persist", dest="persist", action="store_false", help="Skip database writes")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = vars(build_parser().parse_args(argv))
    persist = args.pop("persist")

    request = VendorSEORequest.from_payload(args)
    result = generate_vendor_keywords(request, persist=persist)
    print(json.dumps(result, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
