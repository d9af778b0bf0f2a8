"""HTTP entrypoint for keyword generation, competitor debugging and locations."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

import psycopg2
from flask import Flask, jsonify, request

from vendor_seo.core.config import get_settings
from vendor_seo.core.db import add_location, insert_seo_log, list_locations
from vendor_seo.core.enrichment import find_competitors, neighborhood_names
from vendor_seo.jobs.generate_keywords import generate_vendor_keywords
from vendor_seo.models import ValidationError, VendorSEORequest
from vendor_seo.vendors.nominatim import resolve_location

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only, no DB connection."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "api_keys_configured": len(settings.openrouter_api_keys),
                "models": list(settings.openrouter_models),
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


@app.post("/api/ai/seo-keywords")
def seo_keywords() -> Any:
    """
    Generate SEO keywords for a vendor.
    Required JSON fields: vendorId, businessType, businessModel, niche, location
    Optional: nearestAreas (string[]), targetGender, priceTier, styleTags (string[])
    """
    payload = _json_body()
    try:
        seo_request = VendorSEORequest.from_payload(payload)
    except ValidationError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        result = generate_vendor_keywords(seo_request)
    except Exception as exc:  # noqa: BLE001
        message = str(exc) or "Failed to generate."
        logger.exception("SEO keyword generation failed for vendor %s: %s", seo_request.vendor_id, message)
        _record_failure(seo_request, message)
        return jsonify({"error": message}), 500

    return jsonify(result), 200


@app.get("/api/debug/competitors")
def debug_competitors() -> Any:
    city = (request.args.get("city") or "").strip()
    niche = (request.args.get("niche") or "").strip() or "fashion"
    if not city:
        return jsonify({"error": "Missing city parameter"}), 400

    settings = get_settings()
    try:
        location = resolve_location(city, country=settings.geocoder_country, user_agent=settings.user_agent)
        if location is None:
            return jsonify({"error": f"Could not resolve location for {city}"}), 404

        competitors = find_competitors(
            city,
            niche,
            location.lat,
            location.lon,
            settings.competitor_radius_meters,
        )
    except Exception as exc:  # noqa: BLE001
        logger.exception("Competitor lookup failed for %s: %s", city, exc)
        return jsonify({"error": str(exc) or "Unknown error"}), 500

    location.neighborhoods = neighborhood_names(competitors)
    return (
        jsonify(
            {
                "city": city,
                "niche": niche,
                "location": location.to_dict(),
                "competitors": [c.to_dict() for c in competitors],
            }
        ),
        200,
    )


@app.post("/api/locations")
def create_location() -> Any:
    """Register neighbourhood names for a (city, category) pair."""
    payload = _json_body()
    try:
        location = add_location(payload.get("city"), payload.get("category"), payload.get("areas") or [])
    except ValidationError as exc:
        return jsonify({"success": False, "error": str(exc)}), 400
    except (psycopg2.Error, RuntimeError) as exc:
        logger.exception("Failed to save location: %s", exc)
        return jsonify({"success": False, "error": str(exc)}), 500

    return jsonify({"success": True, "location": location}), 200


@app.get("/api/locations")
def get_locations() -> Any:
    city = (request.args.get("city") or "").strip() or None
    try:
        rows = list_locations(city)
    except (psycopg2.Error, RuntimeError) as exc:
        logger.exception("Failed to list locations: %s", exc)
        return jsonify({"error": str(exc)}), 500
    return jsonify({"data": rows}), 200


# ---------- Internals ----------


def _record_failure(seo_request: VendorSEORequest, message: str) -> None:
    try:
        insert_seo_log(
            seo_request.vendor_id,
            "error",
            {"vendorId": seo_request.vendor_id, "niche": seo_request.niche, "location": seo_request.location},
            {"error": message},
        )
    except (psycopg2.Error, RuntimeError) as exc:
        logger.warning("Could not write error log for %s: %s", seo_request.vendor_id, exc)


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
