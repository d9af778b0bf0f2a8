"""Database helpers for keyword records, audit logs and the location registry."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional

import psycopg2
from psycopg2 import extras, pool

from vendor_seo.core.config import get_settings
from vendor_seo.models import ValidationError

logger = logging.getLogger(__name__)

_connection_pool: Optional[pool.SimpleConnectionPool] = None

LOCATION_CATEGORIES = ("area", "street", "market", "junction", "estate", "suburb", "landmark")


def init_pool(minconn: int = 1, maxconn: int = 5) -> pool.SimpleConnectionPool:
    """Initialise and return the shared connection pool."""
    global _connection_pool
    if _connection_pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is required for database connections")
        _connection_pool = pool.SimpleConnectionPool(
            minconn,
            maxconn,
            dsn=settings.database_url,
            connect_timeout=10,
        )
        logger.info("Database connection pool initialised")
    return _connection_pool


@contextmanager
def get_connection():
    """Context manager yielding a pooled connection."""
    pg_pool = init_pool()
    conn = pg_pool.getconn()
    try:
        yield conn
    finally:
        pg_pool.putconn(conn)


_UPSERT_VENDOR_KEYWORDS = """
INSERT INTO vendor_seo_keywords (
    vendor_id,
    business_type,
    business_model,
    niche,
    location,
    nearest_areas,
    target_gender,
    price_tier,
    style_tags,
    keywords,
    updated_at
) VALUES (
    %(vendor_id)s,
    %(business_type)s,
    %(business_model)s,
    %(niche)s,
    %(location)s,
    %(nearest_areas)s,
    %(target_gender)s,
    %(price_tier)s,
    %(style_tags)s,
    %(keywords)s,
    NOW()
)
ON CONFLICT (vendor_id) DO UPDATE SET
    business_type = EXCLUDED.business_type,
    business_model = EXCLUDED.business_model,
    niche = EXCLUDED.niche,
    location = EXCLUDED.location,
    nearest_areas = EXCLUDED.nearest_areas,
    target_gender = EXCLUDED.target_gender,
    price_tier = EXCLUDED.price_tier,
    style_tags = EXCLUDED.style_tags,
    keywords = EXCLUDED.keywords,
    updated_at = NOW();
"""

_INSERT_SEO_LOG = """
INSERT INTO seo_logs (entity, entity_id, action, inputs, outputs)
VALUES (%(entity)s, %(entity_id)s, %(action)s, %(inputs)s, %(outputs)s);
"""

_SELECT_LOCATION_FOR_UPDATE = """
SELECT id, name FROM locations
WHERE city = %(city)s AND category = %(category)s
FOR UPDATE;
"""

_UPDATE_LOCATION = """
UPDATE locations SET name = %(name)s, updated_at = NOW() WHERE id = %(id)s;
"""

_INSERT_LOCATION = """
INSERT INTO locations (city, category, name, created_at, updated_at)
VALUES (%(city)s, %(category)s, %(name)s, NOW(), NOW());
"""

_SELECT_LOCATIONS = """
SELECT city, category, name, created_at, updated_at FROM locations
"""


def upsert_vendor_keywords(record: Dict[str, Any]) -> None:
    """Insert or fully replace the keyword record of a vendor."""
    if not record.get("vendor_id"):
        raise ValueError("vendor_id is required for upsert")

    params = {
        "vendor_id": record["vendor_id"],
        "business_type": record.get("business_type"),
        "business_model": record.get("business_model"),
        "niche": record.get("niche"),
        "location": record.get("location"),
        "nearest_areas": list(record.get("nearest_areas") or []),
        "target_gender": record.get("target_gender"),
        "price_tier": record.get("price_tier"),
        "style_tags": list(record.get("style_tags") or []),
        "keywords": list(record.get("keywords") or []),
    }
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_UPSERT_VENDOR_KEYWORDS, params)
        conn.commit()
        logger.debug("Upserted keywords for vendor %s", params["vendor_id"])


def insert_seo_log(
    entity_id: str,
    action: str,
    inputs: Dict[str, Any],
    outputs: Dict[str, Any],
    entity: str = "vendor",
) -> None:
    """Append an audit entry to seo_logs."""
    params = {
        "entity": entity,
        "entity_id": entity_id,
        "action": action,
        "inputs": extras.Json(inputs or {}),
        "outputs": extras.Json(outputs or {}),
    }
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(_INSERT_SEO_LOG, params)
        conn.commit()


def merge_areas(existing: Iterable[str], new: Iterable[str]) -> List[str]:
    """Existing areas followed by unseen new ones."""
    merged: List[str] = []
    for area in list(existing or []) + list(new or []):
        if area not in merged:
            merged.append(area)
    return merged


def _clean_areas(areas: Iterable[Any]) -> List[str]:
    cleaned = []
    for area in areas or []:
        if isinstance(area, dict):
            area = area.get("value")
        if area is None:
            continue
        value = str(area).strip()
        if value:
            cleaned.append(value)
    return cleaned


def add_location(city: str, category: str, areas: Iterable[Any]) -> Dict[str, Any]:
    """Register areas for ``(city, category)``, merging into an existing row."""
    city = (city or "").strip()
    category = (category or "").strip()
    cleaned = _clean_areas(areas)
    if not city or not category or not cleaned:
        raise ValidationError("All fields are required")
    if category not in LOCATION_CATEGORIES:
        raise ValidationError(f"category must be one of: {', '.join(LOCATION_CATEGORIES)}")

    with get_connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(_SELECT_LOCATION_FOR_UPDATE, {"city": city, "category": category})
                existing = cur.fetchone()
                if existing:
                    location_id, current = existing
                    names = merge_areas(current, cleaned)
                    cur.execute(_UPDATE_LOCATION, {"id": location_id, "name": names})
                    logger.info("Merged %d areas into %s/%s", len(cleaned), city, category)
                else:
                    names = merge_areas([], cleaned)
                    cur.execute(_INSERT_LOCATION, {"city": city, "category": category, "name": names})
                    logger.info("Inserted %s/%s with %d areas", city, category, len(names))
            conn.commit()
        except psycopg2.Error:
            conn.rollback()
            raise

    return {"city": city, "category": category, "name": names}


def list_locations(city: Optional[str] = None) -> List[Dict[str, Any]]:
    sql = _SELECT_LOCATIONS
    params: Dict[str, Any] = {}
    if city:
        sql += " WHERE city = %(city)s"
        params["city"] = city
    sql += " ORDER BY city, category;"

    with get_connection() as conn:
        with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
            cur.execute(sql, params)
            rows = cur.fetchall()
    return [dict(row) for row in rows]
