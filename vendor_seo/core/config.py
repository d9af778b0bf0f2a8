"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

MAX_NUMBERED_KEYS = 11
DEFAULT_MODELS = (
    "google/gemini-2.0-flash-exp:free:online",
    "mistralai/mistral-small-3.2-24b-instruct:free:online",
    "deepseek/deepseek-r1-distill-llama-70b:free:online",
    "meta-llama/llama-3.3-70b-instruct:free:online",
)


@dataclass(frozen=True)
class Settings:
    database_url: str
    openrouter_api_keys: Tuple[str, ...] = ()
    openrouter_models: Tuple[str, ...] = DEFAULT_MODELS
    geocoder_country: str = "nigeria"
    user_agent: str = "seo-keyword-service/1.0"
    competitor_radius_meters: int = 20000
    ai_timeout_seconds: float = 20.0
    port: int = 8080


def _split_csv(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _load_api_keys() -> Tuple[str, ...]:
    keys = []
    for index in range(MAX_NUMBERED_KEYS):
        value = os.getenv(f"OPENROUTER_API_KEY_{index}", "").strip()
        if value:
            keys.append(value)
    for value in _split_csv(os.getenv("OPENROUTER_API_KEYS", "")):
        if value not in keys:
            keys.append(value)
    return tuple(keys)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    database_url = os.getenv("DATABASE_URL", "")
    api_keys = _load_api_keys()
    models = _split_csv(os.getenv("OPENROUTER_MODELS", "")) or DEFAULT_MODELS
    geocoder_country = os.getenv("GEOCODER_COUNTRY", "nigeria").strip() or "nigeria"
    user_agent = os.getenv("HTTP_USER_AGENT", "seo-keyword-service/1.0")
    radius = int(os.getenv("COMPETITOR_RADIUS_METERS", "20000"))
    ai_timeout = float(os.getenv("AI_TIMEOUT_SECONDS", "20"))
    port = int(os.getenv("PORT", "8080"))

    if not database_url:
        logger.warning("DATABASE_URL is not set; database operations will fail.")
    if not api_keys:
        logger.warning("No OPENROUTER_API_KEY_* configured; keyword generation will fail.")

    return Settings(
        database_url=database_url,
        openrouter_api_keys=api_keys,
        openrouter_models=models,
        geocoder_country=geocoder_country,
        user_agent=user_agent,
        competitor_radius_meters=radius,
        ai_timeout_seconds=ai_timeout,
        port=port,
    )
