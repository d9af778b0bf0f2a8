"""Parsing of model replies into keyword lists."""

import json
import logging
import re
from typing import List

from vendor_seo.models import KeywordParseResult

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```json|```", re.IGNORECASE)
_SPLIT_RE = re.compile(r",|\n|;")
_STRIP_CHARS = " \t\r[]\"'"
MIN_FRAGMENT_LENGTH = 3


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def split_keywords(text: str) -> List[str]:
    """Delimiter split used when the reply is not a JSON array of strings."""
    keywords = []
    for fragment in _SPLIT_RE.split(text):
        keyword = fragment.strip().strip(_STRIP_CHARS)
        if len(keyword) >= MIN_FRAGMENT_LENGTH:
            keywords.append(keyword)
    return keywords


def parse_keywords(raw: str) -> KeywordParseResult:
    """Parse a model reply, trying a strict JSON array first."""
    cleaned = strip_code_fences(raw)
    try:
        parsed = json.loads(cleaned)
    except ValueError:
        parsed = None

    if isinstance(parsed, list) and all(isinstance(item, str) for item in parsed):
        keywords = [item.strip() for item in parsed if item.strip()]
        return KeywordParseResult(keywords=keywords, strict=True, raw=raw)

    logger.info("Model reply is not a JSON string array; using delimiter split")
    return KeywordParseResult(keywords=split_keywords(cleaned), strict=False, raw=raw)
