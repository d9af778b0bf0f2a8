"""Client utilities for the DuckDuckGo autosuggest endpoint."""

import logging
from typing import Any, List

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://duckduckgo.com/ac/"
REQUEST_TIMEOUT = 10


class DuckDuckGoError(RuntimeError):
    """Raised when the autosuggest endpoint returns a non-successful response."""


def autosuggest(query: str) -> List[str]:
    """Return the suggested phrases for ``query`` in service order."""
    response = _SESSION.get(_BASE_URL, params={"q": query}, timeout=REQUEST_TIMEOUT)
    if not response.ok:
        logger.warning("autosuggest failed: query=%s status=%s", query, response.status_code)
        raise DuckDuckGoError(f"autosuggest returned status {response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise DuckDuckGoError(f"autosuggest returned a non-JSON body for {query}") from exc
    return _extract_phrases(payload)


def _extract_phrases(payload: Any) -> List[str]:
    """Accept both the '{phrase}' object list and the OpenSearch '[query, [..]]' shape."""
    if not isinstance(payload, list):
        return []
    if len(payload) == 2 and isinstance(payload[0], str) and isinstance(payload[1], list):
        items: List[Any] = payload[1]
    else:
        items = payload

    phrases = []
    for item in items:
        phrase = item.get("phrase") if isinstance(item, dict) else item
        if isinstance(phrase, str) and phrase.strip():
            phrases.append(phrase.strip())
    return phrases
