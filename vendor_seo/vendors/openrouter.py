"""OpenRouter chat-completion gateway rotating over API keys and models.

Keys are scanned per model: every key is tried for the first model before the
next model is attempted. Rate-limit (429) and insufficient-credit (402)
responses, timeouts and connection errors move on to the next combination.
Any other error status aborts the whole call with the provider's message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

import requests

from vendor_seo.core.config import get_settings
from vendor_seo.etl.keywords import parse_keywords
from vendor_seo.models import KeywordParseResult

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://openrouter.ai/api/v1/chat/completions"
SOFT_FAILURE_STATUSES = {402, 429}


class OpenRouterError(RuntimeError):
    """Raised when OpenRouter rejects a request with a non-quota error."""


class ExhaustedProvidersError(RuntimeError):
    """Raised when every key/model combination failed."""


@dataclass
class RotationCursor:
    """Index of the last key that produced a successful completion.

    Shared by every request handled through the same gateway. Reads and writes
    are not synchronised, so concurrent requests may start from a stale index;
    that only changes which key is tried first.
    """

    index: int = 0

    def start(self, total: int) -> int:
        return self.index % total if total else 0

    def remember(self, index: int) -> None:
        self.index = index


class KeywordGateway:
    def __init__(
        self,
        api_keys: Sequence[str],
        models: Sequence[str],
        cursor: Optional[RotationCursor] = None,
        timeout: float = 20.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_keys = [key for key in api_keys if key]
        self.models = list(models)
        self.cursor = cursor or RotationCursor()
        self.timeout = timeout
        self._session = session

    @property
    def session(self) -> requests.Session:
        return self._session or _SESSION

    def _post(self, model: str, key: str, system_prompt: str, user_prompt: str) -> requests.Response:
        return self.session.post(
            _BASE_URL,
            headers={"Authorization": f"Bearer {key}", "Content-Type": "application/json"},
            json={
                "model": model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            },
            timeout=self.timeout,
        )

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Return the raw text of the first successful completion."""
        total = len(self.api_keys)
        if total == 0:
            raise ExhaustedProvidersError("No API keys provided")

        start = self.cursor.start(total)
        for model in self.models:
            for offset in range(total):
                key_index = (start + offset) % total
                logger.info("Trying model=%s with keyIndex=%d", model, key_index)
                try:
                    response = self._post(model, self.api_keys[key_index], system_prompt, user_prompt)
                except requests.RequestException as exc:
                    logger.warning("Request failed model=%s keyIndex=%d: %s", model, key_index, exc)
                    continue

                if response.status_code in SOFT_FAILURE_STATUSES:
                    logger.warning(
                        "Quota response model=%s keyIndex=%d status=%s",
                        model,
                        key_index,
                        response.status_code,
                    )
                    continue

                data = _json_or_empty(response)
                if not response.ok:
                    message = _error_message(data) or f"OpenRouter returned status {response.status_code}"
                    logger.error("OpenRouter error model=%s keyIndex=%d: %s", model, key_index, message)
                    raise OpenRouterError(message)

                self.cursor.remember(key_index)
                content = _message_content(data)
                if not content:
                    logger.warning("Empty completion from model=%s keyIndex=%d", model, key_index)
                logger.debug("AI raw content: %s", content)
                return content

        raise ExhaustedProvidersError("All keys and models failed. Please add more keys or retry later.")

    def generate(self, system_prompt: str, user_prompt: str) -> KeywordParseResult:
        return parse_keywords(self.complete(system_prompt, user_prompt))


def _json_or_empty(response: requests.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _error_message(data: Dict[str, Any]) -> Optional[str]:
    error = data.get("error")
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return None


def _message_content(data: Dict[str, Any]) -> str:
    choices = data.get("choices") or []
    if not choices:
        return ""
    message = (choices[0] or {}).get("message") or {}
    return message.get("content") or ""


@lru_cache(maxsize=1)
def get_gateway() -> KeywordGateway:
    """Process-wide gateway; owns the rotation cursor shared across requests."""
    settings = get_settings()
    return KeywordGateway(
        api_keys=settings.openrouter_api_keys,
        models=settings.openrouter_models,
        timeout=settings.ai_timeout_seconds,
    )


def generate_keywords(
    system_prompt: str,
    user_prompt: str,
    gateway: Optional[KeywordGateway] = None,
) -> List[str]:
    return (gateway or get_gateway()).generate(system_prompt, user_prompt).keywords
