"""
Google Cloud Translation (v2 REST) backend.

Talks to the public REST endpoint with an API key using httpx.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from sindhi_translator.errors import ConfigurationError, TranslationError
from sindhi_translator.translation.base import TranslationBackend

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://translation.googleapis.com/language/translate/v2"
_RETRYABLE_STATUSES = {429, 500, 502, 503, 504}


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message", ""))
    return str(body)[:200]


def _parse_translation(response: httpx.Response) -> str:
    """Pull translatedText out of a v2 response body."""
    try:
        body: Any = response.json()
    except ValueError:
        raise TranslationError("Google Translate returned a non-JSON body") from None

    try:
        translated = body["data"]["translations"][0]["translatedText"]
    except (KeyError, IndexError, TypeError):
        raise TranslationError("Google Translate response has no translatedText") from None

    if not isinstance(translated, str):
        raise TranslationError("Google Translate returned a non-string translation")
    return translated


class GoogleTranslateBackend(TranslationBackend):
    """
    Google Translate backend.

    Requires a Cloud Translation API key. Retries on rate limiting and
    transient server errors with exponential backoff; other HTTP errors
    fail immediately.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        max_retries: int = 2,
        retry_delay: float = 0.5,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the backend.

        Args:
            api_key: Cloud Translation API key.
            base_url: v2 endpoint URL.
            timeout: Per-request timeout in seconds.
            max_retries: Attempts per translation.
            retry_delay: Base delay for exponential backoff, in seconds.
            client: Shared HTTP client. One is created (and owned) if omitted.
        """
        self._api_key = api_key
        self._base_url = base_url
        self._max_retries = max(1, max_retries)
        self._retry_delay = retry_delay
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "google"

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        if not self._api_key:
            raise ConfigurationError("Google Translate API key is not configured")

        payload = {"q": text, "target": target_language, "format": "text"}
        if source_language:
            payload["source"] = source_language

        last_error = TranslationError("Google Translate request was not attempted")
        for attempt in range(self._max_retries):
            try:
                response = await self._client.post(
                    self._base_url,
                    params={"key": self._api_key},
                    json=payload,
                )
            except httpx.HTTPError as e:
                last_error = TranslationError(f"Google Translate request failed: {e!r}")
            else:
                if response.status_code in _RETRYABLE_STATUSES:
                    last_error = TranslationError(
                        f"Google Translate returned HTTP {response.status_code}"
                    )
                elif response.is_error:
                    raise TranslationError(
                        f"Google Translate returned HTTP {response.status_code}: "
                        f"{_error_detail(response)}"
                    )
                else:
                    return _parse_translation(response)

            if attempt < self._max_retries - 1:
                logger.debug(
                    "Retrying %s translation (attempt %d): %s",
                    target_language,
                    attempt + 2,
                    last_error,
                )
                await asyncio.sleep(self._retry_delay * 2**attempt)

        raise last_error

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
