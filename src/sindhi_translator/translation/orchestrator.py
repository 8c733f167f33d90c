"""
Translation orchestration.

Fans a source text out to the translation backend once per target language
and assembles the results into a TranslationRecord. A failure for one
language never affects the other and never reaches the caller.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sindhi_translator.errors import EmptySourceError
from sindhi_translator.models import TranslationRecord
from sindhi_translator.translation.base import TranslationBackend

if TYPE_CHECKING:
    import httpx

    from sindhi_translator.config import Settings

logger = logging.getLogger(__name__)


class TranslationOrchestrator:
    """Translates source text into the two configured target languages."""

    def __init__(
        self,
        backend: TranslationBackend,
        target_languages: Sequence[str] = ("ur", "en"),
        *,
        source_language: str | None = None,
        timeout: float = 15.0,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            backend: Translation backend used for every call.
            target_languages: Exactly two language codes, for translation_a and translation_b.
            source_language: Source language code, or None to let the backend detect it.
            timeout: Upper bound in seconds for each per-language call, retries included.
        """
        if len(target_languages) != 2:
            raise ValueError(f"Expected two target languages, got {list(target_languages)}")
        self.backend = backend
        self.target_languages = tuple(target_languages)
        self.source_language = source_language
        self.timeout = timeout

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: httpx.AsyncClient | None = None,
    ) -> TranslationOrchestrator:
        """Build an orchestrator backed by Google Translate from settings."""
        from sindhi_translator.translation.google import GoogleTranslateBackend

        config = settings.translation
        backend = GoogleTranslateBackend(
            config.api_key,
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            client=client,
        )
        return cls(
            backend,
            settings.languages.target_languages,
            source_language=config.source_language,
            timeout=config.timeout_seconds,
        )

    async def translate(self, source: str) -> TranslationRecord:
        """
        Translate source text into both target languages concurrently.

        Args:
            source: Non-blank source text. Kept verbatim in the record.

        Returns:
            TranslationRecord; a translation field is None when its call failed.

        Raises:
            EmptySourceError: If source is missing or blank.
        """
        if source is None or not source.strip():
            raise EmptySourceError()

        translation_a, translation_b = await asyncio.gather(
            *(self._translate_one(source, language) for language in self.target_languages)
        )
        return TranslationRecord(
            source=source,
            translation_a=translation_a,
            translation_b=translation_b,
        )

    async def _translate_one(self, source: str, language: str) -> str | None:
        """Translate into one language, absorbing every failure into None."""
        try:
            return await asyncio.wait_for(
                self.backend.translate(source, language, self.source_language),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Translation to %s via %s timed out after %.1fs",
                language,
                self.backend.name,
                self.timeout,
            )
        except Exception as e:
            logger.warning(
                "Translation to %s via %s failed: %s: %s",
                language,
                self.backend.name,
                type(e).__name__,
                e,
            )
        return None

    async def aclose(self) -> None:
        await self.backend.aclose()
