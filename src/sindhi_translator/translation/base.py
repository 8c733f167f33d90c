"""
Base class for translation backends.

Defines the interface every external translation service must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class TranslationBackend(ABC):
    """
    Abstract base class for translation backends.

    A backend translates one text into one target language per call and
    raises TranslationError (or a subclass) on any failure.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logging and identification."""
        ...

    @abstractmethod
    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        """
        Translate a single text.

        Args:
            text: Text to translate.
            target_language: Target language code ("ur", "en").
            source_language: Source language code, or None to auto-detect.

        Returns:
            Translated text.

        Raises:
            TranslationError: On any failure.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources held by the backend."""
        return None
