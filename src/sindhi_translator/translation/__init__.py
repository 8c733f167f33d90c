"""
Translation of source text into the configured target languages.

Provides:
- TranslationBackend interface and the Google Translate implementation
- TranslationOrchestrator, which isolates per-language failures
"""

from sindhi_translator.translation.base import TranslationBackend
from sindhi_translator.translation.google import GoogleTranslateBackend
from sindhi_translator.translation.orchestrator import TranslationOrchestrator

__all__ = ["TranslationBackend", "GoogleTranslateBackend", "TranslationOrchestrator"]
