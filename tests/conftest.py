"""Shared fixtures for sindhi-translator tests."""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path

import pytest

from sindhi_translator.config import Settings
from sindhi_translator.errors import TranslationError
from sindhi_translator.models import TranslationRecord
from sindhi_translator.translation.base import TranslationBackend

FIXED_TIME = datetime(2024, 5, 17, 9, 30, 0)

SINDHI = "توهان جو نالو ڇا آهي؟"
URDU = "آپ کا نام کیا ہے؟"
ENGLISH = "What's your name?"


class FakeBackend(TranslationBackend):
    """In-memory backend: canned answers per language, failures on demand."""

    def __init__(
        self,
        answers: dict[str, str] | None = None,
        failing: set[str] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self.answers = answers or {"ur": URDU, "en": ENGLISH}
        self.failing = failing or set()
        self.delays = delays or {}
        self.calls: list[tuple[str, str, str | None]] = []
        self.closed = False

    @property
    def name(self) -> str:
        return "fake"

    async def translate(
        self,
        text: str,
        target_language: str,
        source_language: str | None = None,
    ) -> str:
        self.calls.append((text, target_language, source_language))
        if target_language in self.delays:
            await asyncio.sleep(self.delays[target_language])
        if target_language in self.failing:
            raise TranslationError(f"{target_language} unavailable")
        return self.answers[target_language]

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted in a temporary directory."""
    return Settings(
        paths={
            "exports_dir": tmp_path / "exports",
            "uploads_dir": tmp_path / "uploads",
            "fonts_dir": tmp_path / "fonts",
            "static_dir": tmp_path / "public",
        },
        translation={"api_key": "test-key", "timeout_seconds": 2.0, "retry_delay": 0.0},
    )


@pytest.fixture
def full_record() -> TranslationRecord:
    return TranslationRecord(source=SINDHI, translation_a=URDU, translation_b=ENGLISH)


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()
