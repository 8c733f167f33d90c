"""Tests for the Google backend and the translation orchestrator."""

from __future__ import annotations

import json

import httpx
import pytest

from sindhi_translator.config import Settings
from sindhi_translator.errors import ConfigurationError, EmptySourceError, TranslationError
from sindhi_translator.translation import GoogleTranslateBackend, TranslationOrchestrator
from tests.conftest import ENGLISH, SINDHI, URDU, FakeBackend


def _ok(text: str) -> httpx.Response:
    return httpx.Response(200, json={"data": {"translations": [{"translatedText": text}]}})


def _backend(handler, **kwargs) -> GoogleTranslateBackend:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GoogleTranslateBackend("secret", client=client, retry_delay=0.0, **kwargs)


class TestGoogleTranslateBackend:
    """Test GoogleTranslateBackend against a mocked transport."""

    @pytest.mark.asyncio
    async def test_translate_sends_v2_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _ok(URDU)

        backend = _backend(handler)
        result = await backend.translate(SINDHI, "ur")

        assert result == URDU
        request = seen[0]
        assert request.method == "POST"
        assert request.url.params["key"] == "secret"
        body = json.loads(request.content)
        assert body == {"q": SINDHI, "target": "ur", "format": "text"}

    @pytest.mark.asyncio
    async def test_source_language_is_forwarded(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return _ok(ENGLISH)

        await _backend(handler).translate(SINDHI, "en", "sd")
        assert bodies[0]["source"] == "sd"

    @pytest.mark.asyncio
    async def test_missing_api_key(self) -> None:
        backend = GoogleTranslateBackend("")
        with pytest.raises(ConfigurationError):
            await backend.translate("x", "ur")
        await backend.aclose()

    @pytest.mark.asyncio
    async def test_retries_transient_status(self) -> None:
        responses = iter([httpx.Response(503), _ok(ENGLISH)])
        attempts: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return next(responses)

        result = await _backend(handler, max_retries=2).translate(SINDHI, "en")
        assert result == ENGLISH
        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self) -> None:
        attempts: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return httpx.Response(429)

        with pytest.raises(TranslationError, match="429"):
            await _backend(handler, max_retries=3).translate(SINDHI, "en")
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self) -> None:
        attempts: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            attempts.append(1)
            return httpx.Response(403, json={"error": {"message": "API key not valid"}})

        with pytest.raises(TranslationError, match="API key not valid"):
            await _backend(handler, max_retries=3).translate(SINDHI, "en")
        assert len(attempts) == 1

    @pytest.mark.asyncio
    async def test_network_error_becomes_translation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TranslationError):
            await _backend(handler, max_retries=1).translate(SINDHI, "en")

    @pytest.mark.asyncio
    async def test_last_failure_is_raised_after_retries(self) -> None:
        responses = iter([httpx.Response(503), httpx.Response(502)])

        def handler(request: httpx.Request) -> httpx.Response:
            return next(responses)

        with pytest.raises(TranslationError, match="HTTP 502"):
            await _backend(handler, max_retries=2).translate(SINDHI, "en")

    @pytest.mark.asyncio
    async def test_malformed_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": {"translations": []}})

        with pytest.raises(TranslationError, match="translatedText"):
            await _backend(handler).translate(SINDHI, "en")

    @pytest.mark.asyncio
    async def test_shared_client_is_not_closed(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: _ok("x")))
        backend = GoogleTranslateBackend("secret", client=client)
        await backend.aclose()
        assert not client.is_closed
        await client.aclose()


class TestTranslationOrchestrator:
    """Test TranslationOrchestrator."""

    @pytest.mark.asyncio
    async def test_translates_into_both_languages(self, fake_backend: FakeBackend) -> None:
        orchestrator = TranslationOrchestrator(fake_backend)
        record = await orchestrator.translate(SINDHI)

        assert record.source == SINDHI
        assert record.translation_a == URDU
        assert record.translation_b == ENGLISH
        assert sorted(call[1] for call in fake_backend.calls) == ["en", "ur"]

    @pytest.mark.asyncio
    async def test_source_is_kept_verbatim(self, fake_backend: FakeBackend) -> None:
        record = await TranslationOrchestrator(fake_backend).translate(f"  {SINDHI}\n")
        assert record.source == f"  {SINDHI}\n"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("source", [None, "", "   \n\t"])
    async def test_blank_source_is_rejected(
        self, fake_backend: FakeBackend, source: str | None
    ) -> None:
        with pytest.raises(EmptySourceError):
            await TranslationOrchestrator(fake_backend).translate(source)  # type: ignore[arg-type]
        assert fake_backend.calls == []

    @pytest.mark.asyncio
    async def test_one_failure_does_not_affect_the_other(self) -> None:
        backend = FakeBackend(failing={"ur"})
        record = await TranslationOrchestrator(backend).translate(SINDHI)
        assert record.translation_a is None
        assert record.translation_b == ENGLISH
        assert record.as_wire()["translation_a"] == ""

    @pytest.mark.asyncio
    async def test_both_failures_still_return_record(self) -> None:
        backend = FakeBackend(failing={"ur", "en"})
        record = await TranslationOrchestrator(backend).translate(SINDHI)
        assert record.source == SINDHI
        assert record.translation_a is None
        assert record.translation_b is None

    @pytest.mark.asyncio
    async def test_slow_language_times_out(self) -> None:
        backend = FakeBackend(delays={"en": 5.0})
        orchestrator = TranslationOrchestrator(backend, timeout=0.05)
        record = await orchestrator.translate(SINDHI)
        assert record.translation_a == URDU
        assert record.translation_b is None

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_absorbed(self) -> None:
        backend = FakeBackend(answers={"ur": URDU})  # "en" lookup raises KeyError
        record = await TranslationOrchestrator(backend).translate(SINDHI)
        assert record.translation_a == URDU
        assert record.translation_b is None

    def test_requires_two_targets(self, fake_backend: FakeBackend) -> None:
        with pytest.raises(ValueError):
            TranslationOrchestrator(fake_backend, ("ur",))

    @pytest.mark.asyncio
    async def test_from_settings(self, settings: Settings) -> None:
        calls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            target = json.loads(request.content)["target"]
            calls.append(target)
            return _ok(URDU if target == "ur" else ENGLISH)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        orchestrator = TranslationOrchestrator.from_settings(settings, client=client)
        record = await orchestrator.translate(SINDHI)

        assert orchestrator.target_languages == ("ur", "en")
        assert record.translation_a == URDU
        assert record.translation_b == ENGLISH
        assert sorted(calls) == ["en", "ur"]
        await client.aclose()
