import json

import httpx
import pytest

from relay.config import Settings
from relay.exceptions import ProviderError, ProviderErrorKind
from relay.services.provider import GeminiService, classify_failure


@pytest.fixture
def settings() -> Settings:
    return Settings()


def _google_error(status_code: int, message: str, status: str) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={"error": {"code": status_code, "message": message, "status": status}},
    )


async def _generate(settings: Settings, handler) -> str:
    transport = httpx.MockTransport(handler)
    async with httpx.AsyncClient(transport=transport) as client:
        return await GeminiService(client, settings).generate("What is 2+2?")


@pytest.mark.asyncio
async def test_provider_success(settings: Settings) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/models/gemini-2.0-flash:generateContent")
        assert request.headers["x-goog-api-key"] == "test-key"
        payload = json.loads(request.content.decode())
        assert payload["contents"] == [{"role": "user", "parts": [{"text": "What is 2+2?"}]}]
        assert payload["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 1000}
        return httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"text": "4"}], "role": "model"}}]},
        )

    assert await _generate(settings, handler) == "4"


@pytest.mark.asyncio
async def test_provider_joins_text_parts(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"text": "The answer "}, {"text": "is 4."}]}}]},
        )

    assert await _generate(settings, handler) == "The answer is 4."


@pytest.mark.asyncio
async def test_provider_quota_exceeded(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return _google_error(429, "You exceeded your current quota.", "RESOURCE_EXHAUSTED")

    with pytest.raises(ProviderError) as exc:
        await _generate(settings, handler)

    assert exc.value.kind is ProviderErrorKind.QUOTA_EXCEEDED
    assert exc.value.message == "API quota exceeded"
    assert exc.value.status_code == 429
    assert exc.value.detail == "You exceeded your current quota."


@pytest.mark.asyncio
async def test_provider_invalid_key(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return _google_error(400, "API key not valid. Please pass a valid API key.", "INVALID_ARGUMENT")

    with pytest.raises(ProviderError) as exc:
        await _generate(settings, handler)

    assert exc.value.kind is ProviderErrorKind.INVALID_CREDENTIAL
    assert exc.value.message == "Invalid API key - check your .env file"


@pytest.mark.asyncio
async def test_provider_missing_key_skips_request(settings: Settings) -> None:
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    with pytest.raises(ProviderError) as exc:
        await _generate(settings.model_copy(update={"gemini_api_key": ""}), handler)

    assert exc.value.kind is ProviderErrorKind.INVALID_CREDENTIAL
    assert calls == []


@pytest.mark.asyncio
async def test_provider_model_not_found(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return _google_error(404, "models/gemini-2.0-flash is not found", "NOT_FOUND")

    with pytest.raises(ProviderError) as exc:
        await _generate(settings, handler)

    assert exc.value.kind is ProviderErrorKind.MODEL_NOT_FOUND
    assert exc.value.message == "Model not found. Ensure you have access to gemini-2.0-flash"


@pytest.mark.asyncio
async def test_provider_transport_failure(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused")

    with pytest.raises(ProviderError) as exc:
        await _generate(settings, handler)

    assert exc.value.kind is ProviderErrorKind.GENERIC
    assert exc.value.message == "Failed to process question"


@pytest.mark.asyncio
async def test_provider_bad_payload(settings: Settings) -> None:
    async def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"unexpected": "structure"})

    with pytest.raises(ProviderError) as exc:
        await _generate(settings, handler)

    assert exc.value.kind is ProviderErrorKind.GENERIC


def test_classify_failure_falls_back_to_generic() -> None:
    assert classify_failure(500, "Internal error", "INTERNAL") is ProviderErrorKind.GENERIC
    assert classify_failure(403, "Permission denied on resource", "PERMISSION_DENIED") is (
        ProviderErrorKind.GENERIC
    )
    assert classify_failure(400, "Quota exceeded for metric") is ProviderErrorKind.QUOTA_EXCEEDED


def test_classify_failure_prefers_api_key_over_quota() -> None:
    assert classify_failure(429, "API key quota exhausted", "RESOURCE_EXHAUSTED") is (
        ProviderErrorKind.INVALID_CREDENTIAL
    )
    assert classify_failure(500, "API key expired") is ProviderErrorKind.INVALID_CREDENTIAL
    assert classify_failure(404, "API key not valid") is ProviderErrorKind.MODEL_NOT_FOUND
