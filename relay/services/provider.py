"""Adapter for the Gemini ``generateContent`` endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from relay.config import Settings
from relay.exceptions import ProviderError, ProviderErrorKind

logger = logging.getLogger(__name__)

class GeminiService:
    """Wrapper around Gemini's single-shot content generation."""

    _endpoint = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        self._client = client
        self._settings = settings

    async def generate(self, question: str) -> str:
        """Ask the configured model a single question and return its text answer."""

        model = self._settings.gemini_model
        if not self._settings.gemini_api_key:
            raise ProviderError.of_kind(
                ProviderErrorKind.INVALID_CREDENTIAL, detail="GEMINI_API_KEY is not set"
            )

        payload = {
            "contents": [{"role": "user", "parts": [{"text": question}]}],
            "generationConfig": {
                "temperature": self._settings.temperature,
                "maxOutputTokens": self._settings.max_output_tokens,
            },
        }

        headers = {
            "x-goog-api-key": self._settings.gemini_api_key,
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self._endpoint.format(model=model),
                headers=headers,
                json=payload,
                timeout=self._settings.provider_timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            message, status = _error_fields(exc.response)
            logger.error(
                "Gemini request failed",
                extra={
                    "status_code": status_code,
                    "provider_status": status,
                    "response_text": exc.response.text,
                },
            )
            raise ProviderError.of_kind(
                classify_failure(status_code, message, status),
                model=model,
                status_code=status_code,
                detail=message or exc.response.text,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.exception("Unexpected Gemini HTTP error")
            raise ProviderError.of_kind(ProviderErrorKind.GENERIC, detail=str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Gemini returned non-JSON body", extra={"response_text": response.text})
            raise ProviderError.of_kind(
                ProviderErrorKind.GENERIC, detail="Invalid provider response payload"
            ) from exc

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            logger.error("Malformed Gemini response", extra={"raw_response": data})
            raise ProviderError.of_kind(
                ProviderErrorKind.GENERIC, detail="Invalid provider response payload"
            ) from exc

        if not text:
            raise ProviderError.of_kind(
                ProviderErrorKind.GENERIC, detail="Provider returned empty content"
            )

        return text


def classify_failure(status_code: int, message: str, status: str = "") -> ProviderErrorKind:
    """Map a provider HTTP failure onto the relay's error taxonomy.

    Checked in order: a 404 is always a missing model, then a message naming
    the API key wins over any quota signal, whatever the status code.
    """

    lowered = message.lower()
    if status_code == 404:
        return ProviderErrorKind.MODEL_NOT_FOUND
    if "api key" in lowered:
        return ProviderErrorKind.INVALID_CREDENTIAL
    if status_code == 429 or status == "RESOURCE_EXHAUSTED" or "quota" in lowered:
        return ProviderErrorKind.QUOTA_EXCEEDED
    return ProviderErrorKind.GENERIC


def _error_fields(response: httpx.Response) -> tuple[str, str]:
    """Pull ``error.message`` and ``error.status`` out of a Google API error body."""

    try:
        body: Any = response.json()
    except ValueError:
        return "", ""

    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return "", ""

    return str(error.get("message") or ""), str(error.get("status") or "")
