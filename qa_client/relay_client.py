"""HTTP client for the relay's ask endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from qa_client.config import ClientSettings
from qa_client.errors import RelayRequestError

logger = logging.getLogger(__name__)


class RelayClient:
    """Posts questions to the relay and turns every failure into a :class:`RelayRequestError`."""

    def __init__(self, client: httpx.AsyncClient, settings: ClientSettings) -> None:
        self._client = client
        self._settings = settings

    async def ask(self, question: str) -> str:
        """Send one question and return the relay's answer."""

        try:
            response = await self._client.post(
                self._settings.relay_url,
                json={"question": question},
                timeout=self._settings.request_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Relay request timed out after %.0fs", self._settings.request_timeout)
            raise RelayRequestError.timeout() from exc
        except httpx.HTTPStatusError as exc:
            error = _relay_error(exc.response)
            logger.warning(
                "Relay returned %d: %s", exc.response.status_code, error or exc.response.text
            )
            if error is None:
                raise RelayRequestError.unclassified() from exc
            raise RelayRequestError.from_relay(error) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Relay request failed: %s", exc)
            raise RelayRequestError.unclassified() from exc

        try:
            answer = response.json()["answer"]
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Malformed relay response: %s", response.text)
            raise RelayRequestError.unclassified() from exc

        if not isinstance(answer, str):
            raise RelayRequestError.unclassified()

        return answer


def _relay_error(response: httpx.Response) -> str | None:
    """Return the ``error`` field of a relay failure body, if it has one."""

    try:
        body: Any = response.json()
    except ValueError:
        return None

    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return None
