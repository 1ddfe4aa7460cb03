"""GeminiClient — thin httpx wrapper around the ``generateContent`` endpoint.

Only transport concerns live here: request shape, timeout, status
handling, and pulling the first candidate's text out of the reply.
Interpreting that text is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL = "gemini-2.5-flash"

# Reply bodies can be large; debug logs keep a bounded prefix.
_LOG_TRUNCATE = 2000


class ExternalServiceError(Exception):
    """The external model could not produce reply text."""


class GeminiClient:
    """Synchronous client for one Gemini model.

    A *transport* may be injected (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        generation_config: dict[str, Any] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._generation_config = generation_config or {}
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/{self._model}:generateContent"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        """Request body for a single-turn text prompt."""
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                **self._generation_config,
                "responseMimeType": "application/json",
            },
        }

    def generate(self, prompt: str) -> str:
        """Send *prompt* and return the first candidate's text.

        Raises:
            httpx.HTTPError: transport failure or timeout.
            ExternalServiceError: non-success status or a reply without text.
        """
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            response = client.post(
                self.endpoint,
                headers={"x-goog-api-key": self._api_key},
                json=self.build_payload(prompt),
            )

        if response.is_error:
            msg = f"Gemini API error: {response.status_code}"
            logger.debug("%s: %s", msg, response.text[:_LOG_TRUNCATE])
            raise ExternalServiceError(msg)

        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalServiceError("Gemini reply is not JSON") from exc

        text = _first_candidate_text(data)
        if not text:
            logger.debug("Empty Gemini reply: %s", str(data)[:_LOG_TRUNCATE])
            raise ExternalServiceError("Empty response from Gemini")
        logger.debug("Gemini raw text: %s", text[:_LOG_TRUNCATE])
        return text


def _first_candidate_text(data: Any) -> str | None:
    """``candidates[0].content.parts[0].text``, or None if any step is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None
