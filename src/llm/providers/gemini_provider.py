from __future__ import annotations

import logging
from typing import Optional

import httpx

from study_planner.config import GeminiConfig
from study_planner.errors import ConfigurationError, RemoteUnavailable
from .base import LLMProvider

logger = logging.getLogger(__name__)


class GeminiProvider(LLMProvider):
    """Calls the Gemini ``generateContent`` endpoint once per prompt.

    No retries and no timeout beyond the httpx defaults. An injected
    ``client`` is used as-is (tests pass one built on ``httpx.MockTransport``).
    """

    def __init__(self, config: GeminiConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.config.base_url}/models/{self.config.model}:generateContent"

    def generate(self, prompt: str) -> str:
        if not self.config.api_key:
            raise ConfigurationError("GEMINI_API_KEY is missing")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        params = {"key": self.config.api_key}

        logger.debug(f"Calling Gemini model {self.config.model}")
        try:
            if self._client is not None:
                r = self._client.post(self.url, params=params, json=payload)
            else:
                with httpx.Client() as client:
                    r = client.post(self.url, params=params, json=payload)
        except httpx.HTTPError as e:
            raise RemoteUnavailable(f"Gemini request failed: {e}") from e

        if not r.is_success:
            raise RemoteUnavailable(
                f"Gemini API error: {r.status_code}", status_code=r.status_code
            )

        try:
            data = r.json()
        except ValueError as e:
            raise RemoteUnavailable("Gemini response is not JSON") from e

        return _first_text(data)


def _first_text(data) -> str:
    """candidates[0].content.parts[0].text, or "" when any step is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""
