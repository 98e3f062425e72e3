from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from llm.providers.base import LLMProvider
from study_planner.config import AppConfig
from study_planner.errors import MalformedResponse

logger = logging.getLogger(__name__)

# Greedy on purpose: first "{" to the last "}" in the text, even when the
# prose around the payload contains braces of its own.
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def extract_json_object(text: str) -> dict[str, Any]:
    """Locate and parse the JSON object embedded in model output."""
    if not text:
        raise MalformedResponse("model returned empty text")

    match = _JSON_OBJECT.search(text)
    if match is None:
        raise MalformedResponse("no JSON object in model output")

    try:
        parsed = json.loads(match.group(0))
    except ValueError as e:
        raise MalformedResponse(f"invalid JSON in model output: {e}") from e

    if not isinstance(parsed, dict):
        raise MalformedResponse("model output is not a JSON object")
    return parsed


def build_provider(config: AppConfig) -> LLMProvider:
    if config.llm_provider == "mock":
        from llm.providers.mock_provider import MockProvider

        return MockProvider()
    if config.llm_provider == "gemini":
        from llm.providers.gemini_provider import GeminiProvider

        return GeminiProvider(config.gemini)
    raise ValueError(f"Unknown LLM_PROVIDER: {config.llm_provider!r}")


class LLMClient:
    """Thin layer over a provider: raw completion plus JSON location."""

    def __init__(self, provider: Optional[LLMProvider] = None, config: Optional[AppConfig] = None):
        if provider is None:
            provider = build_provider(config or AppConfig())
        self.provider = provider

    def complete(self, prompt: str) -> str:
        return self.provider.generate(prompt)

    def complete_json(self, prompt: str) -> dict[str, Any]:
        text = self.complete(prompt)
        if not text:
            logger.info("Model reached but returned no text")
        return extract_json_object(text)
