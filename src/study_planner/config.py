from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str = ""
    model: str = DEFAULT_GEMINI_MODEL
    base_url: str = DEFAULT_GEMINI_BASE_URL

    @classmethod
    def from_env(cls) -> "GeminiConfig":
        return cls(
            api_key=os.getenv("GEMINI_API_KEY", "").strip(),
            model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL).strip(),
            base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL).strip().rstrip("/"),
        )


@dataclass(frozen=True)
class AppConfig:
    """Process-wide settings, read once at startup and passed down explicitly."""

    llm_provider: str = "gemini"
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    data_dir: str = "data"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "gemini").strip().lower(),
            gemini=GeminiConfig.from_env(),
            data_dir=os.getenv("PLANNER_DATA_DIR", "data").strip(),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        )
