from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Keyword arguments
    override the environment, which is how tests pin a configuration.
    """

    def __init__(self, **overrides) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY") or None
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.95"))
        self.top_p: float = float(os.getenv("MODEL_TOP_P", "0.9"))
        self.top_k: int = int(os.getenv("MODEL_TOP_K", "32"))
        self.max_output_tokens: int = int(os.getenv("MODEL_MAX_OUTPUT_TOKENS", "512"))
        self.agent_api_url: str = os.getenv("AGENT_API_URL", "http://127.0.0.1:8000")
        self.error_reset_delay: float = float(os.getenv("ERROR_RESET_DELAY", "2.5"))
        # Unset means the client waits for the agent as long as it takes.
        timeout = os.getenv("AGENT_REQUEST_TIMEOUT")
        self.agent_request_timeout: Optional[float] = float(timeout) if timeout else None

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
