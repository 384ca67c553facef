from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()


DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000,"
    "http://localhost:8080,"
    "https://modelday-flutter-web-v2.vercel.app,"
    "https://modelday-frontend.vercel.app"
)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY") or None

        self.chat_model: str = os.getenv("CHAT_MODEL", "gemini-2.0-flash")
        self.chat_temperature: float = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
        self.chat_top_p: float = float(os.getenv("CHAT_TOP_P", "1.0"))
        self.chat_max_tokens: int = int(os.getenv("CHAT_MAX_TOKENS", "1000"))

        self.extraction_model: str = os.getenv("EXTRACTION_MODEL", "gemini-2.0-flash")
        self.extraction_temperature: float = float(os.getenv("EXTRACTION_TEMPERATURE", "0.1"))
        self.extraction_max_tokens: int = int(os.getenv("EXTRACTION_MAX_TOKENS", "2000"))

        self.max_message_chars: int = int(os.getenv("MAX_MESSAGE_CHARS", "4000"))
        self.max_history_turns: int = int(os.getenv("MAX_HISTORY_TURNS", "20"))
        self.cors_origins: List[str] = _split_csv(os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
