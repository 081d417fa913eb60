# backend/src/core/config.py

import os
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

# ------------------------------------------------------------
# Ensure environment is loaded early
# ------------------------------------------------------------
load_dotenv()

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"


class Settings(BaseModel):
    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_base: str = DEFAULT_GEMINI_API_BASE
    gemini_timeout: float | None = None   # None = wait as long as the upstream takes
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key)


def _split_csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def load_settings() -> Settings:
    """Build Settings from the process environment (and .env, if present)."""
    timeout = os.getenv("GEMINI_TIMEOUT", "").strip()
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        gemini_api_base=os.getenv("GEMINI_API_BASE", DEFAULT_GEMINI_API_BASE).rstrip("/"),
        gemini_timeout=float(timeout) if timeout else None,
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")) or ["*"],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
