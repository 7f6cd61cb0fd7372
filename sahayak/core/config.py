from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev"
DEFAULT_GEMINI_URL = "https://generativelanguage.googleapis.com"
DEFAULT_GATEWAY_MODEL = "google/gemini-2.5-flash"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-exp"


@dataclass(frozen=True, slots=True)
class Settings:
    lovable_api_key: str = ""
    gemini_api_key: str = ""
    gateway_url: str = DEFAULT_GATEWAY_URL
    gemini_url: str = DEFAULT_GEMINI_URL
    gateway_model: str = DEFAULT_GATEWAY_MODEL
    gemini_model: str = DEFAULT_GEMINI_MODEL
    visual_aid_model: str | None = None
    http_timeout: float = 120.0
    log_level: str = "INFO"

    @property
    def resolved_visual_aid_model(self) -> str:
        return self.visual_aid_model or self.gemini_model


def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        lovable_api_key=os.getenv("LOVABLE_API_KEY", "").strip(),
        gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        gateway_url=os.getenv("SAHAYAK_GATEWAY_URL", DEFAULT_GATEWAY_URL).rstrip("/"),
        gemini_url=os.getenv("SAHAYAK_GEMINI_URL", DEFAULT_GEMINI_URL).rstrip("/"),
        gateway_model=os.getenv("SAHAYAK_GATEWAY_MODEL", DEFAULT_GATEWAY_MODEL),
        gemini_model=os.getenv("SAHAYAK_GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        visual_aid_model=os.getenv("SAHAYAK_VISUAL_AID_MODEL") or None,
        http_timeout=float(os.getenv("SAHAYAK_HTTP_TIMEOUT", "120")),
        log_level=os.getenv("SAHAYAK_LOG_LEVEL", "INFO").upper(),
    )
