from __future__ import annotations

from fastapi import APIRouter, Depends

from sahayak.core.config import Settings
from sahayak.dependencies import get_settings

router = APIRouter(prefix="/internal", tags=["internal"])


@router.get("/healthz")
async def healthz(settings: Settings = Depends(get_settings)) -> dict:
    return {
        "status": "ok",
        "providers": {
            "gateway": bool(settings.lovable_api_key),
            "gemini": bool(settings.gemini_api_key),
        },
    }
