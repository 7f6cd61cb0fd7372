from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sahayak.core.config import Settings, load_settings
from sahayak.core.errors import ClassifiedError
from sahayak.core.invoker import ModelInvoker
from sahayak.core.providers import ChatCompletionsProfile, GenerateContentProfile

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}
ERROR_KIND_HEADER = "X-Sahayak-Error-Kind"


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def get_gateway_invoker(settings: Settings = Depends(get_settings)) -> ModelInvoker:
    return ModelInvoker(
        ChatCompletionsProfile(settings.gateway_url, settings.gateway_model),
        settings.lovable_api_key,
        timeout=settings.http_timeout,
    )


def get_gemini_invoker(settings: Settings = Depends(get_settings)) -> ModelInvoker:
    return ModelInvoker(
        GenerateContentProfile(settings.gemini_url, settings.gemini_model),
        settings.gemini_api_key,
        timeout=settings.http_timeout,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClassifiedError)
    async def handle_classified_error(
        _request: Request,
        exc: ClassifiedError,
    ) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content=exc.to_error(),
            headers={**CORS_HEADERS, ERROR_KIND_HEADER: exc.kind.value},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = exc.errors()
        if errors:
            first = errors[0]
            field = ".".join(str(item) for item in first.get("loc", ()) if item != "body")
            message = f"{field}: {first['msg']}" if field else first["msg"]
        else:
            message = "Invalid request"

        return JSONResponse(
            status_code=400,
            content={"error": message},
            headers=CORS_HEADERS,
        )
