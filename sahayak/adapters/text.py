from __future__ import annotations

import logging
from typing import Any

from sahayak.core.invoker import ModelInvoker
from sahayak.core.prompts import build_content_request, build_explanation_request

from .pipeline import generate_text, use_case
from .schemas import ContentRequest, ExplanationRequest

logger = logging.getLogger(__name__)


@use_case("content-generator")
async def generate_content(request: ContentRequest, invoker: ModelInvoker) -> dict[str, Any]:
    logger.info("Generating content in %s", request.language)

    provider_request = build_content_request(request.prompt, request.language)
    text = await generate_text(invoker, provider_request, "Failed to generate content")

    return {"generatedText": text}


@use_case("quick-explainer")
async def explain(request: ExplanationRequest, invoker: ModelInvoker) -> dict[str, Any]:
    logger.info("Generating explanation in %s", request.language)

    provider_request = build_explanation_request(request.question, request.language)
    text = await generate_text(invoker, provider_request, "Failed to generate explanation")

    return {"explanation": text}
