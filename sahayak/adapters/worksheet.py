from __future__ import annotations

import logging
from typing import Any

from sahayak.core.invoker import ModelInvoker
from sahayak.core.prompts import build_worksheet_request

from .pipeline import generate_structured, use_case
from .schemas import WorksheetRequest

logger = logging.getLogger(__name__)

WORKSHEET_KEYS = {"worksheets": list}


@use_case("worksheet-differentiator")
async def differentiate_worksheet(
    request: WorksheetRequest,
    invoker: ModelInvoker,
) -> dict[str, Any]:
    logger.info(
        "Analyzing textbook page (%s, %d base64 chars)",
        request.mime_type,
        len(request.image_base64),
    )

    provider_request = build_worksheet_request(request.image_base64, request.mime_type)
    parsed = await generate_structured(
        invoker, provider_request, WORKSHEET_KEYS, "Failed to analyze textbook page"
    )

    return {"worksheets": parsed["worksheets"]}
