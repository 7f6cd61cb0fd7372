from __future__ import annotations

import logging
from typing import Any

from sahayak.core.errors import malformed_output
from sahayak.core.extraction import first_image, joined_text
from sahayak.core.invoker import ModelInvoker
from sahayak.core.prompts import build_visual_aid_request

from .pipeline import call_model, use_case
from .schemas import VisualAidRequest

logger = logging.getLogger(__name__)

NO_IMAGE_MESSAGE = "no image produced"


@use_case("visual-aid-creator")
async def create_visual_aid(
    request: VisualAidRequest,
    invoker: ModelInvoker,
    model: str | None = None,
) -> dict[str, Any]:
    logger.info("Generating visual aid with model %s", model or "default")

    provider_request = build_visual_aid_request(request.description, model=model)
    response = await call_model(invoker, provider_request, "Failed to generate visual aid")

    image_url = first_image(response.parts)
    if image_url is not None:
        return {"imageUrl": image_url}

    description = joined_text(response.parts)
    if description is None:
        raise malformed_output("the reply contained neither an image nor text")

    logger.warning("Visual aid reply had no image; returning the text description")
    return {
        "imageUrl": None,
        "description": description,
        "message": NO_IMAGE_MESSAGE,
    }
