from __future__ import annotations

import logging
from typing import Any

from sahayak.core.invoker import ModelInvoker
from sahayak.core.parsing import require_keys
from sahayak.core.prompts import GAME_CONTENT_KEYS, build_game_request

from .pipeline import generate_structured, use_case
from .schemas import GameRequest

logger = logging.getLogger(__name__)

GAME_KEYS = {"title": None, "instructions": None, "content": dict}


@use_case("game-generator")
async def generate_game(request: GameRequest, invoker: ModelInvoker) -> dict[str, Any]:
    logger.info(
        "Generating %s game for grade %s", request.game_type, request.grade_level
    )

    provider_request = build_game_request(
        request.topic, request.grade_level, request.game_type
    )
    game = await generate_structured(
        invoker, provider_request, GAME_KEYS, "Failed to generate game"
    )
    # The client renders one list per game type; without it there is nothing to play.
    require_keys(
        game["content"], {GAME_CONTENT_KEYS[request.game_type]: list}, where="content"
    )

    return {"game": game}
