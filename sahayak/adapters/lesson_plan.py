from __future__ import annotations

import logging
from typing import Any

from sahayak.core.invoker import ModelInvoker
from sahayak.core.prompts import build_lesson_plan_request

from .pipeline import generate_structured, use_case
from .schemas import LessonPlanRequest

logger = logging.getLogger(__name__)

LESSON_PLAN_KEYS = {"week": None, "days": list}


@use_case("lesson-planner")
async def plan_lessons(request: LessonPlanRequest, invoker: ModelInvoker) -> dict[str, Any]:
    logger.info("Generating lesson plan for %s, grades %s", request.subject, request.grades)

    provider_request = build_lesson_plan_request(
        request.subject, request.grades, request.topics
    )
    plan = await generate_structured(
        invoker, provider_request, LESSON_PLAN_KEYS, "Failed to generate lesson plan"
    )

    return {"lessonPlan": plan}
