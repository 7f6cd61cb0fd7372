from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from sahayak.adapters.game import generate_game
from sahayak.adapters.lesson_plan import plan_lessons
from sahayak.adapters.reading_assessment import assess_reading
from sahayak.adapters.schemas import (
    ContentRequest,
    ExplanationRequest,
    GameRequest,
    LessonPlanRequest,
    ReadingAssessmentRequest,
    VisualAidRequest,
    WorksheetRequest,
)
from sahayak.adapters.text import explain, generate_content
from sahayak.adapters.visual_aid import create_visual_aid
from sahayak.adapters.worksheet import differentiate_worksheet
from sahayak.core.config import Settings
from sahayak.core.invoker import ModelInvoker
from sahayak.dependencies import (
    CORS_HEADERS,
    get_gateway_invoker,
    get_gemini_invoker,
    get_settings,
)

router = APIRouter(prefix="/functions/v1", tags=["functions"])

FUNCTION_NAMES = frozenset(
    {
        "content-generator",
        "game-generator",
        "quick-explainer",
        "lesson-planner",
        "worksheet-differentiator",
        "reading-assessment",
        "visual-aid-creator",
    }
)


def _ok(payload: dict[str, Any]) -> JSONResponse:
    return JSONResponse(content=payload, headers=CORS_HEADERS)


@router.options("/{function_name}")
async def preflight(function_name: str) -> Response:
    if function_name not in FUNCTION_NAMES:
        raise HTTPException(status_code=404, detail="Not Found")
    return Response(status_code=200, headers=CORS_HEADERS)


@router.post("/content-generator")
async def content_generator(
    payload: ContentRequest,
    invoker: ModelInvoker = Depends(get_gateway_invoker),
):
    return _ok(await generate_content(payload, invoker))


@router.post("/game-generator")
async def game_generator(
    payload: GameRequest,
    invoker: ModelInvoker = Depends(get_gateway_invoker),
):
    return _ok(await generate_game(payload, invoker))


@router.post("/quick-explainer")
async def quick_explainer(
    payload: ExplanationRequest,
    invoker: ModelInvoker = Depends(get_gateway_invoker),
):
    return _ok(await explain(payload, invoker))


@router.post("/lesson-planner")
async def lesson_planner(
    payload: LessonPlanRequest,
    invoker: ModelInvoker = Depends(get_gemini_invoker),
):
    return _ok(await plan_lessons(payload, invoker))


@router.post("/worksheet-differentiator")
async def worksheet_differentiator(
    payload: WorksheetRequest,
    invoker: ModelInvoker = Depends(get_gemini_invoker),
):
    return _ok(await differentiate_worksheet(payload, invoker))


@router.post("/reading-assessment")
async def reading_assessment(
    payload: ReadingAssessmentRequest,
    invoker: ModelInvoker = Depends(get_gateway_invoker),
):
    return _ok(await assess_reading(payload, invoker))


@router.post("/visual-aid-creator")
async def visual_aid_creator(
    payload: VisualAidRequest,
    invoker: ModelInvoker = Depends(get_gemini_invoker),
    settings: Settings = Depends(get_settings),
):
    return _ok(
        await create_visual_aid(payload, invoker, model=settings.resolved_visual_aid_model)
    )
