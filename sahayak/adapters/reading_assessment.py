from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sahayak.core.errors import malformed_output
from sahayak.core.invoker import ModelInvoker
from sahayak.core.prompts import build_assessment_request, build_transcription_request

from .pipeline import generate_structured, generate_text, use_case
from .schemas import ReadingAssessmentRequest

logger = logging.getLogger(__name__)

REPORT_KEYS = {
    "fluency_score": None,
    "accuracy_analysis": None,
    "mistakes": list,
    "suggestions": list,
    "overall_feedback": None,
}


class Stage(str, Enum):
    AWAITING_TRANSCRIPTION = "awaiting_transcription"
    AWAITING_ANALYSIS = "awaiting_analysis"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class ReadingReport:
    transcription: str
    report: dict[str, Any]

    def to_payload(self) -> dict[str, Any]:
        return {"transcription": self.transcription, "report": self.report}


class ReadingAssessment:
    """Transcription, then analysis; a failure at either step ends in FAILED."""

    def __init__(self, invoker: ModelInvoker) -> None:
        self.invoker = invoker
        self.stage = Stage.AWAITING_TRANSCRIPTION

    async def run(self, audio_data: str, mime_type: str, expected_text: str) -> ReadingReport:
        if self.stage is not Stage.AWAITING_TRANSCRIPTION:
            raise RuntimeError(f"assessment already {self.stage.value}")

        try:
            transcription = await self._transcribe(audio_data, mime_type)
            self._advance(Stage.AWAITING_ANALYSIS)

            report = await self._analyze(expected_text, transcription)
            self._advance(Stage.DONE)
        except Exception:
            self._advance(Stage.FAILED)
            raise

        return ReadingReport(transcription=transcription, report=report)

    async def _transcribe(self, audio_data: str, mime_type: str) -> str:
        request = build_transcription_request(audio_data, mime_type)
        text = await generate_text(self.invoker, request, "Failed to transcribe audio")

        transcription = text.strip()
        if not transcription:
            raise malformed_output("the transcription was empty")
        return transcription

    async def _analyze(self, expected_text: str, transcription: str) -> dict[str, Any]:
        request = build_assessment_request(expected_text, transcription)
        return await generate_structured(
            self.invoker, request, REPORT_KEYS, "Failed to analyze reading"
        )

    def _advance(self, stage: Stage) -> None:
        logger.debug("Reading assessment %s -> %s", self.stage.value, stage.value)
        self.stage = stage


@use_case("reading-assessment")
async def assess_reading(
    request: ReadingAssessmentRequest,
    invoker: ModelInvoker,
) -> dict[str, Any]:
    logger.info(
        "Assessing reading (%s, %d base64 chars)", request.mime_type, len(request.audio)
    )

    result = await ReadingAssessment(invoker).run(
        request.audio, request.mime_type, request.expected_text
    )
    return result.to_payload()
