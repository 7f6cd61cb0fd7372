from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sahayak.core.extraction import split_data_uri

GameType = Literal["quiz", "matching", "word-search", "fill-blanks"]

DEFAULT_IMAGE_MIME_TYPE = "image/jpeg"
# MediaRecorder output in the browser.
DEFAULT_AUDIO_MIME_TYPE = "audio/webm"


class FunctionRequest(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ContentRequest(FunctionRequest):
    prompt: str = Field(min_length=1)
    language: str = Field(default="english", min_length=1)


class GameRequest(FunctionRequest):
    topic: str = Field(min_length=1)
    grade_level: str = Field(alias="gradeLevel", min_length=1)
    game_type: GameType = Field(default="quiz", alias="gameType")


class ExplanationRequest(FunctionRequest):
    question: str = Field(min_length=1)
    language: str = Field(default="english", min_length=1)


class LessonPlanRequest(FunctionRequest):
    subject: str = Field(min_length=1)
    grades: str = Field(min_length=1)
    topics: str = Field(min_length=1)


class WorksheetRequest(FunctionRequest):
    image_base64: str = Field(alias="imageBase64", min_length=1)
    mime_type: str | None = Field(default=None, alias="mimeType")

    @model_validator(mode="after")
    def _strip_data_uri(self) -> "WorksheetRequest":
        self.mime_type, self.image_base64 = _split_blob(
            self.image_base64, self.mime_type or DEFAULT_IMAGE_MIME_TYPE, "imageBase64"
        )
        return self


class ReadingAssessmentRequest(FunctionRequest):
    audio: str = Field(min_length=1)
    expected_text: str = Field(alias="expectedText", min_length=1)
    mime_type: str | None = Field(default=None, alias="mimeType")

    @model_validator(mode="after")
    def _strip_data_uri(self) -> "ReadingAssessmentRequest":
        self.mime_type, self.audio = _split_blob(
            self.audio, self.mime_type or DEFAULT_AUDIO_MIME_TYPE, "audio"
        )
        return self


class VisualAidRequest(FunctionRequest):
    description: str = Field(min_length=1)


def _split_blob(value: str, mime_type: str, field_name: str) -> tuple[str, str]:
    uri_mime_type, data = split_data_uri(value)
    if not data.strip():
        raise ValueError(f"{field_name} carries no data")
    return uri_mime_type or mime_type, data
