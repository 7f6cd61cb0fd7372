from __future__ import annotations

import json
from typing import Any

import httpx

from .errors import ClassifiedError, ErrorKind, malformed_output
from .types import ProviderResponse

QUOTA_EXHAUSTED_MESSAGE = (
    "AI credits exhausted. Please add credits to your workspace in "
    "Settings → Workspace → Usage."
)
RATE_LIMITED_MESSAGE = "Too many requests. Please wait a moment and try again."
UNKNOWN_MESSAGE = "Unknown error occurred"


def classify_response(response: ProviderResponse, fallback: str) -> ClassifiedError:
    # 402 and 429 are decided on status alone.
    if response.status_code == 402:
        return ClassifiedError(
            kind=ErrorKind.QUOTA_EXHAUSTED,
            message=QUOTA_EXHAUSTED_MESSAGE,
            status_code=402,
        )

    if response.status_code == 429:
        return ClassifiedError(
            kind=ErrorKind.RATE_LIMITED,
            message=RATE_LIMITED_MESSAGE,
            status_code=429,
        )

    return ClassifiedError(
        kind=ErrorKind.UPSTREAM_ERROR,
        message=provider_message(response.body) or fallback,
        status_code=response.status_code,
    )


def classify_exception(exc: Exception) -> ClassifiedError:
    if isinstance(exc, ClassifiedError):
        return exc

    if isinstance(exc, (json.JSONDecodeError, KeyError, IndexError, TypeError)):
        return malformed_output(f"{exc.__class__.__name__}: {exc}")

    if isinstance(exc, httpx.HTTPError):
        return ClassifiedError(
            kind=ErrorKind.UPSTREAM_ERROR,
            message=f"Could not reach the AI provider: {exc}",
        )

    return ClassifiedError(
        kind=ErrorKind.UNKNOWN,
        message=str(exc) or UNKNOWN_MESSAGE,
    )


def provider_message(body: Any) -> str | None:
    if isinstance(body, list) and body:
        body = body[0]

    if not isinstance(body, dict):
        return None

    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"] or None
    if isinstance(error, str) and error:
        return error

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    return None
