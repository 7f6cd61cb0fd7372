from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    MISSING_CREDENTIALS = "MissingCredentials"
    QUOTA_EXHAUSTED = "QuotaExhausted"
    RATE_LIMITED = "RateLimited"
    MALFORMED_UPSTREAM_OUTPUT = "MalformedUpstreamOutput"
    UPSTREAM_ERROR = "UpstreamError"
    UNKNOWN = "Unknown"


@dataclass(eq=False)
class ClassifiedError(Exception):
    """Terminal failure of one request, carrying a user-facing message."""

    kind: ErrorKind
    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        return self.message

    def to_error(self) -> dict[str, str]:
        return {"error": self.message}


def missing_credentials(variable: str) -> ClassifiedError:
    return ClassifiedError(
        kind=ErrorKind.MISSING_CREDENTIALS,
        message=f"{variable} not configured",
    )


def malformed_output(detail: str) -> ClassifiedError:
    return ClassifiedError(
        kind=ErrorKind.MALFORMED_UPSTREAM_OUTPUT,
        message=f"The AI response could not be read: {detail}",
    )
