from __future__ import annotations

import pytest

from helpers import GATEWAY_URL, GEMINI_URL, RecordingTransport
from sahayak.core.invoker import ModelInvoker
from sahayak.core.providers import ChatCompletionsProfile, GenerateContentProfile


@pytest.fixture()
def recorder() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture()
def gateway_invoker(recorder: RecordingTransport) -> ModelInvoker:
    return ModelInvoker(
        ChatCompletionsProfile(GATEWAY_URL, "google/gemini-2.5-flash"),
        "gateway-key",
        transport=recorder.transport,
    )


@pytest.fixture()
def gemini_invoker(recorder: RecordingTransport) -> ModelInvoker:
    return ModelInvoker(
        GenerateContentProfile(GEMINI_URL, "gemini-2.0-flash-exp"),
        "gemini-key",
        transport=recorder.transport,
    )
