from __future__ import annotations

import asyncio

import httpx
import pytest

from helpers import GATEWAY_URL, GEMINI_URL, RecordingTransport, chat_reply, gemini_reply
from sahayak.core.errors import ClassifiedError, ErrorKind
from sahayak.core.invoker import ModelInvoker
from sahayak.core.prompts import build_content_request, build_worksheet_request
from sahayak.core.providers import ChatCompletionsProfile, GenerateContentProfile
from sahayak.core.types import GenerationOptions, MessagePart, ProviderRequest


@pytest.mark.parametrize(
    ("profile", "variable"),
    [
        (ChatCompletionsProfile(GATEWAY_URL, "m"), "LOVABLE_API_KEY"),
        (GenerateContentProfile(GEMINI_URL, "m"), "GEMINI_API_KEY"),
    ],
)
def test_missing_credentials_short_circuit_before_any_call(
    recorder: RecordingTransport, profile, variable
):
    invoker = ModelInvoker(profile, "", transport=recorder.transport)
    recorder.queue(200, chat_reply("should never be served"))

    with pytest.raises(ClassifiedError) as exc_info:
        asyncio.run(invoker.invoke(build_content_request("Explain rain", "english")))

    assert exc_info.value.kind is ErrorKind.MISSING_CREDENTIALS
    assert exc_info.value.message == f"{variable} not configured"
    assert recorder.requests == []


def test_gateway_call_uses_bearer_auth_and_single_text_content(
    recorder: RecordingTransport, gateway_invoker: ModelInvoker
):
    recorder.queue(200, chat_reply("Rain forms when..."))

    response = asyncio.run(
        gateway_invoker.invoke(build_content_request("Explain rain", "english"))
    )

    assert len(recorder.requests) == 1
    sent = recorder.requests[0]
    assert str(sent.url) == f"{GATEWAY_URL}/v1/chat/completions"
    assert sent.headers["authorization"] == "Bearer gateway-key"

    payload = recorder.payload()
    assert payload["model"] == "google/gemini-2.5-flash"
    assert payload["messages"][0]["role"] == "user"
    assert "Explain rain" in payload["messages"][0]["content"]

    assert response.ok
    assert response.parts == (MessagePart.from_text("Rain forms when..."),)


def test_gateway_encodes_inline_audio_and_images_as_typed_parts(
    recorder: RecordingTransport, gateway_invoker: ModelInvoker
):
    recorder.queue(200, chat_reply("ok"))
    request = ProviderRequest(
        model="custom/model",
        parts=(
            MessagePart.from_text("Transcribe"),
            MessagePart.from_inline("audio/webm;codecs=opus", "GkXf"),
            MessagePart.from_inline("image/png", "iVBO"),
        ),
        options=GenerationOptions(temperature=0.2, max_tokens=100, modalities=("IMAGE",)),
    )

    asyncio.run(gateway_invoker.invoke(request))

    payload = recorder.payload()
    assert payload["model"] == "custom/model"
    assert payload["temperature"] == 0.2
    assert payload["max_tokens"] == 100
    assert payload["modalities"] == ["image"]
    assert payload["messages"][0]["content"] == [
        {"type": "text", "text": "Transcribe"},
        {"type": "input_audio", "input_audio": {"data": "GkXf", "format": "webm"}},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,iVBO"}},
    ]


def test_gateway_decodes_message_level_images(
    recorder: RecordingTransport, gateway_invoker: ModelInvoker
):
    recorder.queue(
        200,
        chat_reply(
            "Here you go",
            images=[{"type": "image_url", "image_url": {"url": "data:image/png;base64,AAA"}}],
        ),
    )

    response = asyncio.run(
        gateway_invoker.invoke(build_content_request("Draw", "english"))
    )

    assert response.parts == (
        MessagePart.from_text("Here you go"),
        MessagePart.from_url("data:image/png;base64,AAA"),
    )


def test_gemini_call_puts_key_in_query_and_sends_inline_image(
    recorder: RecordingTransport, gemini_invoker: ModelInvoker
):
    recorder.queue(200, gemini_reply({"text": '{"worksheets": []}'}))

    response = asyncio.run(gemini_invoker.invoke(build_worksheet_request("/9j/4AAQ", "image/jpeg")))

    sent = recorder.requests[0]
    assert sent.url.path == "/v1beta/models/gemini-2.0-flash-exp:generateContent"
    assert sent.url.params["key"] == "gemini-key"
    assert "authorization" not in sent.headers

    payload = recorder.payload()
    parts = payload["contents"][0]["parts"]
    assert "worksheet" in parts[0]["text"]
    assert parts[1] == {"inlineData": {"mimeType": "image/jpeg", "data": "/9j/4AAQ"}}
    assert payload["generationConfig"] == {"temperature": 0.5, "maxOutputTokens": 2048}

    assert response.parts == (MessagePart.from_text('{"worksheets": []}'),)


def test_gemini_decodes_inline_image_parts(
    recorder: RecordingTransport, gemini_invoker: ModelInvoker
):
    recorder.queue(
        200,
        gemini_reply(
            {"text": "A leaf diagram"},
            {"inlineData": {"mimeType": "image/png", "data": "iVBO"}},
        ),
    )

    response = asyncio.run(gemini_invoker.invoke(build_content_request("Leaf", "english")))

    assert response.parts == (
        MessagePart.from_text("A leaf diagram"),
        MessagePart.from_inline("image/png", "iVBO"),
    )


def test_failed_call_returns_status_and_body_without_raising(
    recorder: RecordingTransport, gateway_invoker: ModelInvoker
):
    recorder.queue(402, {"error": {"message": "Payment required"}})

    response = asyncio.run(
        gateway_invoker.invoke(build_content_request("Explain rain", "english"))
    )

    assert not response.ok
    assert response.status_code == 402
    assert response.body == {"error": {"message": "Payment required"}}
    assert response.parts == ()


def test_non_json_error_body_is_wrapped(
    recorder: RecordingTransport, gateway_invoker: ModelInvoker
):
    recorder.queue(503, text="Service Unavailable")

    response = asyncio.run(
        gateway_invoker.invoke(build_content_request("Explain rain", "english"))
    )

    assert response.body == {"message": "Service Unavailable"}


@pytest.mark.parametrize(
    "body",
    [
        {"choices": []},
        {"id": "no-choices"},
        {"choices": [{"message": {"content": 42}}]},
    ],
)
def test_success_without_readable_content_is_malformed(
    recorder: RecordingTransport, gateway_invoker: ModelInvoker, body
):
    recorder.queue(200, body)

    with pytest.raises(ClassifiedError) as exc_info:
        asyncio.run(gateway_invoker.invoke(build_content_request("Explain rain", "english")))

    assert exc_info.value.kind is ErrorKind.MALFORMED_UPSTREAM_OUTPUT


def test_transport_failure_is_upstream_error():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    invoker = ModelInvoker(
        ChatCompletionsProfile(GATEWAY_URL, "m"),
        "key",
        transport=httpx.MockTransport(refuse),
    )

    with pytest.raises(ClassifiedError) as exc_info:
        asyncio.run(invoker.invoke(build_content_request("Explain rain", "english")))

    assert exc_info.value.kind is ErrorKind.UPSTREAM_ERROR
    assert "connection refused" in exc_info.value.message


def test_outbound_call_uses_generation_timeout(
    recorder: RecordingTransport, gateway_invoker: ModelInvoker
):
    recorder.queue(200, chat_reply("Rain forms when..."))

    asyncio.run(gateway_invoker.invoke(build_content_request("Explain rain", "english")))

    timeouts = recorder.requests[0].extensions["timeout"]
    assert timeouts == {"connect": 120.0, "read": 120.0, "write": 120.0, "pool": 120.0}
