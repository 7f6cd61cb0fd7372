from __future__ import annotations

from typing import Any

from .types import ContentPart, MessagePart, ProviderRequest

_AUDIO_FORMATS = {
    "mpeg": "mp3",
    "x-wav": "wav",
    "wave": "wav",
}


class ProviderProfile:
    name: str
    credential_variable: str

    def __init__(self, base_url: str, default_model: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.default_model = default_model

    def url(self, model: str) -> str:
        raise NotImplementedError

    def headers(self, api_key: str) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def params(self, api_key: str) -> dict[str, str]:
        return {}

    def encode(self, request: ProviderRequest, model: str) -> dict[str, Any]:
        raise NotImplementedError

    def decode_parts(self, body: Any) -> tuple[ContentPart, ...]:
        raise NotImplementedError


class ChatCompletionsProfile(ProviderProfile):
    """OpenAI-compatible ``/v1/chat/completions`` gateway with bearer auth."""

    name = "gateway"
    credential_variable = "LOVABLE_API_KEY"

    def url(self, model: str) -> str:
        return f"{self.base_url}/v1/chat/completions"

    def headers(self, api_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def encode(self, request: ProviderRequest, model: str) -> dict[str, Any]:
        parts = request.parts
        if len(parts) == 1 and parts[0].kind == "text":
            content: str | list[dict[str, Any]] = parts[0].text or ""
        else:
            content = [_chat_content_part(part) for part in parts]

        payload: dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": content}],
        }

        options = request.options
        if options.temperature is not None:
            payload["temperature"] = options.temperature
        if options.max_tokens is not None:
            payload["max_tokens"] = options.max_tokens
        if options.modalities:
            payload["modalities"] = [item.lower() for item in options.modalities]

        return payload

    def decode_parts(self, body: Any) -> tuple[ContentPart, ...]:
        message = body["choices"][0]["message"]
        content = message.get("content")
        parts: list[ContentPart] = []

        if isinstance(content, str):
            parts.append(MessagePart.from_text(content))
        elif isinstance(content, list):
            for item in content:
                if item.get("type") == "text":
                    parts.append(MessagePart.from_text(item["text"]))
                elif item.get("type") == "image_url":
                    parts.append(MessagePart.from_url(item["image_url"]["url"]))
        elif content is not None:
            raise TypeError(f"unexpected message content type {type(content).__name__}")

        # Image-capable gateway models attach generated images beside the text.
        for image in message.get("images") or []:
            parts.append(MessagePart.from_url(image["image_url"]["url"]))

        return tuple(parts)


class GenerateContentProfile(ProviderProfile):
    """Generative Language API ``generateContent`` with the key in the query."""

    name = "gemini"
    credential_variable = "GEMINI_API_KEY"

    def url(self, model: str) -> str:
        return f"{self.base_url}/v1beta/models/{model}:generateContent"

    def params(self, api_key: str) -> dict[str, str]:
        return {"key": api_key}

    def encode(self, request: ProviderRequest, model: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "contents": [{"parts": [_gemini_part(part) for part in request.parts]}],
        }

        options = request.options
        config: dict[str, Any] = {}
        if options.temperature is not None:
            config["temperature"] = options.temperature
        if options.max_tokens is not None:
            config["maxOutputTokens"] = options.max_tokens
        if options.modalities:
            config["responseModalities"] = [item.upper() for item in options.modalities]
        if config:
            payload["generationConfig"] = config

        return payload

    def decode_parts(self, body: Any) -> tuple[ContentPart, ...]:
        raw_parts = body["candidates"][0]["content"]["parts"]
        parts: list[ContentPart] = []

        for raw in raw_parts:
            inline = raw.get("inlineData") or raw.get("inline_data")
            if inline:
                mime_type = inline.get("mimeType") or inline.get("mime_type")
                parts.append(MessagePart.from_inline(mime_type, inline["data"]))
            elif isinstance(raw.get("text"), str):
                parts.append(MessagePart.from_text(raw["text"]))

        return tuple(parts)


def _chat_content_part(part: MessagePart) -> dict[str, Any]:
    if part.kind == "text":
        return {"type": "text", "text": part.text or ""}

    if part.kind == "image_url":
        return {"type": "image_url", "image_url": {"url": part.url}}

    mime_type = part.mime_type or "application/octet-stream"
    if mime_type.startswith("audio/"):
        subtype = mime_type.split("/", 1)[1].split(";", 1)[0]
        return {
            "type": "input_audio",
            "input_audio": {
                "data": part.data,
                "format": _AUDIO_FORMATS.get(subtype, subtype),
            },
        }

    return {
        "type": "image_url",
        "image_url": {"url": f"data:{mime_type};base64,{part.data}"},
    }


def _gemini_part(part: MessagePart) -> dict[str, Any]:
    if part.kind == "text":
        return {"text": part.text or ""}

    if part.kind == "image_url":
        return {"fileData": {"fileUri": part.url}}

    return {"inlineData": {"mimeType": part.mime_type, "data": part.data}}
