from __future__ import annotations

import json
from typing import Any

import httpx

GATEWAY_URL = "https://gateway.test"
GEMINI_URL = "https://gemini.test"


class RecordingTransport:
    """Serves queued responses and remembers every outbound request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: list[httpx.Response] = []
        self.transport = httpx.MockTransport(self._handle)

    def queue(self, status_code: int = 200, body: Any = None, text: str | None = None) -> None:
        if text is not None:
            self._responses.append(httpx.Response(status_code, text=text))
        else:
            self._responses.append(httpx.Response(status_code, json=body))

    def payload(self, index: int = 0) -> dict[str, Any]:
        return json.loads(self.requests[index].content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected outbound call to {request.url}")
        return self._responses.pop(0)


def chat_reply(content: Any, **message: Any) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": content, **message}}]}


def gemini_reply(*parts: dict[str, Any]) -> dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": list(parts)}}]}

