from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

PartKind = Literal["text", "inline_data", "image_url"]


@dataclass(frozen=True, slots=True)
class MessagePart:
    kind: PartKind
    text: str | None = None
    mime_type: str | None = None
    data: str | None = None
    url: str | None = None

    @classmethod
    def from_text(cls, text: str) -> "MessagePart":
        return cls(kind="text", text=text)

    @classmethod
    def from_inline(cls, mime_type: str, data: str) -> "MessagePart":
        return cls(kind="inline_data", mime_type=mime_type, data=data)

    @classmethod
    def from_url(cls, url: str) -> "MessagePart":
        return cls(kind="image_url", url=url)

    @property
    def is_image(self) -> bool:
        if self.kind == "image_url":
            return True
        return self.kind == "inline_data" and (self.mime_type or "").startswith(
            "image/"
        )


# Responses decode into the same part shape as requests.
ContentPart = MessagePart


@dataclass(frozen=True, slots=True)
class GenerationOptions:
    temperature: float | None = None
    max_tokens: int | None = None
    modalities: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProviderRequest:
    model: str | None
    parts: tuple[MessagePart, ...]
    options: GenerationOptions = field(default_factory=GenerationOptions)

    @property
    def prompt_text(self) -> str:
        return "\n\n".join(part.text for part in self.parts if part.text)


@dataclass(slots=True)
class ProviderResponse:
    status_code: int
    body: Any
    parts: tuple[ContentPart, ...] = ()

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
