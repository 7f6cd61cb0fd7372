from __future__ import annotations

import re
from typing import Iterable

from .types import ContentPart

JSON_FENCE = "```json"
FENCE = "```"

_INFO_STRING_RE = re.compile(r"^[A-Za-z0-9_+.-]+$")


def extract_payload(text: str) -> str:
    # First ```json block, else first generic block, else the text untouched.
    if JSON_FENCE in text:
        interior = text.split(JSON_FENCE, 1)[1]
        return interior.split(FENCE, 1)[0].strip()

    if FENCE in text:
        interior = text.split(FENCE, 2)[1]
        return _drop_info_string(interior).strip()

    return text


def _drop_info_string(interior: str) -> str:
    first_line, newline, rest = interior.partition("\n")
    if newline and _INFO_STRING_RE.match(first_line.strip()):
        return rest
    return interior


def joined_text(parts: Iterable[ContentPart]) -> str | None:
    texts = [part.text for part in parts if part.kind == "text" and part.text]
    if not texts:
        return None
    return "".join(texts)


def first_image(parts: Iterable[ContentPart]) -> str | None:
    """First image in the reply as something an ``<img src>`` accepts."""

    for part in parts:
        if not part.is_image:
            continue
        if part.kind == "image_url":
            return part.url
        return to_data_uri(part.mime_type or "image/png", part.data or "")

    return None


def to_data_uri(mime_type: str, data: str) -> str:
    return f"data:{mime_type};base64,{data}"


def split_data_uri(value: str) -> tuple[str | None, str]:
    """Split ``data:<mime>;base64,<data>`` into its MIME type and data."""

    if "base64," not in value:
        return None, value

    header, data = value.split("base64,", 1)
    mime_type = None
    if header.startswith("data:"):
        mime_type = header[len("data:") :].rstrip(";") or None
    return mime_type, data
