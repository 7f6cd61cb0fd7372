from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from .errors import malformed_output

# Maps a required key to the container type its value must have, or None
# when any value will do.
RequiredKeys = Mapping[str, Optional[type]]


def parse_structured(payload: str, required: RequiredKeys) -> dict[str, Any]:
    try:
        parsed = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise malformed_output(f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

    if not isinstance(parsed, dict):
        raise malformed_output("expected a JSON object")

    require_keys(parsed, required)
    return parsed


def require_keys(obj: Mapping[str, Any], required: RequiredKeys, where: str = "") -> None:
    label = f" in '{where}'" if where else ""

    for key, expected in required.items():
        if key not in obj:
            raise malformed_output(f"missing required key '{key}'{label}")

        if expected is not None and not isinstance(obj[key], expected):
            raise malformed_output(
                f"'{key}'{label} must be a JSON {_json_type_name(expected)}"
            )


def _json_type_name(expected: type) -> str:
    if expected is list:
        return "array"
    if expected is dict:
        return "object"
    if expected is str:
        return "string"
    return expected.__name__
