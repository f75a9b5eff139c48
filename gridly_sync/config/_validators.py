from __future__ import annotations

import json
from typing import Any


def _ensure_api_key(value: str, *, name: str) -> str:
    if not value:
        msg = f"{name} API key is required"
        raise ValueError(msg)
    value = value.strip()
    if not value:
        msg = f"{name} API key is required"
        raise ValueError(msg)
    if len(value) > 500:
        msg = f"{name} API key appears to be too long"
        raise ValueError(msg)
    if any(char in value for char in [" ", "\n", "\t"]):
        msg = f"{name} API key contains invalid characters"
        raise ValueError(msg)
    return value


def _parse_csv_list(value: Any) -> tuple[str, ...]:
    if value in (None, ""):
        return ()
    values = value if isinstance(value, list | tuple) else str(value).split(",")

    items: list[str] = []
    for piece in values:
        piece = str(piece).strip()
        if piece and piece not in items:
            items.append(piece)
    return tuple(items)


def _parse_json_object(value: Any, *, name: str) -> dict[str, Any]:
    if value in (None, ""):
        return {}
    if isinstance(value, dict):
        return value
    try:
        parsed = json.loads(str(value))
    except json.JSONDecodeError as exc:
        msg = f"{name} must be a JSON object"
        raise ValueError(msg) from exc
    if not isinstance(parsed, dict):
        msg = f"{name} must be a JSON object"
        raise ValueError(msg)
    return parsed
