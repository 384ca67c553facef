from __future__ import annotations

import json
from typing import Any, Dict, Optional


class ModelOutputError(ValueError):
    """The model replied with something that is not the JSON we asked for."""


def strip_code_fences(text: str) -> str:
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped[3:]
        if stripped.lower().startswith("json"):
            stripped = stripped[len("json"):].lstrip()
        stripped = stripped.rstrip()
        if stripped.endswith("```"):
            stripped = stripped[:-3]
    return stripped.strip()


def extract_json_segment(text: str) -> Optional[str]:
    start = text.find("{")
    if start == -1:
        return None
    stack = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            stack += 1
        elif ch == "}":
            stack -= 1
            if stack == 0:
                return text[start: idx + 1]
    return None


def parse_json_object(text: str) -> Dict[str, Any]:
    """Decode a JSON object from a model reply.

    Accepts bare JSON, JSON wrapped in markdown fences, or JSON surrounded by
    prose. Raises ``ModelOutputError`` otherwise.
    """
    cleaned = strip_code_fences(text or "")
    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError:
        segment = extract_json_segment(cleaned)
        if not segment:
            raise ModelOutputError("Model reply contains no JSON object")
        try:
            decoded = json.loads(segment)
        except json.JSONDecodeError as exc:
            raise ModelOutputError(f"Invalid JSON in model reply: {exc}") from exc
    if not isinstance(decoded, dict):
        raise ModelOutputError(f"Expected a JSON object, got {type(decoded).__name__}")
    return decoded
