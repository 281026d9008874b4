"""
Helpers for reading model output.

Functions
---------
lc_text_from_content(content) -> str
    Normalize LangChain message content (str or list of parts) to plain text.
parse_llm_json(resp) -> object
    Parse a model response as JSON, repairing near-JSON with `json_repair`.
coerce_confidence(value) -> int
    Turn whatever the model put in "confidence" into an integer in [0, 100].
"""

import json
import math
import re

from json_repair import repair_json

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def lc_text_from_content(content) -> str:
    """Normalize LangChain message content to plain text.

    - If string → return as-is.
    - If list of content parts → concatenates only text parts.
    - Else → str(content).
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return str(content)


def parse_llm_json(resp):
    """Parse a model response into JSON with optional repair.

    Steps:
        1) Extract text from the LangChain message (handling code fences).
        2) Try `json.loads`.
        3) Fallback: `json_repair.repair_json` then `json.loads`.

    Raises:
        ValueError with the first 500 chars of raw text if the text is empty
        or parsing still fails.
    """
    raw = lc_text_from_content(getattr(resp, "content", resp)).strip()
    if raw.startswith("```"):
        raw = _FENCE_OPEN.sub("", raw)
        raw = _FENCE_CLOSE.sub("", raw).strip()
    if not raw:
        raise ValueError("Failed to parse LLM JSON: empty completion")

    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        try:
            repaired = repair_json(raw)
            if not repaired or repaired == '""':
                raise ValueError("nothing to repair")
            return json.loads(repaired)
        except Exception as e:
            raise ValueError(f"Failed to parse LLM JSON: {e}\nRAW:\n{raw[:500]}")


def coerce_confidence(value) -> int:
    """
    Normalize a model-reported confidence.

    Integers and floats are rounded and clamped to [0, 100]; numeric strings
    ("85", "85%") are parsed first. Anything else (missing, bool, NaN, prose)
    becomes 0.
    """
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, str):
        value = value.strip().rstrip("%").strip()
        try:
            value = float(value)
        except ValueError:
            return 0
    if not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return 100 if value > 0 else 0
        value = math.floor(value + 0.5)
    return max(0, min(100, int(value)))
