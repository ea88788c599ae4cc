"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json
import re

FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def extract_json(text: str) -> dict | list:
    """Extract JSON from an LLM response.

    Tries in order:
    1. Direct json.loads on the full text
    2. The first fenced code block (```json ... ``` or ``` ... ```)
    3. First '{' to last '}'
    4. First '[' to last ']'

    Raises:
        ValueError: nothing in the text parses as JSON.
    """
    text = (text or "").strip()

    candidates = [text]
    fenced = FENCE_PATTERN.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())
    candidates.append(_slice_between(text, "{", "}"))
    candidates.append(_slice_between(text, "[", "]"))

    for candidate in candidates:
        if not candidate:
            continue
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _slice_between(text: str, opener: str, closer: str) -> str:
    start = text.find(opener)
    end = text.rfind(closer)
    if start != -1 and end > start:
        return text[start : end + 1]
    return ""
