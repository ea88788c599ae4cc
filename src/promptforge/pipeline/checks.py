"""Structural checks shared by the rule engine and the patch synthesizer.

Every check is a coarse whole-prompt substring search over the lowercased
text: a keyword buried inside an unrelated word still counts as present.
"""

from __future__ import annotations

import re

ROLE_KEYWORDS = ("você é", "seu papel")
FORMAT_KEYWORDS = ("formato", "estrutura", "retorne", "output", "saída")
CONSTRAINT_KEYWORDS = ("não", "nunca", "evite", "limite", "máximo", "mínimo")
EXAMPLE_KEYWORDS = ("exemplo", "por exemplo", "como:", "e.g.", "ex:")
PARAMETER_KEYWORDS = ("parameters", "parâmetros")

# Prompts at or below this length are not expected to carry few-shot examples
EXAMPLES_MIN_LENGTH = 200

TOOL_CALL_PATTERN = re.compile(r"<tool>|<function>|tool_call|function_call", re.IGNORECASE)
TOOL_JSON_KEYS = ('"name"', '"type"', '"function"')


def contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    """Return True if the lowercased text contains any keyword."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def has_role_definition(prompt: str) -> bool:
    return contains_any(prompt, ROLE_KEYWORDS)


def has_output_format(prompt: str) -> bool:
    return contains_any(prompt, FORMAT_KEYWORDS)


def has_constraints(prompt: str) -> bool:
    return contains_any(prompt, CONSTRAINT_KEYWORDS)


def has_examples(prompt: str) -> bool:
    return contains_any(prompt, EXAMPLE_KEYWORDS)


def has_tool_json(prompt: str) -> bool:
    """Return True if a quoted tool key sits between an opening and a closing brace."""
    start = prompt.find("{")
    if start == -1:
        return False
    end = prompt.rfind("}")
    for key in TOOL_JSON_KEYS:
        pos = prompt.find(key, start + 1)
        if pos != -1 and pos + len(key) <= end:
            return True
    return False


def has_tool_call(prompt: str) -> bool:
    return bool(TOOL_CALL_PATTERN.search(prompt)) or has_tool_json(prompt)


def has_parameters(prompt: str) -> bool:
    # Literal match, case-sensitive
    return any(keyword in prompt for keyword in PARAMETER_KEYWORDS)
