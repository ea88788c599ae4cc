"""Patch synthesizer: applies accepted suggestions back onto a prompt."""

from __future__ import annotations

from functools import reduce
from typing import Iterable

from promptforge.models.suggestion import Suggestion
from promptforge.pipeline.checks import (
    has_constraints,
    has_output_format,
    has_role_definition,
)

PREPEND_TITLE_KEYWORDS = ("papel", "role")

OPTIMIZED_ROLE = "Você é um agente de IA altamente especializado."
OPTIMIZED_FORMAT_SECTION = (
    "## Formato de Saída\n"
    "Retorne a resposta de forma estruturada e clara."
)
OPTIMIZED_CONSTRAINTS_SECTION = (
    "## Restrições\n"
    "- Não invente informações que não foram fornecidas\n"
    "- Mantenha a resposta focada no objetivo"
)


def apply_one(prompt: str, suggestion: Suggestion) -> str:
    """Apply a single suggestion to the prompt.

    Find/replace suggestions swap the first literal occurrence of
    ``original_text`` and leave the prompt untouched when it is not found.
    Additive suggestions are prepended when their title is about the agent's
    role and appended otherwise. Applying an additive suggestion twice
    duplicates its text.
    """
    original = suggestion.original_text
    suggested = suggestion.suggested_text

    if suggested and original:
        return prompt.replace(original, suggested, 1)

    if suggested:
        title = suggestion.title.lower()
        if any(keyword in title for keyword in PREPEND_TITLE_KEYWORDS):
            return f"{suggested}\n\n{prompt}"
        return f"{prompt}\n\n{suggested}"

    return prompt


def apply_all(prompt: str, suggestions: Iterable[Suggestion]) -> str:
    """Fold ``apply_one`` over suggestions in the order received.

    Each step sees the text produced by the previous one, so an earlier
    suggestion can consume a substring a later one was going to replace;
    that later step is then a silent no-op.
    """
    return reduce(apply_one, suggestions, prompt)


def synthesize_optimized_prompt(prompt: str, objective: str = "") -> str:
    """Build the best complete rewrite of ``prompt`` in one pass.

    Recomputed from the original text, not from whichever suggestions the
    user accepted.
    """
    optimized = prompt

    if not has_role_definition(prompt):
        optimized = f"{OPTIMIZED_ROLE}\n\n{optimized}"

    if objective and objective not in prompt:
        optimized = f"## Objetivo\n{objective}\n\n## Instruções\n{optimized}"

    if not has_output_format(prompt):
        optimized += f"\n\n{OPTIMIZED_FORMAT_SECTION}"

    if not has_constraints(prompt):
        optimized += f"\n\n{OPTIMIZED_CONSTRAINTS_SECTION}"

    return optimized
