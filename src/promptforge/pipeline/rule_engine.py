"""Heuristic rule engine - detects missing structure in agent prompts."""

from __future__ import annotations

import itertools
import logging
import re

from promptforge.models.suggestion import AnalysisResult, Suggestion, SuggestionType
from promptforge.pipeline.checks import (
    EXAMPLES_MIN_LENGTH,
    has_constraints,
    has_examples,
    has_output_format,
    has_parameters,
    has_role_definition,
    has_tool_call,
)
from promptforge.pipeline.patcher import synthesize_optimized_prompt

logger = logging.getLogger(__name__)

# A vague verb is forgiven when the rest of its line asks for precision
VAGUE_PATTERN = re.compile(
    r"\b(faça|faz|me ajude|ajuda|pode|poderia)\b(?![^\n]*(?:específico|exato|preciso))",
    re.IGNORECASE,
)
WEAK_VERB_PATTERN = re.compile(
    r"\b(tente|talvez|possivelmente|provavelmente|se puder)\b",
    re.IGNORECASE,
)
VAGUE_THRESHOLD = 3

ROLE_SENTENCE = "Você é um assistente de IA especializado."
TOOL_CALL_SKELETON = (
    '{ "name": "tool_name", "parameters": '
    '{ "param1": { "type": "string", "description": "..." } } }'
)


def analyze(prompt: str, objective: str = "") -> AnalysisResult:
    """Run every detector against the prompt and build the optimized rewrite.

    Suggestions keep detector order; they are not re-sorted by severity.
    Ids restart at ``suggestion-1`` on every call.
    """
    counter = itertools.count(1)
    suggestions: list[Suggestion] = []

    def add(type_: SuggestionType, title: str, description: str, **texts: str) -> None:
        suggestions.append(
            Suggestion(
                id=f"suggestion-{next(counter)}",
                type=type_,
                title=title,
                description=description,
                **texts,
            )
        )

    if not has_role_definition(prompt):
        add(
            "critical",
            "Definição de papel ausente",
            "Prompts efetivos começam definindo claramente o papel do agente. "
            "Adicione uma introdução como 'Você é um assistente especializado em...'",
            suggested_text=ROLE_SENTENCE,
        )

    vague = [m.group(0) for m in VAGUE_PATTERN.finditer(prompt)]
    if len(vague) >= VAGUE_THRESHOLD:
        add(
            "warning",
            "Instruções vagas detectadas",
            "Use verbos imperativos e instruções diretas ao invés de termos vagos "
            "como 'faça', 'pode', 'me ajude'.",
            original_text=", ".join(vague[:3]),
            suggested_text="Execute, Analise, Retorne, Calcule, Gere...",
        )

    weak = [m.group(0) for m in WEAK_VERB_PATTERN.finditer(prompt)]
    if weak:
        add(
            "improvement",
            "Verbos fracos encontrados",
            "Substitua verbos como 'tente' e 'talvez' por instruções assertivas "
            "que garantam comportamento consistente.",
            original_text=", ".join(weak),
            suggested_text="sempre, obrigatoriamente, certifique-se de...",
        )

    if not has_output_format(prompt):
        add(
            "improvement",
            "Formato de saída não especificado",
            "Defina claramente o formato esperado da resposta (JSON, Markdown, "
            "lista, etc.) para garantir consistência.",
            suggested_text="Retorne a resposta no formato JSON com a seguinte estrutura: { ... }",
        )

    if has_tool_call(prompt) and not has_parameters(prompt):
        add(
            "critical",
            "Estrutura de tool call incompleta",
            "Chamadas de tools precisam de definição clara de parâmetros, tipos "
            "e descrições para cada campo.",
            suggested_text=TOOL_CALL_SKELETON,
        )

    if not has_constraints(prompt):
        add(
            "info",
            "Considere adicionar restrições",
            "Definir o que o agente NÃO deve fazer é tão importante quanto definir "
            "o que deve fazer. Adicione limites e exceções.",
            suggested_text=(
                "Nunca invente informações. Limite a resposta a 500 palavras. "
                "Evite linguagem informal."
            ),
        )

    if len(prompt) > EXAMPLES_MIN_LENGTH and not has_examples(prompt):
        add(
            "improvement",
            "Exemplos não encontrados",
            "Few-shot prompting (adicionar exemplos) melhora significativamente a "
            "qualidade das respostas. Considere adicionar 2-3 exemplos.",
            suggested_text="Exemplo de entrada: '...' → Exemplo de saída: '...'",
        )

    if objective:
        objective_lower = objective.lower()
        prompt_lower = prompt.lower()
        if "técnic" in objective_lower and "técnic" not in prompt_lower:
            add(
                "improvement",
                "Alinhar com objetivo técnico",
                "Seu objetivo menciona aspectos técnicos, mas o prompt não "
                "especifica o nível de tecnicidade esperado.",
                suggested_text=(
                    "Responda de forma técnica e precisa, incluindo detalhes de "
                    "implementação quando relevante."
                ),
            )
        if "concis" in objective_lower and "concis" not in prompt_lower:
            add(
                "improvement",
                "Alinhar com objetivo de concisão",
                "Seu objetivo menciona respostas concisas, adicione essa instrução "
                "explicitamente ao prompt.",
                suggested_text="Seja direto e conciso. Evite explicações desnecessárias.",
            )

    logger.debug("Heuristic analysis produced %d suggestions", len(suggestions))
    return AnalysisResult(
        suggestions=suggestions,
        optimized_prompt=synthesize_optimized_prompt(prompt, objective),
    )
