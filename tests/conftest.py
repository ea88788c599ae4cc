"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from promptforge.clients.llm_client import LLMClient, LLMResponse
from promptforge.models.suggestion import Suggestion


@pytest.fixture
def bare_prompt() -> str:
    """A prompt with no role, format, constraints or examples."""
    return "Responda as perguntas do usuário."


@pytest.fixture
def complete_prompt() -> str:
    """A prompt that passes every structural check."""
    return (
        "Você é um assistente de suporte técnico.\n"
        "Retorne a resposta em formato Markdown.\n"
        "Nunca invente informações.\n"
        "Por exemplo: 'Como reinicio o roteador?' → passos numerados."
    )


@pytest.fixture
def replace_suggestion() -> Suggestion:
    return Suggestion(
        id="suggestion-1",
        type="improvement",
        title="Verbos fracos encontrados",
        description="Use instruções assertivas.",
        original_text="tente",
        suggested_text="sempre",
    )


@pytest.fixture
def append_suggestion() -> Suggestion:
    return Suggestion(
        id="suggestion-2",
        type="info",
        title="Considere adicionar restrições",
        description="Adicione limites.",
        suggested_text="Nunca invente informações.",
    )


@pytest.fixture
def role_suggestion() -> Suggestion:
    return Suggestion(
        id="suggestion-3",
        type="critical",
        title="Definição de papel ausente",
        description="Defina o papel do agente.",
        suggested_text="Você é um assistente de IA especializado.",
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    return client
