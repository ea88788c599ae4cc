"""Tests for the LLM-backed analyzer with a mocked client."""

from __future__ import annotations

import json

import pytest

from promptforge.clients.errors import AnalysisError, RateLimitError
from promptforge.clients.llm_client import LLMResponse
from promptforge.models.suggestion import AIAnalysisResult
from promptforge.pipeline.ai_analyzer import (
    FALLBACK_SCORE,
    FALLBACK_TITLE,
    SYSTEM_PROMPT,
    AIAnalyzer,
)

PROMPT = "Responda as perguntas do usuário."


def _reply(payload) -> LLMResponse:
    text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
    return LLMResponse(text=text, input_tokens=10, output_tokens=20)


def _payload(**overrides) -> dict:
    data = {
        "suggestions": [
            {
                "id": "from-model",
                "type": "critical",
                "title": "Papel ausente",
                "description": "Defina o papel.",
                "suggestedText": "Você é um atendente.",
            },
            {
                "type": "warning",
                "title": "Instrução vaga",
                "description": "Seja específico.",
                "originalText": "as perguntas",
                "suggestedText": "as perguntas sobre faturamento",
            },
        ],
        "optimizedPrompt": "Você é um atendente. Responda as perguntas sobre faturamento.",
        "score": 42,
        "summary": "Prompt curto e sem estrutura.",
    }
    data.update(overrides)
    return data


class TestAIAnalyzer:
    async def test_parses_structured_reply(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply(_payload())
        analyzer = AIAnalyzer(mock_llm_client)

        result = await analyzer.analyze(PROMPT, "")

        assert isinstance(result, AIAnalysisResult)
        assert [s.id for s in result.suggestions] == ["ai-suggestion-1", "ai-suggestion-2"]
        assert result.suggestions[1].original_text == "as perguntas"
        assert result.score == 42
        assert result.summary == "Prompt curto e sem estrutura."
        assert result.optimized_prompt.startswith("Você é um atendente.")

    async def test_sends_system_prompt_and_objective(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply(_payload())
        analyzer = AIAnalyzer(mock_llm_client, model="test-model", temperature=0.2)

        await analyzer.analyze(PROMPT, "Suporte técnico")

        kwargs = mock_llm_client.generate.call_args.kwargs
        assert kwargs["system"] == SYSTEM_PROMPT
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.2
        assert '"Suporte técnico"' in kwargs["prompt"]
        assert PROMPT in kwargs["prompt"]

    async def test_message_without_objective(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply(_payload())
        await AIAnalyzer(mock_llm_client).analyze(PROMPT)

        message = mock_llm_client.generate.call_args.kwargs["prompt"]
        assert message == f"Analise o seguinte prompt:\n\n{PROMPT}"

    async def test_fenced_reply(self, mock_llm_client):
        text = "```json\n" + json.dumps(_payload(), ensure_ascii=False) + "\n```"
        mock_llm_client.generate.return_value = _reply(text)

        result = await AIAnalyzer(mock_llm_client).analyze(PROMPT)

        assert len(result.suggestions) == 2

    async def test_malformed_reply_falls_back_to_info(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply("O prompt precisa de um papel definido.")

        result = await AIAnalyzer(mock_llm_client).analyze(PROMPT)

        assert len(result.suggestions) == 1
        fallback = result.suggestions[0]
        assert fallback.type == "info"
        assert fallback.title == FALLBACK_TITLE
        assert fallback.description == "O prompt precisa de um papel definido."
        assert fallback.id == "ai-suggestion-1"
        assert result.optimized_prompt == PROMPT
        assert result.score == FALLBACK_SCORE

    async def test_json_array_reply_falls_back(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply("[1, 2]")

        result = await AIAnalyzer(mock_llm_client).analyze(PROMPT)

        assert result.suggestions[0].title == FALLBACK_TITLE

    async def test_missing_fields_use_defaults(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply({"suggestions": []})

        result = await AIAnalyzer(mock_llm_client).analyze(PROMPT)

        assert result.suggestions == []
        assert result.optimized_prompt == PROMPT
        assert result.score == 0
        assert result.summary == ""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"optimizedPrompt": 123},
            {"optimizedPrompt": ["a"]},
            {"summary": {"x": 1}},
            {"optimizedPrompt": None, "summary": 7},
        ],
    )
    async def test_wrong_typed_fields_use_defaults(self, mock_llm_client, overrides):
        payload = _payload(**overrides)
        mock_llm_client.generate.return_value = _reply(payload)

        result = await AIAnalyzer(mock_llm_client).analyze(PROMPT)

        assert len(result.suggestions) == 2
        assert result.score == 42
        expected_prompt = payload["optimizedPrompt"]
        assert result.optimized_prompt == (expected_prompt if isinstance(expected_prompt, str) else PROMPT)
        expected_summary = payload["summary"]
        assert result.summary == (expected_summary if isinstance(expected_summary, str) else "")

    async def test_invalid_suggestions_are_skipped_and_renumbered(self, mock_llm_client):
        payload = _payload(suggestions=[
            "texto solto",
            {"type": "tip", "title": "x", "description": "y"},
            {"type": "info", "title": "Dica", "description": "Use exemplos."},
        ])
        mock_llm_client.generate.return_value = _reply(payload)

        result = await AIAnalyzer(mock_llm_client).analyze(PROMPT)

        assert [s.id for s in result.suggestions] == ["ai-suggestion-1"]
        assert result.suggestions[0].title == "Dica"

    async def test_error_payload_raises(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply({"error": "modelo indisponível"})

        with pytest.raises(AnalysisError, match="modelo indisponível"):
            await AIAnalyzer(mock_llm_client).analyze(PROMPT)

    async def test_empty_reply_raises(self, mock_llm_client):
        mock_llm_client.generate.return_value = _reply("   ")

        with pytest.raises(AnalysisError):
            await AIAnalyzer(mock_llm_client).analyze(PROMPT)

    async def test_transport_errors_propagate(self, mock_llm_client):
        mock_llm_client.generate.side_effect = RateLimitError(status_code=429)

        with pytest.raises(RateLimitError):
            await AIAnalyzer(mock_llm_client).analyze(PROMPT)

    async def test_blank_prompt_rejected_without_calling_llm(self, mock_llm_client):
        with pytest.raises(ValueError):
            await AIAnalyzer(mock_llm_client).analyze("  \n")
        mock_llm_client.generate.assert_not_called()
