"""LLM-backed prompt analysis - the remote counterpart of the rule engine."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from promptforge.clients.errors import AnalysisError
from promptforge.clients.llm_client import DEFAULT_MODEL, LLMClient
from promptforge.models.suggestion import AIAnalysisResult, Suggestion
from promptforge.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
Você é um especialista em engenharia de prompts para agentes de IA e automação. Sua tarefa é analisar prompts e fornecer sugestões detalhadas de melhoria.

Ao analisar um prompt, considere:
1. **Definição de papel**: O prompt define claramente quem o agente é?
2. **Clareza das instruções**: As instruções são específicas e acionáveis?
3. **Estrutura de tool calls**: Se houver ferramentas, estão bem definidas com parâmetros claros?
4. **Formato de saída**: O formato esperado está especificado?
5. **Restrições**: Há limites claros sobre o que fazer e não fazer?
6. **Exemplos (few-shot)**: Há exemplos que ajudam a entender o comportamento esperado?
7. **Contexto e objetivo**: O propósito está claro?

Retorne SEMPRE um JSON válido com a seguinte estrutura:
{
  "suggestions": [
    {
      "type": "critical" | "warning" | "improvement" | "info",
      "title": "Título curto da sugestão",
      "description": "Explicação detalhada do problema e como resolver",
      "originalText": "Texto original problemático (se aplicável)",
      "suggestedText": "Texto sugerido para substituir ou adicionar"
    }
  ],
  "optimizedPrompt": "Versão otimizada completa do prompt",
  "score": 0-100,
  "summary": "Resumo geral da análise em 1-2 frases"
}

Tipos de sugestão:
- "critical": Problemas graves que comprometem a funcionalidade
- "warning": Problemas que podem causar comportamento inconsistente
- "improvement": Melhorias que aumentariam a qualidade
- "info": Dicas e boas práticas opcionais

Seja específico e prático nas sugestões. Forneça textos que podem ser diretamente aplicados."""

FALLBACK_SCORE = 50
FALLBACK_TITLE = "Análise em formato de texto"
FALLBACK_SUMMARY = "A análise foi realizada mas o formato de resposta precisa ser ajustado."


class AIAnalyzer:
    """Analyze a prompt with Claude and normalize the reply into suggestions."""

    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature

    async def analyze(self, prompt: str, objective: str = "") -> AIAnalysisResult:
        """Send the prompt for analysis.

        A reply that is not a JSON object degrades to a single ``info``
        suggestion carrying the raw text. Transport failures propagate as
        ``PromptForgeError`` subclasses.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt is required")

        if objective:
            message = (
                f'Analise o seguinte prompt considerando o objetivo: "{objective}"\n\n'
                f"Prompt:\n{prompt}"
            )
        else:
            message = f"Analise o seguinte prompt:\n\n{prompt}"

        logger.info("Requesting AI analysis (%d chars)", len(prompt))
        response = await self.llm.generate(
            prompt=message,
            system=SYSTEM_PROMPT,
            model=self.model,
            temperature=self.temperature,
        )
        if not response.text.strip():
            raise AnalysisError("No content in AI response")

        return self.parse_response(response.text, prompt)

    @staticmethod
    def parse_response(text: str, prompt: str) -> AIAnalysisResult:
        """Turn the model's reply into an ``AIAnalysisResult``."""
        try:
            data = extract_json(text)
        except ValueError:
            data = None

        if not isinstance(data, dict):
            logger.warning("AI response was not a JSON object; using text fallback")
            return AIAnalysisResult(
                suggestions=[
                    Suggestion(
                        id="ai-suggestion-1",
                        type="info",
                        title=FALLBACK_TITLE,
                        description=text,
                    )
                ],
                optimized_prompt=prompt,
                score=FALLBACK_SCORE,
                summary=FALLBACK_SUMMARY,
            )

        if data.get("error"):
            raise AnalysisError(str(data["error"]))

        suggestions = AIAnalyzer._parse_suggestions(data.get("suggestions"))
        try:
            score = int(data.get("score") or 0)
        except (TypeError, ValueError):
            score = 0

        optimized = data.get("optimizedPrompt")
        summary = data.get("summary")
        return AIAnalysisResult(
            suggestions=suggestions,
            optimized_prompt=optimized if isinstance(optimized, str) and optimized else prompt,
            score=score,
            summary=summary if isinstance(summary, str) else "",
        )

    @staticmethod
    def _parse_suggestions(items) -> list[Suggestion]:
        """Validate suggestion dicts and number them ``ai-suggestion-N``."""
        if not isinstance(items, list):
            return []

        result: list[Suggestion] = []
        for item in items:
            if not isinstance(item, dict):
                continue
            fields = {k: v for k, v in item.items() if k != "id"}
            try:
                suggestion = Suggestion(**fields)
            except ValidationError:
                logger.debug("Skipping invalid AI suggestion: %r", item)
                continue
            result.append(suggestion.model_copy(update={"id": f"ai-suggestion-{len(result) + 1}"}))
        return result
