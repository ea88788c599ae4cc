"""Tests for the patch synthesizer."""

from __future__ import annotations

from promptforge.models.suggestion import Suggestion
from promptforge.pipeline.patcher import (
    apply_all,
    apply_one,
    synthesize_optimized_prompt,
)
from promptforge.pipeline.rule_engine import analyze


def _replace(original: str, suggested: str, id_: str = "s") -> Suggestion:
    return Suggestion(
        id=id_,
        type="improvement",
        title="Troca",
        description="d",
        original_text=original,
        suggested_text=suggested,
    )


class TestApplyOne:
    def test_replaces_first_occurrence_only(self, replace_suggestion):
        prompt = "tente isso, tente aquilo"
        assert apply_one(prompt, replace_suggestion) == "sempre isso, tente aquilo"

    def test_missing_original_is_noop(self, replace_suggestion):
        prompt = "Responda sempre em português."
        assert apply_one(prompt, replace_suggestion) == prompt

    def test_replacement_is_case_sensitive(self, replace_suggestion):
        prompt = "Tente responder."
        assert apply_one(prompt, replace_suggestion) == prompt

    def test_additive_suggestion_is_appended(self, append_suggestion):
        assert apply_one("Responda.", append_suggestion) == "Responda.\n\nNunca invente informações."

    def test_role_suggestion_is_prepended(self, role_suggestion):
        assert apply_one("Responda.", role_suggestion) == (
            "Você é um assistente de IA especializado.\n\nResponda."
        )

    def test_english_role_title_is_prepended(self):
        suggestion = Suggestion(
            id="x", type="critical", title="Missing Role", description="d", suggested_text="You are a bot."
        )
        assert apply_one("Answer.", suggestion) == "You are a bot.\n\nAnswer."

    def test_informational_suggestion_is_noop(self):
        suggestion = Suggestion(id="x", type="info", title="Dica", description="Só informativo.")
        assert apply_one("Responda.", suggestion) == "Responda."

    def test_original_without_suggested_is_noop(self):
        suggestion = Suggestion(id="x", type="info", title="Dica", description="d", original_text="Responda")
        assert apply_one("Responda.", suggestion) == "Responda."

    def test_additive_apply_twice_duplicates(self, append_suggestion):
        prompt = "Responda."
        twice = apply_one(apply_one(prompt, append_suggestion), append_suggestion)
        assert twice.count(append_suggestion.suggested_text) == 2

    def test_role_apply_twice_duplicates(self, role_suggestion):
        twice = apply_one(apply_one("Responda.", role_suggestion), role_suggestion)
        assert twice.count(role_suggestion.suggested_text) == 2


class TestApplyAll:
    def test_empty_list_returns_prompt(self):
        for prompt in ("", "Responda.", "  \n"):
            assert apply_all(prompt, []) == prompt

    def test_folds_in_received_order(self, role_suggestion, append_suggestion, replace_suggestion):
        prompt = "tente responder."
        result = apply_all(prompt, [replace_suggestion, append_suggestion, role_suggestion])
        assert result == (
            "Você é um assistente de IA especializado.\n\n"
            "sempre responder.\n\n"
            "Nunca invente informações."
        )

    def test_earlier_step_can_turn_later_step_into_noop(self):
        first = _replace("azul", "verde", "a")
        second = _replace("azul", "vermelho", "b")
        assert apply_all("céu azul", [first, second]) == "céu verde"
        assert apply_all("céu azul", [second, first]) == "céu vermelho"

    def test_later_step_sees_earlier_output(self):
        first = _replace("A", "B", "a")
        second = _replace("B", "C", "b")
        assert apply_all("A", [first, second]) == "C"

    def test_accepts_any_iterable(self, append_suggestion):
        result = apply_all("Responda.", iter([append_suggestion]))
        assert result.endswith(append_suggestion.suggested_text)

    def test_all_heuristic_suggestions_on_bare_prompt(self, bare_prompt):
        result = apply_all(bare_prompt, analyze(bare_prompt, "").suggestions)
        assert result.startswith("Você é um assistente de IA especializado.\n\n" + bare_prompt)
        assert "Retorne a resposta no formato JSON" in result
        assert result.endswith("Evite linguagem informal.")


class TestSynthesizeOptimizedPrompt:
    def test_adds_all_sections_in_order(self, bare_prompt):
        result = synthesize_optimized_prompt(bare_prompt, "Atender clientes")
        assert result == (
            "## Objetivo\nAtender clientes\n\n"
            "## Instruções\n"
            "Você é um agente de IA altamente especializado.\n\n"
            f"{bare_prompt}\n\n"
            "## Formato de Saída\nRetorne a resposta de forma estruturada e clara.\n\n"
            "## Restrições\n"
            "- Não invente informações que não foram fornecidas\n"
            "- Mantenha a resposta focada no objetivo"
        )

    def test_objective_already_in_prompt_is_not_wrapped(self):
        prompt = "Você é um tradutor. Objetivo: traduzir manuais. Retorne texto. Nunca resuma."
        assert synthesize_optimized_prompt(prompt, "traduzir manuais") == prompt

    def test_objective_match_is_verbatim(self):
        prompt = "Você é um tradutor. Retorne texto. Nunca resuma. Traduzir manuais."
        result = synthesize_optimized_prompt(prompt, "traduzir manuais")
        assert result.startswith("## Objetivo\ntraduzir manuais\n\n## Instruções\n")

    def test_independent_of_accepted_suggestions(self, bare_prompt):
        assert analyze(bare_prompt, "").optimized_prompt == synthesize_optimized_prompt(bare_prompt)
