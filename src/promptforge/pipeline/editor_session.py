"""Editing session state: which suggestions were applied or dismissed."""

from __future__ import annotations

from dataclasses import dataclass, field

from promptforge.models.suggestion import AnalysisResult, Suggestion
from promptforge.pipeline import patcher
from promptforge.pipeline.rule_engine import analyze


@dataclass
class EditorSession:
    """Caller-owned bookkeeping around one prompt being edited.

    Suggestions never track their own state; the session holds the set of
    applied ids and drops dismissed suggestions from its list.
    """

    prompt: str = ""
    objective: str = ""
    suggestions: list[Suggestion] = field(default_factory=list)
    optimized_prompt: str = ""
    applied_ids: set[str] = field(default_factory=set)
    show_output: bool = False

    def load(self, result: AnalysisResult) -> None:
        """Replace the current suggestions with a fresh analysis result."""
        self.suggestions = list(result.suggestions)
        self.optimized_prompt = result.optimized_prompt
        self.applied_ids = set()
        self.show_output = False

    def get(self, suggestion_id: str) -> Suggestion:
        for suggestion in self.suggestions:
            if suggestion.id == suggestion_id:
                return suggestion
        raise KeyError(suggestion_id)

    @property
    def pending(self) -> list[Suggestion]:
        return [s for s in self.suggestions if s.id not in self.applied_ids]

    @property
    def progress(self) -> tuple[int, int]:
        """(applied, total) counts for display."""
        return len(self.applied_ids), len(self.suggestions)

    def apply(self, suggestion_id: str) -> str:
        suggestion = self.get(suggestion_id)
        self.prompt = patcher.apply_one(self.prompt, suggestion)
        self.applied_ids.add(suggestion_id)
        return self.prompt

    def dismiss(self, suggestion_id: str) -> None:
        self.suggestions = [s for s in self.suggestions if s.id != suggestion_id]

    def apply_all(self) -> str:
        """Apply every pending suggestion in list order and mark them applied."""
        pending = self.pending
        self.prompt = patcher.apply_all(self.prompt, pending)
        self.applied_ids.update(s.id for s in pending)
        return self.prompt

    def finalize(self) -> str:
        """Recompute the optimized prompt from the current text."""
        self.optimized_prompt = analyze(self.prompt, self.objective).optimized_prompt
        self.show_output = True
        return self.optimized_prompt

    def reset(self) -> None:
        self.prompt = ""
        self.objective = ""
        self.suggestions = []
        self.optimized_prompt = ""
        self.applied_ids = set()
        self.show_output = False
