"""Pydantic models for prompt analysis suggestions."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SuggestionType = Literal["critical", "warning", "improvement", "info"]


class Suggestion(BaseModel):
    """One detected issue or improvement opportunity in a prompt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = ""
    type: SuggestionType = "info"
    title: str
    description: str
    original_text: str | None = Field(default=None, alias="originalText")
    suggested_text: str | None = Field(default=None, alias="suggestedText")

    @field_validator("original_text", "suggested_text", mode="before")
    @classmethod
    def _empty_as_none(cls, value):
        # Remote payloads send "" for "not applicable"
        if value == "":
            return None
        return value

    @property
    def is_applicable(self) -> bool:
        return self.suggested_text is not None


class AnalysisResult(BaseModel):
    """Output of one analysis run."""

    suggestions: list[Suggestion] = []
    optimized_prompt: str


class AIAnalysisResult(AnalysisResult):
    score: int = 0  # 0-100
    summary: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, value):
        if value is None:
            return 0
        return max(0, min(100, int(value)))
