"""Data models for prompt analysis."""

from promptforge.models.suggestion import (
    AIAnalysisResult,
    AnalysisResult,
    Suggestion,
    SuggestionType,
)

__all__ = [
    "AIAnalysisResult",
    "AnalysisResult",
    "Suggestion",
    "SuggestionType",
]
