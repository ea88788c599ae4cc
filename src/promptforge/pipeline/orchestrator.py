"""Analysis orchestrator - picks an engine and times the run."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Literal

from promptforge.models.suggestion import AIAnalysisResult, AnalysisResult
from promptforge.pipeline.ai_analyzer import AIAnalyzer
from promptforge.pipeline.rule_engine import analyze

logger = logging.getLogger(__name__)

Engine = Literal["heuristic", "ai"]


@dataclass
class AnalysisOutcome:
    """Result of one analysis request plus run metadata."""

    result: AnalysisResult
    engine: Engine
    elapsed_seconds: float = 0.0

    @property
    def score(self) -> int | None:
        if isinstance(self.result, AIAnalysisResult):
            return self.result.score
        return None

    @property
    def summary(self) -> str:
        if isinstance(self.result, AIAnalysisResult):
            return self.result.summary
        return ""


class AnalysisOrchestrator:
    """Run a prompt through the heuristic or the AI engine."""

    def __init__(
        self,
        ai_analyzer: AIAnalyzer | None = None,
        *,
        simulated_delay: float = 1.5,
    ):
        self.ai_analyzer = ai_analyzer
        self.simulated_delay = simulated_delay

    async def run(
        self,
        prompt: str,
        objective: str = "",
        engine: Engine = "heuristic",
    ) -> AnalysisOutcome:
        """Analyze ``prompt`` with the requested engine.

        Raises:
            ValueError: blank prompt, unknown engine, or AI engine requested
                without an analyzer.
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt is required")

        start = time.monotonic()
        if engine == "heuristic":
            if self.simulated_delay > 0:
                await asyncio.sleep(self.simulated_delay)
            result: AnalysisResult = analyze(prompt, objective)
        elif engine == "ai":
            if self.ai_analyzer is None:
                raise ValueError("AI engine requested but no analyzer is configured")
            result = await self.ai_analyzer.analyze(prompt, objective)
        else:
            raise ValueError(f"Unknown engine: {engine}")

        elapsed = time.monotonic() - start
        logger.info(
            "Analysis done: engine=%s, %d suggestions, %.1fs",
            engine, len(result.suggestions), elapsed,
        )
        return AnalysisOutcome(result=result, engine=engine, elapsed_seconds=elapsed)
