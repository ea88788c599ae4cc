"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 3
    timeout: int = 60
    temperature: float = 0.7

    def __post_init__(self) -> None:
        _check_range("max_retries", self.max_retries, 1, 10)
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("temperature", self.temperature, 0.0, 1.0)


@dataclass(frozen=True)
class AnalysisConfig:
    default_engine: str = "heuristic"
    simulated_delay: float = 1.5

    def __post_init__(self) -> None:
        if self.default_engine not in ("heuristic", "ai"):
            raise ValueError(f"default_engine must be 'heuristic' or 'ai', got {self.default_engine!r}")
        _check_range("simulated_delay", self.simulated_delay, 0.0, 10.0)


@dataclass(frozen=True)
class UIConfig:
    max_prompt_chars: int = 20000
    editor_height: int = 400

    def __post_init__(self) -> None:
        _check_range("max_prompt_chars", self.max_prompt_chars, 1, 200000)


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        analysis=AnalysisConfig(**raw.get("analysis", {})),
        ui=UIConfig(**raw.get("ui", {})),
    )
