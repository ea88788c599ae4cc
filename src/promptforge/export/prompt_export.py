"""Plain-text and Markdown serialization of a prompt."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

MARKDOWN_TITLE = "Prompt Otimizado"


def to_text(prompt: str) -> str:
    return prompt


def to_markdown(prompt: str, generated_at: datetime | None = None) -> str:
    """Wrap the prompt in a fenced block with a generation footer."""
    generated_at = generated_at or datetime.now()
    stamp = generated_at.strftime("%d/%m/%Y, %H:%M:%S")
    return f"# {MARKDOWN_TITLE}\n\n```\n{prompt}\n```\n\n---\n*Gerado em {stamp}*"


def export_filename(extension: str, today: date | None = None) -> str:
    """Return ``prompt-YYYY-MM-DD.<extension>``."""
    today = today or date.today()
    return f"prompt-{today.isoformat()}.{extension.lstrip('.')}"


def save_prompt(prompt: str, output_path: str | Path, *, markdown: bool = False) -> Path:
    """Write the prompt to disk as text or Markdown."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = to_markdown(prompt) if markdown else to_text(prompt)
    path.write_text(content, encoding="utf-8")
    return path
