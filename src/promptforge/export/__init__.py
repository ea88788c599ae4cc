"""Prompt export module for promptforge."""
from promptforge.export.prompt_export import (
    export_filename,
    save_prompt,
    to_markdown,
    to_text,
)

__all__ = ["export_filename", "save_prompt", "to_markdown", "to_text"]
