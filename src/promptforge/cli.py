"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from promptforge.clients.errors import PromptForgeError
from promptforge.clients.llm_client import LLMClient
from promptforge.config import load_config
from promptforge.export.prompt_export import save_prompt, to_markdown
from promptforge.models.suggestion import Suggestion
from promptforge.pipeline.ai_analyzer import AIAnalyzer
from promptforge.pipeline.orchestrator import AnalysisOrchestrator
from promptforge.pipeline.patcher import apply_all
from promptforge.pipeline.rule_engine import analyze as heuristic_analyze

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="promptforge",
    help="Editor de engenharia de prompts para agentes de IA",
    no_args_is_help=True,
)
console = Console()

TYPE_STYLES = {
    "critical": ("Crítico", "red"),
    "warning": ("Atenção", "yellow"),
    "improvement": ("Melhoria", "cyan"),
    "info": ("Informação", "blue"),
}


def _read_prompt(file: Path) -> str:
    if not file.exists():
        console.print(f"[red]Arquivo não encontrado: {file}[/red]")
        raise typer.Exit(1)
    text = file.read_text(encoding="utf-8")
    if not text.strip():
        console.print("[red]O prompt está vazio.[/red]")
        raise typer.Exit(1)
    return text


def _print_suggestion(suggestion: Suggestion) -> None:
    label, color = TYPE_STYLES[suggestion.type]
    body = escape(suggestion.description)
    if suggestion.original_text and suggestion.suggested_text:
        body += (
            f"\n\n[red]- {escape(suggestion.original_text)}[/red]"
            f"\n[green]+ {escape(suggestion.suggested_text)}[/green]"
        )
    elif suggestion.suggested_text:
        body += f"\n\n[green]+ {escape(suggestion.suggested_text)}[/green]"
    console.print(
        Panel(
            body,
            title=f"[{color}]{label}[/{color}] {escape(suggestion.title)} [dim]({suggestion.id})[/dim]",
            border_style=color,
        )
    )


@app.command("analyze")
def analyze_cmd(
    file: Path = typer.Argument(help="Arquivo com o prompt"),
    objective: str = typer.Option("", "--objective", "-o", help="Objetivo do prompt"),
    ai: bool = typer.Option(False, "--ai", help="Usar análise por IA (requer ANTHROPIC_API_KEY)"),
    apply: bool = typer.Option(False, "--apply-all", help="Aplicar todas as sugestões ao prompt"),
    output: Path = typer.Option(None, "--output", help="Salvar o resultado neste arquivo"),
    markdown: bool = typer.Option(False, "--markdown", help="Salvar em Markdown"),
) -> None:
    """Analisa um prompt e sugere melhorias."""
    prompt = _read_prompt(file)
    config = load_config()

    llm = None
    analyzer = None
    if ai:
        llm = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
        analyzer = AIAnalyzer(llm, model=config.llm.model, temperature=config.llm.temperature)
    orchestrator = AnalysisOrchestrator(analyzer, simulated_delay=0)

    with console.status("Analisando seu prompt..."):
        try:
            outcome = asyncio.run(
                orchestrator.run(prompt, objective, engine="ai" if ai else "heuristic")
            )
        except PromptForgeError as e:
            console.print(f"[red]{e.user_message}[/red] [dim]({e.status_code})[/dim]")
            raise typer.Exit(1)
        except Exception:
            logger.exception("Prompt analysis failed")
            console.print("[red]Ocorreu um erro inesperado na análise.[/red]")
            raise typer.Exit(1)

    result = outcome.result
    if outcome.score is not None:
        console.print(Panel(f"Pontuação: [bold]{outcome.score}[/bold]/100\n{escape(outcome.summary)}", title="Resumo"))
    if llm is not None:
        usage = llm.get_token_summary()
        console.print(f"[dim]Tokens: {usage['input']} entrada / {usage['output']} saída[/dim]")

    if not result.suggestions:
        console.print("[green]Nenhuma sugestão: o prompt já cobre os pontos verificados.[/green]")
    for suggestion in result.suggestions:
        _print_suggestion(suggestion)

    final = apply_all(prompt, result.suggestions) if apply else result.optimized_prompt
    title = "Prompt com sugestões aplicadas" if apply else "Prompt Otimizado"
    console.print(Panel(Text(final), title=title, border_style="green"))

    if output:
        path = save_prompt(final, output, markdown=markdown)
        console.print(f"[green]Salvo: {path}[/green]")


@app.command("apply")
def apply_cmd(
    file: Path = typer.Argument(help="Arquivo com o prompt"),
    ids: list[str] = typer.Option(..., "--id", help="ID da sugestão a aplicar (repetível)"),
    objective: str = typer.Option("", "--objective", "-o", help="Objetivo do prompt"),
    output: Path = typer.Option(None, "--output", help="Salvar o resultado neste arquivo"),
) -> None:
    """Aplica sugestões da análise heurística, na ordem informada."""
    prompt = _read_prompt(file)
    result = heuristic_analyze(prompt, objective)
    by_id = {s.id: s for s in result.suggestions}

    unknown = [i for i in ids if i not in by_id]
    if unknown:
        console.print(f"[red]Sugestões inexistentes: {', '.join(unknown)}[/red]")
        raise typer.Exit(1)

    patched = apply_all(prompt, [by_id[i] for i in ids])
    if output:
        path = save_prompt(patched, output)
        console.print(f"[green]Salvo: {path}[/green]")
    else:
        console.print(patched, markup=False)


@app.command("export")
def export_cmd(
    file: Path = typer.Argument(help="Arquivo com o prompt"),
    markdown: bool = typer.Option(False, "--markdown", help="Exportar em Markdown"),
    output: Path = typer.Option(None, "--output", help="Arquivo de saída"),
) -> None:
    """Exporta o prompt em texto puro ou Markdown."""
    prompt = _read_prompt(file)
    if output is None:
        console.print(to_markdown(prompt) if markdown else prompt, markup=False)
        return
    path = save_prompt(prompt, output, markdown=markdown)
    console.print(f"[green]Exportado: {path}[/green]")


if __name__ == "__main__":
    app()
