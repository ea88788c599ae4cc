"""Streamlit Web UI for promptforge.

Paste an agent prompt, optionally state an objective, and review the
suggestions from either engine:
  A) Heuristic — local pattern rules, instant and free
  B) AI        — Claude analysis with score and summary
Apply or dismiss suggestions one by one (or all at once), then generate and
export the optimized prompt.
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so backend clients can read them
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from promptforge.clients.errors import PromptForgeError
from promptforge.clients.llm_client import LLMClient
from promptforge.config import load_config
from promptforge.export.prompt_export import export_filename, to_markdown, to_text
from promptforge.models.suggestion import Suggestion
from promptforge.pipeline.ai_analyzer import AIAnalyzer
from promptforge.pipeline.editor_session import EditorSession
from promptforge.pipeline.orchestrator import AnalysisOrchestrator

PROMPT_PLACEHOLDER = """Cole seu prompt aqui...

Exemplo:
Você é um assistente de IA que ajuda desenvolvedores.

<tools>
{
  "name": "search_docs",
  "description": "Busca na documentação"
}
</tools>

Quando o usuário perguntar sobre código..."""

TYPE_LABELS = {
    "critical": ("Crítico", "red"),
    "warning": ("Atenção", "orange"),
    "improvement": ("Melhoria", "blue"),
    "info": ("Informação", "violet"),
}

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="PromptForge",
    page_icon=":hammer_and_wrench:",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Password gate (only when APP_PASSWORD is configured)
# ---------------------------------------------------------------------------

try:
    APP_PASSWORD = st.secrets["APP_PASSWORD"]
except Exception:
    APP_PASSWORD = os.environ.get("APP_PASSWORD", "")

if "authenticated" not in st.session_state:
    st.session_state.authenticated = not APP_PASSWORD

if not st.session_state.authenticated:
    st.markdown("## PromptForge")
    pw = st.text_input("Digite a senha", type="password")
    if pw and pw == APP_PASSWORD:
        st.session_state.authenticated = True
        st.rerun()
    elif pw:
        st.error("Senha incorreta")
    st.stop()

config = load_config()

if "editor" not in st.session_state:
    st.session_state.editor = EditorSession()
editor: EditorSession = st.session_state.editor

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("PromptForge")
    st.caption("Editor de Engenharia de Prompts")

    engine_label = st.radio(
        "Motor de análise",
        ["Heurístico", "IA (Claude)"],
        index=0 if config.analysis.default_engine == "heuristic" else 1,
        help="O motor heurístico roda localmente. A análise por IA requer ANTHROPIC_API_KEY.",
    )
    engine = "heuristic" if engine_label == "Heurístico" else "ai"

    st.divider()

    if st.button("Limpar", use_container_width=True):
        editor.reset()
        for key in ("prompt_input", "objective_input", "ai_meta"):
            st.session_state.pop(key, None)
        st.rerun()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_orchestrator(engine: str) -> tuple[AnalysisOrchestrator, LLMClient | None]:
    llm = None
    analyzer = None
    if engine == "ai":
        try:
            llm = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
        except Exception as e:
            raise RuntimeError(f"Falha ao iniciar o cliente LLM — verifique ANTHROPIC_API_KEY: {e}") from e
        analyzer = AIAnalyzer(llm, model=config.llm.model, temperature=config.llm.temperature)
    return AnalysisOrchestrator(analyzer, simulated_delay=config.analysis.simulated_delay), llm


def _sync_prompt_widget() -> None:
    """Queue the session's prompt for the editor widget on the next run."""
    st.session_state["pending_prompt"] = editor.prompt


def _run_analysis() -> bool:
    editor.prompt = st.session_state.get("prompt_input", "")
    editor.objective = st.session_state.get("objective_input", "")
    st.session_state.pop("ai_meta", None)

    try:
        orchestrator, llm = _build_orchestrator(engine)
    except RuntimeError as e:
        st.error(str(e))
        return False

    with st.spinner("Analisando seu prompt..."):
        try:
            outcome = asyncio.run(orchestrator.run(editor.prompt, editor.objective, engine=engine))
        except PromptForgeError as e:
            logger.warning("Remote analysis failed: %s", e)
            st.error(e.user_message)
            return False
        except Exception:
            logger.exception("Prompt analysis failed")
            st.error("Ocorreu um erro. Tente novamente em instantes.")
            return False

    editor.load(outcome.result)
    if outcome.score is not None:
        usage = llm.get_token_summary() if llm is not None else {"input": 0, "output": 0}
        st.session_state["ai_meta"] = (outcome.score, outcome.summary, usage)
    return True


def _render_suggestion(suggestion: Suggestion) -> None:
    label, color = TYPE_LABELS[suggestion.type]
    applied = suggestion.id in editor.applied_ids

    with st.container(border=True):
        status = ":white_check_mark: " if applied else ""
        st.markdown(f"{status}:{color}[**{label}**] {suggestion.title}")
        st.caption(suggestion.description)

        if suggestion.original_text and suggestion.suggested_text:
            st.code(f"- {suggestion.original_text}\n+ {suggestion.suggested_text}", language="diff")
        elif suggestion.suggested_text:
            st.code(f"+ {suggestion.suggested_text}", language="diff")

        if not applied:
            col_apply, col_dismiss, _ = st.columns([1, 1, 4])
            with col_apply:
                if st.button("Aplicar", key=f"apply_{suggestion.id}"):
                    editor.apply(suggestion.id)
                    _sync_prompt_widget()
                    st.rerun()
            with col_dismiss:
                if st.button("Ignorar", key=f"dismiss_{suggestion.id}"):
                    editor.dismiss(suggestion.id)
                    st.rerun()


def _render_output() -> None:
    st.subheader("Prompt Otimizado")
    st.code(editor.optimized_prompt, language="markdown")

    dl_cols = st.columns(2)
    with dl_cols[0]:
        st.download_button(
            label=".txt",
            data=to_text(editor.optimized_prompt).encode("utf-8"),
            file_name=export_filename("txt"),
            mime="text/plain",
        )
    with dl_cols[1]:
        st.download_button(
            label=".md",
            data=to_markdown(editor.optimized_prompt).encode("utf-8"),
            file_name=export_filename("md"),
            mime="text/markdown",
        )

    if st.button("← Voltar para Análise"):
        editor.show_output = False
        st.rerun()


def _render_analysis() -> None:
    applied, total = editor.progress
    header_cols = st.columns([3, 1])
    with header_cols[0]:
        st.subheader(f"Análise ({applied}/{total})" if total else "Análise")
    with header_cols[1]:
        if editor.pending and st.button("Aplicar Todas"):
            editor.apply_all()
            _sync_prompt_widget()
            st.rerun()

    meta = st.session_state.get("ai_meta")
    if meta:
        score, summary, usage = meta
        st.metric("Pontuação", f"{score}/100")
        st.caption(f"Tokens: {usage['input']:,} entrada / {usage['output']:,} saída")
        if summary:
            st.info(summary)

    if not editor.suggestions:
        st.caption('Clique em "Analisar" para receber sugestões de melhoria')
        return

    for suggestion in editor.suggestions:
        _render_suggestion(suggestion)


# ---------------------------------------------------------------------------
# Main layout
# ---------------------------------------------------------------------------

st.text_input(
    "Objetivo (opcional)",
    key="objective_input",
    placeholder="Ex.: respostas técnicas e concisas para desenvolvedores",
    max_chars=500,
)

# Widget state can only be written before the widget renders
if "pending_prompt" in st.session_state:
    st.session_state["prompt_input"] = st.session_state.pop("pending_prompt")

col_editor, col_panel = st.columns(2)

with col_editor:
    st.subheader("Prompt Original")
    st.text_area(
        "Prompt",
        key="prompt_input",
        height=config.ui.editor_height,
        placeholder=PROMPT_PLACEHOLDER,
        max_chars=config.ui.max_prompt_chars,
        label_visibility="collapsed",
    )
    current_prompt = st.session_state.get("prompt_input", "")
    editor.prompt = current_prompt
    editor.objective = st.session_state.get("objective_input", "")

    if st.button("Analisar", type="primary", disabled=not current_prompt.strip()):
        if _run_analysis():
            st.rerun()

    if editor.suggestions and not editor.show_output:
        if st.button("Gerar Prompt Otimizado", type="secondary"):
            editor.finalize()
            st.rerun()

with col_panel:
    if editor.show_output:
        _render_output()
    else:
        _render_analysis()

st.divider()
st.caption("PromptForge — Editor de Engenharia de Prompts para Agentes de IA")
