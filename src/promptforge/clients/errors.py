"""Errors raised at the remote analysis boundary."""

from __future__ import annotations


class PromptForgeError(Exception):
    """Base class for remote analysis failures shown to the user."""

    status_code: int | None = None
    user_message = "Falha ao analisar o prompt. Tente novamente."

    def __init__(self, message: str = "", *, status_code: int | None = None):
        super().__init__(message or self.user_message)
        if status_code is not None:
            self.status_code = status_code


class AnalysisError(PromptForgeError):
    """Transport failure, non-2xx status or an error payload from the model."""

    status_code = 500


class RateLimitError(PromptForgeError):
    status_code = 429
    user_message = "Limite de requisições excedido. Tente novamente mais tarde."


class QuotaExceededError(PromptForgeError):
    status_code = 402
    user_message = "Créditos esgotados. Adicione fundos para continuar."
