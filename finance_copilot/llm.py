"""Natural-language elaboration of an advisory report via the OpenAI SDK.

This is the only fallible, slow step touching the pipeline's output. It only
reads the already-computed :class:`~finance_copilot.models.AdvisoryOutput`
(rendered with :func:`~finance_copilot.report.render_for_elaboration`); a
failure here never invalidates the report itself, and retrying is a caller
concern.

The OpenAI client is passed in explicitly (or built by
:meth:`ElaborationService.from_settings`); nothing is constructed at import.
"""

from __future__ import annotations

from typing import Any

from openai import OpenAI, OpenAIError

from .config import DEFAULT_OPENAI_MODEL, Settings
from .errors import ElaborationError, ElaborationUnavailable
from .logging_setup import get_logger
from .models import AdvisoryOutput
from .report import render_for_elaboration

_logger = get_logger("finance_copilot.llm")

SYSTEM_PROMPT = """You are a personal finance copilot. Answer using ONLY the data below.
Rules:
- ALWAYS use the exact numbers from the data. Never say "income isn't provided" if the data contains "Total income: X".
- When asked about income, expenses, or money in hand: state the exact figures (Total income, Total expenses, Net).
- Be brief and natural.
- No generic advice, motivational quotes, or vague language."""


def build_messages(question: str, output: AdvisoryOutput) -> list[dict[str, str]]:
    data_text = render_for_elaboration(output)
    user_message = f"Data about the user's finances:\n{data_text}\n\nUser question: {question}"
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_message},
    ]


def _first_choice_text(completion: Any) -> str | None:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content.strip() if isinstance(content, str) else None


class ElaborationService:
    """Answers free-form questions about one advisory report.

    Parameters
    ----------
    client:
        An ``openai.OpenAI`` instance (or anything exposing
        ``chat.completions.create``).
    model, max_tokens, temperature:
        Passed through to Chat Completions.
    """

    def __init__(
        self,
        client: Any,
        *,
        model: str = DEFAULT_OPENAI_MODEL,
        max_tokens: int = 500,
        temperature: float = 0.3,
    ) -> None:
        self._client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

    @classmethod
    def from_settings(cls, settings: Settings) -> ElaborationService:
        if not settings.openai_api_key:
            raise ElaborationUnavailable("OPENAI_API_KEY is not set; add it to .env to use ask")
        client = OpenAI(api_key=settings.openai_api_key, base_url=settings.openai_base_url)
        return cls(client, model=settings.openai_model)

    def answer(self, question: str, output: AdvisoryOutput) -> str:
        """Return the model's answer to ``question`` grounded in ``output``."""

        question = question.strip()
        if not question:
            raise ValueError("question must be non-empty")

        try:
            completion = self._client.chat.completions.create(
                model=self.model,
                messages=build_messages(question, output),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except OpenAIError as e:
            _logger.warning("elaboration request failed: %s", e)
            raise ElaborationError(f"language model request failed: {e}") from e

        text = _first_choice_text(completion)
        if not text:
            raise ElaborationError("no response from the language model")
        return text


__all__ = ["SYSTEM_PROMPT", "ElaborationService", "build_messages"]
