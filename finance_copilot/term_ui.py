"""Interactive question loop for the ``ask`` command (prompt_toolkit-based).

Kept apart from the CLI wiring so it can be driven in tests with a pipe input
and a dummy output.
"""

from __future__ import annotations

from collections.abc import Callable

from prompt_toolkit import PromptSession

from .errors import ElaborationError

EXIT_WORDS = frozenset({"exit", "quit", "bye", "q", "no"})


def is_exit(text: str) -> bool:
    return text.strip().lower() in EXIT_WORDS


def chat_loop(
    answer: Callable[[str], str],
    *,
    session: PromptSession | None = None,
    echo: Callable[[str], None] = print,
    message: str = "You: ",
) -> int:
    """Ask questions until the user leaves; return how many were answered.

    A failed answer is reported and the loop keeps going. End of input or
    Ctrl-C leave the loop like an exit word does.
    """

    session = session or PromptSession()
    answered = 0
    while True:
        try:
            question = session.prompt(message)
        except (EOFError, KeyboardInterrupt):
            echo("Bye.")
            return answered
        if is_exit(question):
            echo("Bye.")
            return answered
        if not question.strip():
            continue
        try:
            reply = answer(question)
        except (ElaborationError, ValueError) as e:
            echo(f"Error: {e}")
            continue
        answered += 1
        echo(f"\nCopilot: {reply}\n")


__all__ = ["EXIT_WORDS", "chat_loop", "is_exit"]
