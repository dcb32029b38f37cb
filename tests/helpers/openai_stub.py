"""Test helpers to stub the OpenAI Chat Completions client used by llm.py.

The stub records every ``chat.completions.create`` call and answers with a
fixed reply, or raises a given exception, so tests can assert on the prompt
the service built without any network access.
"""

from __future__ import annotations

from typing import Any


class _Message:
    def __init__(self, content: str | None) -> None:
        self.content = content


class _Choice:
    def __init__(self, content: str | None) -> None:
        self.message = _Message(content)


class _Completion:
    def __init__(self, content: str | None) -> None:
        self.choices = [] if content is None else [_Choice(content)]


class OpenAIStub:
    """Minimal stub matching the ``openai.OpenAI`` shape for ``llm.py``.

    Parameters
    ----------
    reply:
        Text returned as the first choice's message content. ``None`` returns a
        completion with no choices at all.
    error:
        When given, raised from ``create`` instead of replying.
    """

    def __init__(self, reply: str | None = "ok", *, error: Exception | None = None) -> None:
        self._reply = reply
        self._error = error
        self._calls: list[dict[str, Any]] = []

        class _Completions:
            def __init__(self, outer: OpenAIStub) -> None:
                self._outer = outer

            def create(self, **kwargs):
                self._outer._calls.append(kwargs)
                if self._outer._error is not None:
                    raise self._outer._error
                return _Completion(self._outer._reply)

        class _Chat:
            def __init__(self, outer: OpenAIStub) -> None:
                self.completions = _Completions(outer)

        self.chat = _Chat(self)

    # Expose the captured calls list for assertions
    @property
    def calls(self) -> list[dict[str, Any]]:
        return self._calls
