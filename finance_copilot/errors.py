"""Exception types raised by ``finance_copilot`` collaborators.

The analysis pipeline itself never raises for bad data: agent failures are
carried as values in :class:`~finance_copilot.models.AgentResult`. These
exceptions belong to the layers around it (context providers, the language
model elaboration step) and are mapped to exit codes by the CLI.
"""

from __future__ import annotations


class FinanceCopilotError(Exception):
    """Base class for all package errors."""


class ContextProviderError(FinanceCopilotError):
    """A context provider could not materialize a user's records."""


class ElaborationError(FinanceCopilotError):
    """The language model call failed or returned nothing usable."""


class ElaborationUnavailable(ElaborationError):
    """No API key is configured, so elaboration cannot run at all."""


__all__ = [
    "ContextProviderError",
    "ElaborationError",
    "ElaborationUnavailable",
    "FinanceCopilotError",
]
