"""Plain-text renderings of an :class:`~finance_copilot.models.AdvisoryOutput`."""

from __future__ import annotations

from .models import AdvisoryOutput


def _bullets(items: tuple[str, ...], prefix: str = "- ") -> list[str]:
    return [f"{prefix}{item}" for item in items]


def format_report(output: AdvisoryOutput) -> str:
    """Render the four-section Markdown report.

    Sections appear in a fixed order (Summary, Key Insights, Risks / Warnings,
    Actionable Suggestions), separated by one blank line, with every list item
    as a ``- `` bullet. The result is well formed whatever the agents did,
    since every list carries at least a placeholder.
    """

    lines = [
        "## Summary",
        output.summary,
        "",
        "## Key Insights",
        *_bullets(output.key_insights),
        "",
        "## Risks / Warnings",
        *_bullets(output.risks_warnings),
        "",
        "## Actionable Suggestions",
        *_bullets(output.actionable_suggestions),
    ]
    return "\n".join(lines)


def render_for_elaboration(output: AdvisoryOutput) -> str:
    """Text handed to the language model: numbers first, then the advice."""

    parts = [
        "FINANCIAL DATA (use these exact numbers):",
        *_bullets(output.key_insights, " - "),
        "",
        f"Summary: {output.summary}",
        "",
        "Risks:",
        *(_bullets(output.risks_warnings, " - ") or [" - None"]),
        "",
        "Actionable suggestions:",
        *_bullets(output.actionable_suggestions, " - "),
    ]
    return "\n".join(parts)


__all__ = ["format_report", "render_for_elaboration"]
