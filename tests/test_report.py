from __future__ import annotations

from finance_copilot.models import AdvisoryOutput
from finance_copilot.report import format_report, render_for_elaboration

OUTPUT = AdvisoryOutput(
    summary="All good.",
    key_insights=("Total income: ₹100.", "You spent ₹50 over 1 month(s)."),
    risks_warnings=("No major risks from your data.",),
    actionable_suggestions=("Save more.",),
)


def test_format_report_has_four_sections_in_order():
    assert format_report(OUTPUT) == "\n".join(
        [
            "## Summary",
            "All good.",
            "",
            "## Key Insights",
            "- Total income: ₹100.",
            "- You spent ₹50 over 1 month(s).",
            "",
            "## Risks / Warnings",
            "- No major risks from your data.",
            "",
            "## Actionable Suggestions",
            "- Save more.",
        ]
    )


def test_render_for_elaboration_puts_numbers_first():
    text = render_for_elaboration(OUTPUT)
    lines = text.splitlines()

    assert lines[0] == "FINANCIAL DATA (use these exact numbers):"
    assert lines[1] == " - Total income: ₹100."
    assert "Summary: All good." in lines
    assert lines.index("Risks:") < lines.index("Actionable suggestions:")
    assert lines[-1] == " - Save more."
