"""Prompt templates and output cleaning for the insight workflow.

Keeping prompts in one place makes them easy to audit, version, and A/B
test.
"""

from __future__ import annotations

from collections.abc import Sequence

from langchain_core.messages import BaseMessage, HumanMessage

from spendr_insights.models import RetrievedExpense, TrendSummary

NO_DATA_MESSAGE = "⚠️ No valid expenses found for the query."
NO_INSIGHT_MESSAGE = "⚠️ The model didn't return meaningful insights."

# Control tokens some instruct models echo back verbatim.
BOILERPLATE_MARKERS: tuple[str, ...] = ("<s>", "</s>", "[OUT]", "[/OUT]", "[INST]", "[/INST]")


# ── Context block ──────────────────────────────────────────────────────


def format_context(expenses: Sequence[RetrievedExpense], summary: TrendSummary) -> str:
    """Render the retrieved expenses and their summary as a fixed-format block."""
    lines = ["Top expenses:"]
    lines.extend(f"- {e.note}: ${e.amount:.2f} on {e.date}" for e in expenses)
    lines.append("")
    lines.append(f"Total spending: ${summary.total:.2f}")
    if summary.trend:
        lines.append(summary.trend)
    return "\n".join(lines)


# ── 1. Insight prompt ─────────────────────────────────────────────────

INSIGHT_TEMPLATE = """\
You are Spendr, a friendly personal finance AI assistant.
Here is a summary of some recent expenses:

{context}

Please provide a clear, warm, and helpful insight, including:
- Notable spending patterns
- Month-over-month trend (if available)
- 1-2 actionable suggestions to improve spending
"""


def build_insight_prompt(context: str) -> list[BaseMessage]:
    """Build the single user message for the primary generation call."""
    return [HumanMessage(content=INSIGHT_TEMPLATE.format(context=context))]


# ── 2. Retry prompt ───────────────────────────────────────────────────

RETRY_TEMPLATE = "Write a short, friendly summary of these expenses:\n{context}"


def build_retry_prompt(context: str) -> list[BaseMessage]:
    """Build the shorter prompt used once when the first answer is degenerate."""
    return [HumanMessage(content=RETRY_TEMPLATE.format(context=context))]


# ── Output cleaning ────────────────────────────────────────────────────


def clean_generated_text(text: str | None) -> str:
    """Strip echoed control tokens and surrounding whitespace."""
    cleaned = (text or "").strip()
    for marker in BOILERPLATE_MARKERS:
        cleaned = cleaned.replace(marker, "")
    return cleaned.strip()
