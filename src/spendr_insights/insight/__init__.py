"""
Insight — the retrieval-and-insight workflow built with LangGraph.

Public API
----------
- :class:`InsightPipeline` — query text → insight string / tagged result.
- :func:`summarize` — pure aggregation of retrieved expenses.
- :data:`NO_DATA_MESSAGE`, :data:`NO_INSIGHT_MESSAGE` — sentinel outputs.
"""

from spendr_insights.insight.aggregation import parse_hits, summarize
from spendr_insights.insight.pipeline import InsightPipeline
from spendr_insights.insight.prompts import NO_DATA_MESSAGE, NO_INSIGHT_MESSAGE

__all__ = [
    "NO_DATA_MESSAGE",
    "NO_INSIGHT_MESSAGE",
    "InsightPipeline",
    "parse_hits",
    "summarize",
]
