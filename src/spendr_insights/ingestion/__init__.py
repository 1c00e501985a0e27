"""
Ingestion — embedding expense records into the vector index.

Batch path: record source → embedding provider → vector index.  Each
record is processed independently so one bad row never aborts a run;
re-running after a partial failure is safe because writes are upserts.
"""

from spendr_insights.ingestion.pipeline import IngestionPipeline, build_metadata, render_display_text

__all__ = ["IngestionPipeline", "build_metadata", "render_display_text"]
