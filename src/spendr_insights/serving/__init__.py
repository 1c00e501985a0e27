"""
Serving — FastAPI application exposing ingestion and insights over HTTP.
"""
