"""Data models for the grocery consolidation engine."""
