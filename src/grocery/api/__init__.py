"""FastAPI service exposing the consolidation engine."""
