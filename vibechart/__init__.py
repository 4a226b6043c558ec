"""LLM-assisted chart configuration service."""
