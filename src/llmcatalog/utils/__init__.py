"""Shared helpers used across llmcatalog."""
