"""Command line interface for llmcatalog."""
