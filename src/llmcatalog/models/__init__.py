"""Model discovery for configured LLM providers."""
