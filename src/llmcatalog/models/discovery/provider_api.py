"""Protocol definitions for provider-specific discovery behaviour.

A provider plugs into discovery by supplying two functions rather than by
subclassing: ``parse`` turns a raw model-list response into bare records and
``enrich`` adjusts the rule-based capabilities of each record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Protocol

from llmcatalog.models.discovery.types import ModelCapabilities, ModelRecord

ParseFn = Callable[[Any], List[ModelRecord]]
EnrichFn = Callable[[str, ModelCapabilities], ModelCapabilities]


class DiscoveryStrategy(Protocol):
    """Minimal interface a provider discovery adapter must implement."""

    name: str  # strategy slug (e.g., "openai", "alibaba")

    def parse(self, raw: Any) -> List[ModelRecord]:
        """Return bare records found in ``raw``; an unknown shape yields ``[]``."""

    def enrich(self, model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
        """Return ``capabilities`` adjusted with provider-specific knowledge."""


def keep_capabilities(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    return capabilities


@dataclass(frozen=True)
class ProviderStrategy:
    """Concrete :class:`DiscoveryStrategy` assembled from plain functions."""

    name: str
    parse_fn: ParseFn
    enrich_fn: EnrichFn = keep_capabilities

    def parse(self, raw: Any) -> List[ModelRecord]:
        return self.parse_fn(raw)

    def enrich(self, model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
        return self.enrich_fn(model_name, capabilities)


__all__ = ["DiscoveryStrategy", "EnrichFn", "ParseFn", "ProviderStrategy", "keep_capabilities"]
