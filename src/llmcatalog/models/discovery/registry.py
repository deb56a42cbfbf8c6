"""Registry mapping provider names to discovery strategies.

The registry is an explicit object built by the composition root rather than
module-level state, so tests and applications can hold independent registries.
Providers without a dedicated strategy fall back to the OpenAI-compatible one.
"""

from __future__ import annotations

from functools import partial
from typing import Dict, Optional

from llmcatalog._internal.exceptions import RegistryError
from llmcatalog.models.discovery import parsers
from llmcatalog.models.discovery.provider_api import DiscoveryStrategy, ProviderStrategy

DEFAULT_STRATEGY = "openai"


class StrategyRegistry:
    """Lookup table of :class:`DiscoveryStrategy` implementations."""

    def __init__(self, *, default: str = DEFAULT_STRATEGY) -> None:
        self._strategies: Dict[str, DiscoveryStrategy] = {}
        self._default = default

    def register(self, strategy: DiscoveryStrategy, *, replace: bool = False) -> None:
        """Register a discovery strategy implementation."""

        if strategy.name in self._strategies and not replace:
            raise RegistryError(
                f"Discovery strategy '{strategy.name}' is already registered",
                context={"strategy": strategy.name},
            )
        self._strategies[strategy.name] = strategy

    def get(self, name: Optional[str]) -> DiscoveryStrategy:
        """Return the strategy for ``name``, or the default one when unknown."""

        if name and name in self._strategies:
            return self._strategies[name]
        try:
            return self._strategies[self._default]
        except KeyError as exc:
            available = ", ".join(sorted(self._strategies)) or "<none>"
            raise RegistryError(
                f"No strategy for '{name}' and default '{self._default}' is not registered. "
                f"Known: {available}"
            ) from exc

    def __contains__(self, name: object) -> bool:
        return name in self._strategies

    def names(self) -> list[str]:
        """Return the sorted list of registered strategy names."""

        return sorted(self._strategies)


def default_registry() -> StrategyRegistry:
    """Build a registry holding the built-in vendor strategies."""

    registry = StrategyRegistry()
    builtins = [
        ProviderStrategy(DEFAULT_STRATEGY, parsers.parse_openai_compatible),
        ProviderStrategy("alibaba", parsers.parse_alibaba),
        ProviderStrategy("baichuan", parsers.parse_baichuan),
        ProviderStrategy("baidu", parsers.parse_baidu),
        ProviderStrategy("bytedance", parsers.parse_bytedance, parsers.enrich_bytedance),
        ProviderStrategy("coze", parsers.parse_coze, parsers.enrich_coze),
        ProviderStrategy("iflytek", parsers.parse_iflytek, parsers.enrich_iflytek),
        ProviderStrategy("minimax", parsers.parse_minimax, parsers.enrich_minimax),
        ProviderStrategy(
            "stepfun",
            partial(parsers.parse_openai_compatible, owner="stepfun"),
            parsers.enrich_stepfun,
        ),
        ProviderStrategy("tencent", parsers.parse_tencent),
        ProviderStrategy(
            "xai", partial(parsers.parse_openai_compatible, owner="xai"), parsers.enrich_xai
        ),
        ProviderStrategy(
            "yi", partial(parsers.parse_openai_compatible, owner="yi"), parsers.enrich_yi
        ),
    ]
    for strategy in builtins:
        registry.register(strategy)
    return registry


__all__ = ["DEFAULT_STRATEGY", "StrategyRegistry", "default_registry"]
