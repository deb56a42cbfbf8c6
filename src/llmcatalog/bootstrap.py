"""Composition root wiring configuration into running discovery.

Everything that would otherwise be process-wide (the strategy registry, the
cache store, the monitor) is created here and passed down explicitly.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Optional

from llmcatalog.core.config import CatalogConfig, ProviderSettings, load_config
from llmcatalog.models.discovery.cache import JsonFileModelCache, ModelCache
from llmcatalog.models.discovery.initializer import ProviderInitializer
from llmcatalog.models.discovery.monitor import GlobalMonitor
from llmcatalog.models.discovery.registry import StrategyRegistry, default_registry
from llmcatalog.models.discovery.transport import ModelListClient

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str, ProviderSettings], ModelListClient]


def build_cache(config: CatalogConfig) -> JsonFileModelCache:
    """Create the file cache, honouring per-provider ``modelsFile`` overrides."""
    paths = {
        name: settings.models_file
        for name, settings in config.providers.items()
        if settings.models_file
    }
    return JsonFileModelCache(config.discovery.cache_dir, paths=paths)


def default_client_factory(config: CatalogConfig) -> ClientFactory:
    def factory(name: str, settings: ProviderSettings) -> ModelListClient:
        return ModelListClient(
            timeout=settings.timeout or config.discovery.fetch_timeout,
            headers=settings.headers,
        )

    return factory


def build_initializer(
    name: str,
    settings: ProviderSettings,
    *,
    cache: ModelCache,
    strategies: StrategyRegistry,
    client: Optional[ModelListClient] = None,
) -> ProviderInitializer:
    """Create (and thereby start) the initializer for one provider."""
    strategy = strategies.get(settings.strategy or name)
    logger.debug("Starting discovery for %s with strategy %s", name, strategy.name)
    return ProviderInitializer(
        name, settings, cache=cache, strategy=strategy, client=client
    )


def build_initializers(
    config: CatalogConfig,
    *,
    providers: Optional[Iterable[str]] = None,
    cache: Optional[ModelCache] = None,
    strategies: Optional[StrategyRegistry] = None,
    client_factory: Optional[ClientFactory] = None,
) -> Dict[str, ProviderInitializer]:
    """Start one initializer per selected provider.

    Args:
        config: Loaded configuration.
        providers: Provider names to start; all configured providers when None.
        cache: Snapshot store; a :class:`JsonFileModelCache` when omitted.
        strategies: Strategy registry; :func:`default_registry` when omitted.
        client_factory: Builds the HTTP client for each provider.

    Raises:
        KeyError: If a requested provider is not configured.
    """
    cache = cache if cache is not None else build_cache(config)
    strategies = strategies or default_registry()
    client_factory = client_factory or default_client_factory(config)

    names = list(providers) if providers is not None else list(config.providers)
    unknown = [name for name in names if name not in config.providers]
    if unknown:
        raise KeyError(f"Unknown provider(s): {', '.join(unknown)}")

    return {
        name: build_initializer(
            name,
            config.providers[name],
            cache=cache,
            strategies=strategies,
            client=client_factory(name, config.providers[name]),
        )
        for name in names
    }


def initialize_discovery(
    config: Optional[CatalogConfig] = None,
    *,
    config_path: Optional[str] = None,
    providers: Optional[Iterable[str]] = None,
    monitor: Optional[GlobalMonitor] = None,
    cache: Optional[ModelCache] = None,
    strategies: Optional[StrategyRegistry] = None,
    client_factory: Optional[ClientFactory] = None,
) -> GlobalMonitor:
    """Load configuration, start discovery for each provider, and register it.

    Returns immediately; use :meth:`GlobalMonitor.wait_for_all_interfaces` to
    block until every provider has settled.
    """
    if config is None:
        config = load_config(config_path)
    monitor = monitor or GlobalMonitor()

    initializers = build_initializers(
        config,
        providers=providers,
        cache=cache,
        strategies=strategies,
        client_factory=client_factory,
    )
    for name, initializer in initializers.items():
        monitor.register_interface(name, initializer)

    logger.info("Model discovery started for %d providers", len(initializers))
    return monitor


__all__ = [
    "ClientFactory",
    "build_cache",
    "build_initializer",
    "build_initializers",
    "default_client_factory",
    "initialize_discovery",
]
