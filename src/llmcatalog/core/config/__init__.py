"""Configuration loading and validation."""

from .exceptions import ConfigError
from .loader import load_config, merge_dicts, resolve_env_vars
from .schema import CatalogConfig, DiscoverySettings, LoggingConfig, ProviderSettings

__all__ = [
    "CatalogConfig",
    "ConfigError",
    "DiscoverySettings",
    "LoggingConfig",
    "ProviderSettings",
    "load_config",
    "merge_dicts",
    "resolve_env_vars",
]
