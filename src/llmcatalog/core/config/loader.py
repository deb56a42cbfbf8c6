"""Configuration loader module.

This module provides functions for loading configuration from various sources
and transforming it into a validated CatalogConfig object. Sources are layered
in increasing precedence: built-in provider defaults, the YAML file, then
environment variables.
"""

from typing import Any, Dict, List, Mapping, Optional
import copy
import logging
import os
import re

import yaml
from pydantic import ValidationError

from .defaults import DEFAULT_PROVIDERS
from .exceptions import ConfigError
from .schema import CatalogConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "LLMCATALOG_CONFIG"
ENV_PREFIX = "LLMCATALOG_"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Environment keys (without prefix) mapped to configuration paths
ENV_KEY_PATHS: Dict[str, List[str]] = {
    "LOGGING_LEVEL": ["logging", "level"],
    "CACHE_DIR": ["discovery", "cache_dir"],
    "FETCH_TIMEOUT": ["discovery", "fetch_timeout"],
}


def merge_dicts(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values that override the base

    Returns:
        Merged dictionary where override values take precedence
    """
    result = dict(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, Mapping):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def _substitute(value: str, env: Mapping[str, str]) -> str:
    return _ENV_PATTERN.sub(lambda match: env.get(match.group(1), ""), value)


def resolve_env_vars(config: Any, env: Optional[Mapping[str, str]] = None) -> Any:
    """Replace ${VAR} patterns with environment variables.

    Args:
        config: Configuration value (dict, list, or scalar)
        env: Environment mapping; defaults to ``os.environ``

    Returns:
        Configuration with environment variables resolved
    """
    env = os.environ if env is None else env

    if isinstance(config, dict):
        return {key: resolve_env_vars(value, env) for key, value in config.items()}
    if isinstance(config, list):
        return [resolve_env_vars(item, env) for item in config]
    if isinstance(config, str) and "${" in config:
        return _substitute(config, env)
    return config


def load_yaml_file(path: str) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Dictionary containing configuration from YAML

    Raises:
        ConfigError: If file cannot be read or parsed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must contain a mapping")
    return data


def _set_path(config: Dict[str, Any], path: List[str], value: Any) -> None:
    current = config
    for key in path[:-1]:
        current = current.setdefault(key, {})
    current[path[-1]] = value


def apply_env_overrides(config: Dict[str, Any], env: Mapping[str, str]) -> Dict[str, Any]:
    """Apply ``LLMCATALOG_*`` overrides and ``<PROVIDER>_API_KEY`` credentials."""
    result = copy.deepcopy(config)

    for env_key, path in ENV_KEY_PATHS.items():
        value = env.get(f"{ENV_PREFIX}{env_key}")
        if value:
            _set_path(result, path, value)

    for name, provider in result.get("providers", {}).items():
        if not isinstance(provider, dict):
            continue
        if provider.get("apiKey") or provider.get("api_key"):
            continue
        api_key = env.get(f"{name.upper()}_API_KEY")
        if api_key:
            provider["apiKey"] = api_key

    return result


def load_config(
    config_path: Optional[str] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    include_defaults: bool = True,
) -> CatalogConfig:
    """Load, merge, and validate configuration.

    Args:
        config_path: YAML file to load; falls back to ``$LLMCATALOG_CONFIG``.
            No file at all is valid and yields the defaults.
        env: Environment mapping; defaults to ``os.environ``.
        include_defaults: Start from the built-in provider definitions.

    Returns:
        Validated configuration.

    Raises:
        ConfigError: If the file cannot be read or the result fails validation.
    """
    env = os.environ if env is None else env
    config_path = config_path or env.get(CONFIG_PATH_ENV)

    data: Dict[str, Any] = {}
    if include_defaults:
        data = {"providers": copy.deepcopy(DEFAULT_PROVIDERS)}

    if config_path:
        data = merge_dicts(data, load_yaml_file(config_path))
        logger.debug("Loaded configuration from %s", config_path)

    data = resolve_env_vars(data, env)
    data = apply_env_overrides(data, env)

    try:
        return CatalogConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


__all__ = [
    "apply_env_overrides",
    "load_config",
    "load_yaml_file",
    "merge_dicts",
    "resolve_env_vars",
]
