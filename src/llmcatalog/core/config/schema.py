"""Configuration schema module.

This module defines the data structures used for configuration in llmcatalog.
Provider entries accept the camelCase keys used by provider definition files
(``modelsEndpoint``, ``jsonMode``) as well as their snake_case names.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderSettings(BaseModel):
    """Static configuration for one provider.

    Attributes:
        url: Base URL of the inference API.
        models_endpoint: Model-list endpoint; when unset discovery uses the
            configured aliases only.
        models_file: Override for the provider's cache file path.
        model: Alias map, ``default`` plus named aliases, to concrete model ids.
        embeddings: Embedding alias map.
        stream: Whether the provider supports streaming responses.
        json_mode: Whether the provider supports JSON-mode responses.
        api_key: Credential sent as a bearer token to the model-list endpoint.
        strategy: Name of the parse/enrich strategy; defaults to the provider name.
        timeout: Seconds allowed for the model-list request.
        headers: Extra headers for the model-list request.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url: Optional[str] = None
    models_endpoint: Optional[str] = Field(default=None, alias="modelsEndpoint")
    models_file: Optional[str] = Field(default=None, alias="modelsFile")
    model: Dict[str, str] = Field(default_factory=dict)
    embeddings: Dict[str, Any] = Field(default_factory=dict)
    stream: bool = False
    json_mode: bool = Field(default=False, alias="jsonMode")
    api_key: Optional[str] = Field(default=None, alias="apiKey")
    strategy: Optional[str] = None
    timeout: Optional[float] = None
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator("models_endpoint", "models_file", "api_key", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("model", mode="before")
    @classmethod
    def _coerce_aliases(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(alias): str(target) for alias, target in value.items()}
        return value

    @property
    def alias_count(self) -> int:
        return len(self.model)


class DiscoverySettings(BaseModel):
    """Settings shared by every provider's discovery run.

    Attributes:
        cache_dir: Directory for per-provider snapshot files.
        fetch_timeout: Default seconds allowed for a model-list request.
    """

    cache_dir: str = "./data/models"
    fetch_timeout: float = Field(default=20.0, gt=0)

    model_config = {"extra": "allow"}


class LoggingConfig(BaseModel):
    """Configuration for logging.

    Attributes:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        components: Per-component level overrides.
    """

    level: str = "INFO"
    components: Dict[str, str] = Field(default_factory=dict)

    model_config = {"extra": "allow"}


class CatalogConfig(BaseModel):
    """Root configuration.

    Attributes:
        providers: Provider configurations keyed by provider name.
        discovery: Discovery-wide settings.
        logging: Logging configuration.
    """

    providers: Dict[str, ProviderSettings] = Field(default_factory=dict)
    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "allow"}

    def get_provider(self, name: str) -> Optional[ProviderSettings]:
        return self.providers.get(name)


__all__ = ["CatalogConfig", "DiscoverySettings", "LoggingConfig", "ProviderSettings"]
