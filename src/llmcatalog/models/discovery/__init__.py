"""Discovery-layer primitives: per-provider cascades and the global monitor."""

from .cache import CacheSnapshot, JsonFileModelCache, ModelCache  # noqa: F401
from .cascade import CascadeOutcome, DiscoveryCascade  # noqa: F401
from .initializer import ProviderInitializer  # noqa: F401
from .monitor import GlobalMonitor  # noqa: F401
from .provider_api import DiscoveryStrategy, ProviderStrategy  # noqa: F401
from .registry import StrategyRegistry, default_registry  # noqa: F401
from .state import (  # noqa: F401
    DetailedReport,
    GlobalState,
    GlobalStatus,
    InitializationState,
    InitializationStatus,
)
from .transport import ModelListClient  # noqa: F401
from .types import ModelCapabilities, ModelRecord  # noqa: F401

__all__ = [
    "CacheSnapshot",
    "CascadeOutcome",
    "DetailedReport",
    "DiscoveryCascade",
    "DiscoveryStrategy",
    "GlobalMonitor",
    "GlobalState",
    "GlobalStatus",
    "InitializationState",
    "InitializationStatus",
    "JsonFileModelCache",
    "ModelCache",
    "ModelCapabilities",
    "ModelListClient",
    "ModelRecord",
    "ProviderInitializer",
    "ProviderStrategy",
    "StrategyRegistry",
    "default_registry",
]
