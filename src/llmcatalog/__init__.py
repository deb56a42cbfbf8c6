"""
llmcatalog: background model discovery for LLM providers
=========================================================

Each configured provider gets a :class:`ProviderInitializer` that discovers the
provider's models on a background thread, falling back from the live model-list
endpoint to the on-disk cache and finally to statically configured aliases. A
:class:`GlobalMonitor` aggregates readiness across providers.

Examples:
    from llmcatalog.bootstrap import initialize_discovery

    monitor = initialize_discovery()
    report = monitor.wait_for_all_interfaces(timeout_ms=30_000)
    print(report.global_state.status)
"""

from llmcatalog.models.discovery import (  # noqa: F401
    GlobalMonitor,
    InitializationState,
    ModelRecord,
    ProviderInitializer,
)

__version__ = "0.1.0"

__all__ = [
    "GlobalMonitor",
    "InitializationState",
    "ModelRecord",
    "ProviderInitializer",
    "__version__",
]
