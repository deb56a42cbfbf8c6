import pytest

from llmcatalog.bootstrap import (
    build_cache,
    build_initializer,
    build_initializers,
    default_client_factory,
)
from llmcatalog.core.config.schema import CatalogConfig
from llmcatalog.models.discovery.registry import default_registry
from llmcatalog.models.discovery.state import InitializationStatus
from tests.helpers.discovery_doubles import StubModelListClient


def _config(tmp_path, **providers):
    return CatalogConfig.model_validate(
        {"discovery": {"cache_dir": str(tmp_path), "fetch_timeout": 3}, "providers": providers}
    )


def test_build_cache_honours_models_file(tmp_path):
    custom = tmp_path / "elsewhere" / "acme.json"
    config = _config(tmp_path, acme={"modelsFile": str(custom)}, other={})

    cache = build_cache(config)

    assert cache.path_for("acme") == custom
    assert cache.path_for("other") == tmp_path / "other.json"


def test_client_factory_prefers_provider_timeout(tmp_path):
    config = _config(tmp_path, fast={"timeout": 1.5, "headers": {"X-Org": "acme"}}, slow={})
    factory = default_client_factory(config)

    fast = factory("fast", config.providers["fast"])
    slow = factory("slow", config.providers["slow"])

    assert fast.timeout == 1.5
    assert fast.headers == {"X-Org": "acme"}
    assert slow.timeout == 3


def test_strategy_selected_from_settings(tmp_path, memory_cache):
    config = _config(
        tmp_path,
        grokish={"modelsEndpoint": "https://x.test/models", "strategy": "xai"},
    )
    client = StubModelListClient({"data": [{"id": "grok-2"}]})

    initializer = build_initializer(
        "grokish",
        config.providers["grokish"],
        cache=memory_cache,
        strategies=default_registry(),
        client=client,
    )
    initializer.wait_for_initialization(timeout_ms=2000)

    record = memory_cache.read("grokish").models[0]
    assert record.owned_by == "xai"
    assert "realtime_data" in record.capabilities.extras


def test_unknown_provider_is_rejected(tmp_path):
    with pytest.raises(KeyError):
        build_initializers(_config(tmp_path, acme={}), providers=["missing"])


def test_every_configured_provider_is_started(tmp_path, memory_cache):
    config = _config(
        tmp_path,
        one={"model": {"default": "m1"}},
        two={"model": {"default": "m2", "fast": "m3"}},
    )

    initializers = build_initializers(config, cache=memory_cache)

    assert set(initializers) == {"one", "two"}
    for initializer in initializers.values():
        final = initializer.wait_for_initialization(timeout_ms=2000)
        assert final.status is InitializationStatus.COMPLETED
    assert initializers["two"].get_initialization_state().models_count == 2
