"""End-to-end discovery over real cache files and a mocked HTTP layer."""

import httpx
import pytest

from llmcatalog.bootstrap import build_initializers, initialize_discovery
from llmcatalog.core.config.schema import CatalogConfig
from llmcatalog.models.discovery.cache import JsonFileModelCache
from llmcatalog.models.discovery.monitor import GlobalMonitor
from llmcatalog.models.discovery.state import GlobalStatus, InitializationStatus
from llmcatalog.models.discovery.transport import ModelListClient
from tests.helpers.discovery_doubles import cached_snapshot


def _route(request):
    host = request.url.host
    if host == "a.test":
        return httpx.Response(
            200, json={"data": [{"id": f"a-model-{i}"} for i in range(10)]}
        )
    return httpx.Response(503, text="service unavailable")


@pytest.fixture
def config(tmp_path):
    return CatalogConfig.model_validate(
        {
            "discovery": {"cache_dir": str(tmp_path)},
            "providers": {
                "A": {"modelsEndpoint": "https://a.test/v1/models", "model": {"default": "a-model-0"}},
                "B": {"modelsEndpoint": "https://b.test/v1/models", "model": {"default": "b-1"}},
                "C": {
                    "modelsEndpoint": "https://c.test/v1/models",
                    "stream": True,
                    "model": {"default": "c-static"},
                },
            },
        }
    )


@pytest.fixture
def monitor():
    monitor = GlobalMonitor(observe_interval=0.01, wait_interval=0.05)
    yield monitor
    monitor.reset()


def _client_factory(name, settings):
    return ModelListClient(timeout=2.0, transport=httpx.MockTransport(_route))


def test_mixed_outcomes_produce_partial_global_state(config, monitor, tmp_path):
    cache = JsonFileModelCache(tmp_path)
    cache.write(cached_snapshot("B", 5))

    initialize_discovery(config, monitor=monitor, cache=cache, client_factory=_client_factory)
    report = monitor.wait_for_all_interfaces(timeout_ms=5000)

    summary = report.global_state
    assert summary.status is GlobalStatus.PARTIAL
    assert summary.total_interfaces == 3
    assert summary.completed_interfaces == 2
    assert summary.failed_interfaces == 1
    assert summary.total_models == 15

    assert report.interfaces["A"].status is InitializationStatus.COMPLETED
    assert report.interfaces["A"].models_count == 10
    assert report.interfaces["B"].status is InitializationStatus.CACHED
    assert "503" in report.interfaces["B"].error
    assert report.interfaces["C"].status is InitializationStatus.FAILED
    assert report.interfaces["C"].error.startswith("API failed: ")

    # live results were persisted for A
    assert cache.read("A").total_models == 10


def test_failed_provider_returns_exactly_its_static_alias(config, tmp_path):
    initializer = build_initializers(
        config,
        providers=["C"],
        cache=JsonFileModelCache(tmp_path),
        client_factory=_client_factory,
    )["C"]

    final = initializer.wait_for_initialization(timeout_ms=5000)
    models = initializer.get_available_models()

    assert final.status is InitializationStatus.FAILED
    assert final.models_count == 1
    assert len(models) == 1
    assert models[0].id == "c-static"
    assert models[0].provider == "C"
    assert models[0].capabilities.chat is True
    assert models[0].capabilities.streaming is True


def test_report_copies_do_not_share_state(config, monitor, tmp_path):
    initialize_discovery(
        config,
        monitor=monitor,
        cache=JsonFileModelCache(tmp_path),
        client_factory=_client_factory,
    )
    monitor.wait_for_all_interfaces(timeout_ms=5000)

    first = monitor.get_detailed_report()
    second = monitor.get_detailed_report()

    assert first == second
    assert first is not second
    assert first.interfaces is not second.interfaces
    for name in first.interfaces:
        assert first.interfaces[name] is not second.interfaces[name]
    assert first.to_dict() == second.to_dict()
