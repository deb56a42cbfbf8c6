import threading

import pytest

from llmcatalog._internal.exceptions import InitializationTimeoutError, RegistryError
from llmcatalog.models.discovery.initializer import ProviderInitializer
from llmcatalog.models.discovery.monitor import GlobalMonitor
from llmcatalog.models.discovery.state import GlobalStatus, InitializationStatus
from tests.helpers.discovery_doubles import (
    OPENAI_STRATEGY,
    StubModelListClient,
    failing_client,
    openai_payload,
)

ENDPOINT = "https://api.example.test/v1/models"


@pytest.fixture
def monitor():
    monitor = GlobalMonitor(observe_interval=0.01, wait_interval=0.05)
    yield monitor
    monitor.reset()


@pytest.fixture
def start(make_settings, memory_cache):
    def factory(name, *, client=None, **settings):
        settings.setdefault("modelsEndpoint", ENDPOINT if client is not None else None)
        return ProviderInitializer(
            name,
            make_settings(**settings),
            cache=memory_cache,
            strategy=OPENAI_STRATEGY,
            client=client,
        )

    return factory


def test_new_monitor_is_empty_and_initializing(monitor):
    state = monitor.get_global_state()

    assert state.status is GlobalStatus.INITIALIZING
    assert state.total_interfaces == 0
    assert monitor.get_detailed_report().interfaces == {}


def test_waiting_on_empty_monitor_times_out(monitor):
    with pytest.raises(InitializationTimeoutError):
        monitor.wait_for_all_interfaces(timeout_ms=50)


def test_registration_counts_interface_immediately(monitor, start):
    gate = threading.Event()
    monitor.register_interface("slow", start("slow", client=StubModelListClient({}, gate=gate)))
    try:
        state = monitor.get_global_state()
        assert state.total_interfaces == 1
        assert state.status is GlobalStatus.INITIALIZING
    finally:
        gate.set()


def test_all_completed(monitor, start):
    monitor.register_interface("a", start("a", client=StubModelListClient(openai_payload("m1", "m2"))))
    monitor.register_interface("b", start("b", model={"default": "x", "y": "z"}))

    report = monitor.wait_for_all_interfaces(timeout_ms=3000)

    assert report.global_state.status is GlobalStatus.COMPLETED
    assert report.global_state.completed_interfaces == 2
    assert report.global_state.failed_interfaces == 0
    assert report.global_state.total_models == 4
    assert set(report.interfaces) == {"a", "b"}


def test_all_failed(monitor, start):
    monitor.register_interface("a", start("a", client=failing_client()))
    monitor.register_interface("b", start("b", client=failing_client()))

    report = monitor.wait_for_all_interfaces(timeout_ms=3000)

    assert report.global_state.status is GlobalStatus.FAILED
    assert report.global_state.failed_interfaces == 2
    assert report.global_state.total_models == 0
    assert all(s.status is InitializationStatus.FAILED for s in report.interfaces.values())


def test_wait_timeout_leaves_provider_running(monitor, start):
    gate = threading.Event()
    initializer = start("slow", client=StubModelListClient(openai_payload("m"), gate=gate))
    monitor.register_interface("slow", initializer)

    with pytest.raises(InitializationTimeoutError) as exc_info:
        monitor.wait_for_all_interfaces(timeout_ms=100)
    assert exc_info.value.context["total"] == 1

    gate.set()
    report = monitor.wait_for_all_interfaces(timeout_ms=3000)
    assert report.global_state.status is GlobalStatus.COMPLETED
    assert report.interfaces["slow"].models_count == 1


def test_late_registration_reopens_aggregate(monitor, start):
    monitor.register_interface("a", start("a"))
    assert monitor.wait_for_all_interfaces(timeout_ms=3000).global_state.is_terminal

    gate = threading.Event()
    monitor.register_interface("b", start("b", client=StubModelListClient(openai_payload("m"), gate=gate)))
    try:
        assert monitor.get_global_state().status is GlobalStatus.INITIALIZING
        assert monitor.get_global_state().total_interfaces == 2
    finally:
        gate.set()

    assert monitor.wait_for_all_interfaces(timeout_ms=3000).global_state.total_interfaces == 2


def test_duplicate_registration_is_rejected(monitor, start):
    monitor.register_interface("a", start("a"))

    with pytest.raises(RegistryError):
        monitor.register_interface("a", start("a"))
    assert monitor.interfaces() == ["a"]


def test_detailed_report_returns_independent_copies(monitor, start):
    monitor.register_interface("a", start("a"))
    monitor.wait_for_all_interfaces(timeout_ms=3000)

    first = monitor.get_detailed_report()
    second = monitor.get_detailed_report()

    assert first == second
    assert first is not second
    assert first.interfaces is not second.interfaces
    assert first.interfaces["a"] is not second.interfaces["a"]

    first.interfaces.clear()
    assert set(monitor.get_detailed_report().interfaces) == {"a"}


def test_reset_restores_initial_state(monitor, start):
    monitor.register_interface("a", start("a"))
    monitor.wait_for_all_interfaces(timeout_ms=3000)

    monitor.reset()

    state = monitor.get_global_state()
    assert state.status is GlobalStatus.INITIALIZING
    assert state.total_interfaces == 0
    assert monitor.interfaces() == []

    monitor.register_interface("a", start("a"))
    report = monitor.wait_for_all_interfaces(timeout_ms=3000)
    assert report.global_state.total_interfaces == 1
