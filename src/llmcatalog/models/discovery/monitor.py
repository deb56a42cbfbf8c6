"""Aggregate readiness across every registered provider.

:class:`GlobalMonitor` owns the :class:`GlobalState`. Each registration starts
an observer thread that polls its initializer until the provider settles,
rebuilding the aggregate from a full snapshot of every registered provider
after each poll. The aggregate is never adjusted incrementally.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Dict, List, Optional

from llmcatalog._internal.exceptions import InitializationTimeoutError, RegistryError
from llmcatalog.models.discovery.initializer import ProviderInitializer
from llmcatalog.models.discovery.state import DetailedReport, GlobalState

logger = logging.getLogger(__name__)

DEFAULT_WAIT_TIMEOUT_MS = 30_000


class GlobalMonitor:
    """Observe many :class:`ProviderInitializer` instances.

    Args:
        observe_interval: Seconds between observer polls of one provider.
        wait_interval: Upper bound in seconds on a single sleep inside
            :meth:`wait_for_all_interfaces`.
    """

    OBSERVE_INTERVAL = 0.5
    WAIT_INTERVAL = 1.0

    def __init__(
        self,
        *,
        observe_interval: Optional[float] = None,
        wait_interval: Optional[float] = None,
    ) -> None:
        self.observe_interval = (
            self.OBSERVE_INTERVAL if observe_interval is None else observe_interval
        )
        self.wait_interval = self.WAIT_INTERVAL if wait_interval is None else wait_interval
        self._cond = threading.Condition()
        self._interfaces: Dict[str, ProviderInitializer] = {}
        self._state = GlobalState()
        self._stop = threading.Event()
        self._observers: List[threading.Thread] = []

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_interface(self, name: str, initializer: ProviderInitializer) -> None:
        """Track ``initializer`` under ``name`` and start observing it.

        Raises:
            RegistryError: If ``name`` is already registered.
        """
        with self._cond:
            if name in self._interfaces:
                raise RegistryError(
                    f"Interface '{name}' is already registered", context={"interface": name}
                )
            self._interfaces[name] = initializer
            stop = self._stop
            self._recompute_locked()

        observer = threading.Thread(
            target=self._observe,
            args=(name, initializer, stop),
            name=f"llmcatalog-monitor-{name}",
            daemon=True,
        )
        with self._cond:
            self._observers.append(observer)
        observer.start()
        logger.debug("Registered interface %s", name)

    def interfaces(self) -> List[str]:
        with self._cond:
            return list(self._interfaces)

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------
    def get_global_state(self) -> GlobalState:
        with self._cond:
            return self._state

    def get_detailed_report(self) -> DetailedReport:
        """Return the aggregate and a fresh copy of each provider's state."""
        with self._cond:
            global_state = self._state
            interfaces = dict(self._interfaces)
        return DetailedReport(
            global_state=global_state,
            interfaces={
                name: initializer.get_initialization_state()
                for name, initializer in interfaces.items()
            },
        )

    def wait_for_all_interfaces(self, timeout_ms: int = DEFAULT_WAIT_TIMEOUT_MS) -> DetailedReport:
        """Block until every registered provider has settled.

        Raises:
            InitializationTimeoutError: If the aggregate is still initializing
                after ``timeout_ms``. Provider discovery is not interrupted.
        """
        deadline = time.monotonic() + max(timeout_ms, 0) / 1000
        with self._cond:
            while not self._state.is_terminal:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise InitializationTimeoutError(
                        f"Global initialization timeout: {timeout_ms}ms",
                        timeout_ms=timeout_ms,
                        context={
                            "settled": self._state.settled_interfaces,
                            "total": self._state.total_interfaces,
                        },
                    )
                self._cond.wait(timeout=min(remaining, self.wait_interval))
        return self.get_detailed_report()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Forget every registration and restore the initial empty state.

        Observers of earlier registrations are told to stop; provider
        discovery threads keep running and are simply no longer tracked.
        """
        with self._cond:
            self._stop.set()
            self._stop = threading.Event()
            self._interfaces.clear()
            self._observers.clear()
            self._state = GlobalState()
            self._cond.notify_all()
        logger.debug("Monitor reset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _observe(
        self, name: str, initializer: ProviderInitializer, stop: threading.Event
    ) -> None:
        while not stop.is_set():
            settled = initializer.get_initialization_state().is_terminal
            with self._cond:
                if stop.is_set():
                    return
                self._recompute_locked()
            if settled:
                logger.debug("Interface %s settled", name)
                return
            stop.wait(self.observe_interval)

    def _recompute_locked(self) -> None:
        previous = self._state
        state = GlobalState.from_snapshot(
            (initializer.get_initialization_state() for initializer in self._interfaces.values()),
            start_time=previous.start_time,
        )
        self._state = state
        logger.debug(
            "Global state %s: %d/%d settled, %d models",
            state.status.value,
            state.settled_interfaces,
            state.total_interfaces,
            state.total_models,
        )
        if state.is_terminal and state != previous:
            elapsed = time.time() - state.start_time
            logger.info(
                "Model discovery %s: %d completed, %d failed, %d models in %.1fs",
                state.status.value,
                state.completed_interfaces,
                state.failed_interfaces,
                state.total_models,
                elapsed,
            )
        self._cond.notify_all()


__all__ = ["DEFAULT_WAIT_TIMEOUT_MS", "GlobalMonitor"]
