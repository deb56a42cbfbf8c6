"""Per-provider discovery lifecycle.

A :class:`ProviderInitializer` starts its provider's discovery cascade on a
background thread as soon as it is constructed and owns the provider's
:class:`InitializationState`. It is the only writer of that state: each
milestone publishes a new frozen value by reference replacement, so readers on
other threads always observe a complete state without taking a lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional, Tuple

from llmcatalog._internal.exceptions import InitializationTimeoutError
from llmcatalog.core.config.schema import ProviderSettings
from llmcatalog.models.discovery.cache import ModelCache
from llmcatalog.models.discovery.cascade import CascadeOutcome, DiscoveryCascade
from llmcatalog.models.discovery.provider_api import DiscoveryStrategy
from llmcatalog.models.discovery.state import InitializationState, InitializationStatus
from llmcatalog.models.discovery.transport import ModelListClient
from llmcatalog.models.discovery.types import ModelRecord

logger = logging.getLogger(__name__)

StateListener = Callable[[InitializationState], None]

DEFAULT_INIT_TIMEOUT_MS = 10_000


class ProviderInitializer:
    """Drive one provider's discovery in the background.

    Construction returns immediately; discovery runs on a daemon thread.

    Args:
        name: Provider name.
        settings: Static provider configuration.
        cache: Snapshot store for the provider.
        strategy: Provider parse/enrich strategy.
        client: HTTP collaborator; built from ``settings`` when omitted.
        listeners: Callbacks invoked with every published state.
        cascade: Pre-built cascade; overrides ``cache``/``strategy``/``client``.
    """

    def __init__(
        self,
        name: str,
        settings: ProviderSettings,
        *,
        cache: Optional[ModelCache] = None,
        strategy: Optional[DiscoveryStrategy] = None,
        client: Optional[ModelListClient] = None,
        listeners: Iterable[StateListener] = (),
        cascade: Optional[DiscoveryCascade] = None,
    ) -> None:
        if cascade is None:
            if cache is None or strategy is None:
                raise ValueError("cache and strategy are required when no cascade is given")
            cascade = DiscoveryCascade(
                name, settings, cache=cache, strategy=strategy, client=client
            )

        self.name = name
        self.settings = settings
        self._cascade = cascade
        self._listeners: List[StateListener] = list(listeners)
        self._state = InitializationState.initial(name)
        self._records: Tuple[ModelRecord, ...] = ()
        self._finished = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name=f"llmcatalog-discovery-{name}", daemon=True
        )
        self._thread.start()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get_initialization_state(self) -> InitializationState:
        """Return a copy of the current state. Never blocks."""
        return self._state.copy()

    def wait_for_initialization(
        self, timeout_ms: int = DEFAULT_INIT_TIMEOUT_MS
    ) -> InitializationState:
        """Block until discovery reaches a terminal status.

        Args:
            timeout_ms: Maximum time to wait in milliseconds.

        Returns:
            The terminal state.

        Raises:
            InitializationTimeoutError: If discovery is still running after
                ``timeout_ms``. Discovery itself keeps running.
        """
        if not self._finished.wait(timeout=max(timeout_ms, 0) / 1000):
            raise InitializationTimeoutError(
                f"Initialization timeout: {timeout_ms}ms",
                timeout_ms=timeout_ms,
                context={"provider": self.name},
            )
        return self.get_initialization_state()

    def get_available_models(self) -> List[ModelRecord]:
        """Return the best model list currently available. Never raises.

        Cached records win when a non-empty snapshot is readable, then records
        from a finished run whose snapshot could not be saved; otherwise records
        are synthesized from the configured aliases. This does not wait for an
        in-flight discovery.
        """
        try:
            return self._cascade.available_models(self._records)
        except Exception:
            logger.exception("%s: unexpected error listing models", self.name)
            return []

    def add_listener(self, listener: StateListener) -> None:
        """Register a callback invoked with every subsequently published state."""
        self._listeners.append(listener)

    @property
    def is_finished(self) -> bool:
        return self._finished.is_set()

    def __repr__(self) -> str:
        state = self._state
        return (
            f"{type(self).__name__}(name={self.name!r}, status={state.status.value!r}, "
            f"progress={state.progress})"
        )

    # ------------------------------------------------------------------
    # Background work
    # ------------------------------------------------------------------
    def _run(self) -> None:
        try:
            outcome = self._cascade.run(self._advance)
        except Exception as exc:
            logger.exception("%s: discovery aborted unexpectedly", self.name)
            outcome = CascadeOutcome(
                status=InitializationStatus.FAILED,
                models_count=self.settings.alias_count,
                message=f"{self.name} initialization failed, using static config",
                error=f"Discovery aborted: {exc}",
            )

        try:
            self._publish(self._finish(outcome))
        finally:
            self._finished.set()

        state = self._state
        if state.status is InitializationStatus.COMPLETED:
            logger.info(
                "%s: %d models available (%dms)", self.name, state.models_count, state.elapsed_ms
            )

    def _advance(self, progress: int, message: str) -> None:
        self._publish(self._state.advance(progress, message))

    def _finish(self, outcome: CascadeOutcome) -> InitializationState:
        self._records = tuple(outcome.records)
        state = self._state
        if outcome.status is InitializationStatus.COMPLETED:
            return state.complete(outcome.models_count, outcome.message)
        if outcome.status is InitializationStatus.CACHED:
            return state.use_cache(outcome.models_count, outcome.message, outcome.error or "")
        return state.fail(outcome.models_count, outcome.message, outcome.error or "")

    def _publish(self, state: InitializationState) -> None:
        self._state = state
        log = logger.warning if state.status is InitializationStatus.FAILED else logger.info
        log("[%s] %s (%d%%)", self.name, state.message, state.progress)
        for listener in list(self._listeners):
            try:
                listener(state.copy())
            except Exception:
                logger.exception("%s: state listener raised", self.name)


__all__ = ["DEFAULT_INIT_TIMEOUT_MS", "ProviderInitializer", "StateListener"]
