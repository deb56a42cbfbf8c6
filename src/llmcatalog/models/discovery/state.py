"""Initialization state values for provider discovery and the global aggregate.

Both state types are frozen dataclasses. A provider's state moves forward only
through the transition methods on :class:`InitializationState`, each of which
returns a new value; once a terminal status is reached every further
transition raises :class:`InvalidStateTransitionError`. The aggregate
:class:`GlobalState` is never updated in place: it is rebuilt from a snapshot
of every provider's current state.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

from llmcatalog._internal.exceptions import InvalidStateTransitionError


class InitializationStatus(str, Enum):
    """Discovery progress of a single provider."""

    INITIALIZING = "initializing"
    COMPLETED = "completed"
    CACHED = "cached"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not InitializationStatus.INITIALIZING

    @property
    def is_usable(self) -> bool:
        """True when the provider produced a model list (live or cached)."""
        return self in (InitializationStatus.COMPLETED, InitializationStatus.CACHED)


class GlobalStatus(str, Enum):
    """Aggregate readiness across every registered provider."""

    INITIALIZING = "initializing"
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not GlobalStatus.INITIALIZING


@dataclass(frozen=True)
class InitializationState:
    """Snapshot of one provider's discovery progress.

    Attributes:
        provider: Provider name the state belongs to.
        status: Current status; see :class:`InitializationStatus`.
        start_time: Epoch seconds when discovery started.
        progress: Percentage 0-100; never decreases.
        message: Human-readable description of the latest milestone.
        models_count: Number of models known for the provider.
        error: Failure diagnostic, set only for cached and failed outcomes.
        last_updated: Epoch seconds of the latest transition.
    """

    provider: str
    status: InitializationStatus = InitializationStatus.INITIALIZING
    start_time: float = field(default_factory=time.time)
    progress: int = 0
    message: str = "Initializing model discovery..."
    models_count: int = 0
    error: Optional[str] = None
    last_updated: float = field(default_factory=time.time)

    @classmethod
    def initial(cls, provider: str, *, now: Optional[float] = None) -> InitializationState:
        started = time.time() if now is None else now
        return cls(provider=provider, start_time=started, last_updated=started)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def elapsed_ms(self) -> int:
        return int((self.last_updated - self.start_time) * 1000)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def advance(self, progress: int, message: str) -> InitializationState:
        """Record a non-terminal milestone."""
        self._ensure_open("advance")
        if not 0 <= progress <= 100:
            raise InvalidStateTransitionError(
                f"progress must be within 0..100, got {progress}",
                context={"provider": self.provider},
            )
        if progress < self.progress:
            raise InvalidStateTransitionError(
                f"progress cannot move backwards ({self.progress} -> {progress})",
                context={"provider": self.provider},
            )
        return replace(self, progress=progress, message=message, last_updated=time.time())

    def complete(self, models_count: int, message: str) -> InitializationState:
        return self._terminate(InitializationStatus.COMPLETED, models_count, message, None)

    def use_cache(self, models_count: int, message: str, error: str) -> InitializationState:
        return self._terminate(InitializationStatus.CACHED, models_count, message, error)

    def fail(self, models_count: int, message: str, error: str) -> InitializationState:
        return self._terminate(InitializationStatus.FAILED, models_count, message, error)

    def _terminate(
        self,
        status: InitializationStatus,
        models_count: int,
        message: str,
        error: Optional[str],
    ) -> InitializationState:
        self._ensure_open(status.value)
        if models_count < 0:
            raise InvalidStateTransitionError(
                f"models_count must be >= 0, got {models_count}",
                context={"provider": self.provider},
            )
        return replace(
            self,
            status=status,
            progress=100,
            message=message,
            models_count=models_count,
            error=error,
            last_updated=time.time(),
        )

    def _ensure_open(self, transition: str) -> None:
        if self.status.is_terminal:
            raise InvalidStateTransitionError(
                f"cannot {transition}: {self.provider} already finished with status "
                f"'{self.status.value}'",
                context={"provider": self.provider, "status": self.status.value},
            )

    def copy(self) -> InitializationState:
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "status": self.status.value,
            "startTime": self.start_time,
            "progress": self.progress,
            "message": self.message,
            "modelsCount": self.models_count,
            "error": self.error,
            "lastUpdated": self.last_updated,
        }


@dataclass(frozen=True)
class GlobalState:
    """Aggregate readiness derived from every registered provider's state."""

    status: GlobalStatus = GlobalStatus.INITIALIZING
    total_interfaces: int = 0
    completed_interfaces: int = 0
    failed_interfaces: int = 0
    total_models: int = 0
    start_time: float = field(default_factory=time.time)

    @classmethod
    def from_snapshot(
        cls,
        states: Iterable[InitializationState],
        *,
        start_time: float,
    ) -> GlobalState:
        """Recompute the aggregate from a full snapshot of provider states.

        Cached providers count as completed and contribute their model counts;
        failed providers contribute nothing to ``total_models``.
        """
        total = completed = failed = total_models = 0
        for state in states:
            total += 1
            if state.status.is_usable:
                completed += 1
                total_models += state.models_count
            elif state.status is InitializationStatus.FAILED:
                failed += 1

        if completed + failed < total:
            status = GlobalStatus.INITIALIZING
        elif completed == 0:
            status = GlobalStatus.FAILED
        elif failed == 0:
            status = GlobalStatus.COMPLETED
        else:
            status = GlobalStatus.PARTIAL

        return cls(
            status=status,
            total_interfaces=total,
            completed_interfaces=completed,
            failed_interfaces=failed,
            total_models=total_models,
            start_time=start_time,
        )

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def settled_interfaces(self) -> int:
        return self.completed_interfaces + self.failed_interfaces

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "totalInterfaces": self.total_interfaces,
            "completedInterfaces": self.completed_interfaces,
            "failedInterfaces": self.failed_interfaces,
            "totalModels": self.total_models,
            "startTime": self.start_time,
        }


@dataclass(frozen=True)
class DetailedReport:
    """Global aggregate plus each provider's state at report time."""

    global_state: GlobalState
    interfaces: Mapping[str, InitializationState]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "global": self.global_state.to_dict(),
            "interfaces": {name: state.to_dict() for name, state in self.interfaces.items()},
        }


__all__ = [
    "DetailedReport",
    "GlobalState",
    "GlobalStatus",
    "InitializationState",
    "InitializationStatus",
]
