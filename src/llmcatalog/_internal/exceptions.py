"""Exception hierarchy shared across llmcatalog.

Every error raised by the library derives from :class:`CatalogError` so callers
can catch a single base type. Errors carry an optional ``context`` mapping with
structured details (provider name, endpoint, path) that log handlers can render
without parsing the message.

Discovery failures never escape a provider's background cascade; they surface
only through ``InitializationState.error``. The single exception a caller of the
discovery API must expect is :class:`InitializationTimeoutError`.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


class CatalogError(Exception):
    """Base class for all custom exceptions in llmcatalog."""

    def __init__(self, message: str, *, context: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        return self.message


class ProviderAPIError(CatalogError):
    """Raised when an external provider API call fails."""

    pass


class RemoteFetchError(ProviderAPIError):
    """Raised when a model-list endpoint is unreachable or answers with an error."""

    pass


class ParseError(CatalogError):
    """Raised when a model-list response has a shape no parser recognizes."""

    pass


class CacheError(CatalogError):
    """Base class for errors related to the on-disk model cache."""

    pass


class CacheReadError(CacheError):
    """Raised when a cached snapshot is missing, unreadable, or malformed."""

    pass


class CacheWriteError(CacheError):
    """Raised when a snapshot cannot be persisted."""

    pass


class ConfigError(CatalogError):
    """Raised when configuration cannot be loaded or validated."""

    pass


class RegistryError(CatalogError):
    """Raised for invalid registrations with the global monitor or strategy registry."""

    pass


class InvalidStateTransitionError(CatalogError):
    """Raised when an initialization state is asked to move backwards or past terminal."""

    pass


class InitializationTimeoutError(CatalogError, TimeoutError):
    """Raised by the bounded waits when discovery does not finish in time.

    The background discovery keeps running; only the caller's wait is abandoned.
    """

    def __init__(
        self,
        message: str,
        *,
        timeout_ms: int,
        context: Optional[Mapping[str, Any]] = None,
    ) -> None:
        merged = dict(context or {})
        merged.setdefault("timeout_ms", timeout_ms)
        super().__init__(message, context=merged)
        self.timeout_ms = timeout_ms


__all__ = [
    "CatalogError",
    "ProviderAPIError",
    "RemoteFetchError",
    "ParseError",
    "CacheError",
    "CacheReadError",
    "CacheWriteError",
    "ConfigError",
    "RegistryError",
    "InvalidStateTransitionError",
    "InitializationTimeoutError",
]
