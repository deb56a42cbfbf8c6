"""Three-tier model discovery for a single provider.

The cascade tries, in order:

1. **Remote fetch**: call the provider's model-list endpoint, parse the
   response with the provider strategy, enrich each record with capability
   flags, and persist a snapshot. A provider without an endpoint completes
   immediately from its configured aliases.
2. **Cache**: read the last persisted snapshot.
3. **Static fallback**: report failure; callers can still obtain records
   synthesized from the configured aliases.

Each tier is attempted at most once per run. Every failure is handled by
falling through to the next tier, so :meth:`DiscoveryCascade.run` never
raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Sequence

from llmcatalog._internal.exceptions import CacheWriteError
from llmcatalog.core.config.schema import ProviderSettings
from llmcatalog.models.discovery.cache import ModelCache, snapshot_from_records, utc_timestamp
from llmcatalog.models.discovery.capabilities import detect_capabilities, static_capabilities
from llmcatalog.models.discovery.provider_api import DiscoveryStrategy
from llmcatalog.models.discovery.state import InitializationStatus
from llmcatalog.models.discovery.transport import DEFAULT_TIMEOUT, ModelListClient
from llmcatalog.models.discovery.types import ModelRecord

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

# Progress milestones reported while the remote tier runs.
PROGRESS_CHECKING = 10
PROGRESS_CONNECTING = 30
PROGRESS_FETCHING = 40
PROGRESS_PARSING = 60
PROGRESS_SAVING = 80
PROGRESS_SAVED = 90


@dataclass(frozen=True)
class CascadeOutcome:
    """Terminal result of one cascade run."""

    status: InitializationStatus
    models_count: int
    message: str
    error: Optional[str] = None
    records: tuple[ModelRecord, ...] = ()


class DiscoveryCascade:
    """Run the remote, cache, static fallback sequence for one provider.

    Args:
        name: Provider name; also the cache key.
        settings: Static provider configuration.
        cache: Snapshot store shared by all providers.
        strategy: Provider-specific parse and enrich behaviour.
        client: HTTP collaborator for the model-list endpoint.
    """

    def __init__(
        self,
        name: str,
        settings: ProviderSettings,
        *,
        cache: ModelCache,
        strategy: DiscoveryStrategy,
        client: Optional[ModelListClient] = None,
    ) -> None:
        self.name = name
        self.settings = settings
        self.cache = cache
        self.strategy = strategy
        self.client = client or ModelListClient(
            timeout=settings.timeout or DEFAULT_TIMEOUT, headers=settings.headers
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def run(self, progress: ProgressCallback) -> CascadeOutcome:
        """Execute the cascade, reporting milestones through ``progress``."""

        progress(PROGRESS_CHECKING, f"Checking {self.name} model endpoint...")

        endpoint = self.settings.models_endpoint
        if not endpoint:
            logger.info("%s has no model endpoint configured, using static config", self.name)
            return CascadeOutcome(
                status=InitializationStatus.COMPLETED,
                models_count=self.settings.alias_count,
                message=f"{self.name} has no model endpoint configured, using static config",
            )

        progress(PROGRESS_CONNECTING, f"Connecting to {self.name} API...")
        try:
            records = self._discover_remote(endpoint, progress)
        except Exception as fetch_error:
            logger.warning("%s model update failed, trying cache: %s", self.name, fetch_error)
            return self._fall_back(fetch_error)

        return CascadeOutcome(
            status=InitializationStatus.COMPLETED,
            models_count=len(records),
            message=f"{self.name} model discovery completed",
            records=tuple(records),
        )

    def available_models(self, discovered: Sequence[ModelRecord] = ()) -> List[ModelRecord]:
        """Return the best non-empty model list currently known.

        Preference order: the cached snapshot, then ``discovered`` (records from
        a run whose snapshot could not be saved), then records built from the
        configured aliases. Never raises.
        """
        try:
            models = list(self.cache.read(self.name).models)
        except Exception as exc:
            logger.debug("%s failed to read models file: %s", self.name, exc)
            models = []
        if models:
            return models
        if discovered:
            return list(discovered)
        logger.debug("%s has no cached models, using config file", self.name)
        return self.static_models()

    def static_models(self) -> List[ModelRecord]:
        capabilities = static_capabilities(
            streaming=self.settings.stream, json_mode=self.settings.json_mode
        )
        return [
            ModelRecord(id=target, name=target, provider=self.name, capabilities=capabilities)
            for target in self.settings.model.values()
        ]

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------
    def _discover_remote(self, endpoint: str, progress: ProgressCallback) -> List[ModelRecord]:
        progress(PROGRESS_FETCHING, f"Fetching latest {self.name} model list...")
        raw = self.client.fetch(endpoint, api_key=self.settings.api_key)

        progress(PROGRESS_PARSING, f"Parsing {self.name} model response...")
        parsed = self._parse(raw)

        progress(PROGRESS_SAVING, f"Saving {len(parsed)} models to local cache...")
        records = self._enrich(parsed)
        if records:
            self._persist(records)
        else:
            logger.warning("%s returned no models, keeping the existing cache", self.name)

        progress(PROGRESS_SAVED, f"Saved {len(records)} {self.name} models")
        logger.info("%s discovered %d models", self.name, len(records))
        return records

    def _fall_back(self, fetch_error: BaseException) -> CascadeOutcome:
        try:
            snapshot = self.cache.read(self.name)
        except Exception as cache_error:
            logger.warning("%s: falling back to static config: %s", self.name, cache_error)
            return CascadeOutcome(
                status=InitializationStatus.FAILED,
                models_count=self.settings.alias_count,
                message=f"{self.name} initialization failed, using static config",
                error=f"API failed: {fetch_error}, Cache failed: {cache_error}",
            )

        logger.info("%s: using %d cached models", self.name, snapshot.total_models)
        return CascadeOutcome(
            status=InitializationStatus.CACHED,
            models_count=snapshot.total_models,
            message=f"{self.name} using cached models",
            error=str(fetch_error),
            records=snapshot.models,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _parse(self, raw: Any) -> List[ModelRecord]:
        try:
            parsed = self.strategy.parse(raw)
        except Exception as exc:
            logger.debug("%s: unrecognized model response shape: %s", self.name, exc)
            return []
        if not parsed:
            logger.debug("%s: model response contained no recognizable models", self.name)
        return list(parsed)

    def _enrich(self, records: List[ModelRecord]) -> List[ModelRecord]:
        """Attach provider name, capabilities, and a timestamp to each record."""
        stamp = utc_timestamp()
        enriched: List[ModelRecord] = []
        for record in records:
            capabilities = detect_capabilities(
                record.name,
                streaming=self.settings.stream,
                json_mode=self.settings.json_mode,
            )
            capabilities = self.strategy.enrich(record.name, capabilities)
            enriched.append(
                replace(
                    record,
                    provider=self.name,
                    capabilities=capabilities,
                    last_updated=stamp,
                )
            )
        return enriched

    def _persist(self, records: List[ModelRecord]) -> None:
        snapshot = snapshot_from_records(
            self.name,
            records,
            aliases=self.settings.model,
            embedding_aliases=self.settings.embeddings,
        )
        try:
            self.cache.write(snapshot)
        except CacheWriteError as exc:
            logger.warning("%s: could not persist discovered models: %s", self.name, exc)


__all__ = ["CascadeOutcome", "DiscoveryCascade", "ProgressCallback"]
