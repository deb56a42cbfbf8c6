"""Persistent snapshots of discovered models.

Each provider's snapshot lives in its own JSON file, so concurrent discovery
runs for different providers never touch the same key. Writes go to a
temporary file in the target directory followed by ``os.replace``; readers see
either the previous snapshot or the new one, never a partial file.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Union

from llmcatalog._internal.exceptions import CacheReadError, CacheWriteError
from llmcatalog.models.discovery.types import ModelRecord

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class CacheSnapshot:
    """Everything persisted for one provider after a successful discovery."""

    provider: str
    models: tuple[ModelRecord, ...]
    aliases: Mapping[str, str] = field(default_factory=dict)
    embedding_aliases: Mapping[str, Any] = field(default_factory=dict)
    last_updated: str = field(default_factory=utc_timestamp)

    @property
    def total_models(self) -> int:
        return len(self.models)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "lastUpdated": self.last_updated,
            "totalModels": self.total_models,
            "models": [model.to_dict() for model in self.models],
            "aliases": dict(self.aliases),
            "embeddingAliases": dict(self.embedding_aliases),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CacheSnapshot:
        models = data.get("models")
        if not isinstance(models, list):
            raise ValueError("snapshot has no 'models' list")
        return cls(
            provider=str(data.get("provider") or ""),
            models=tuple(ModelRecord.from_dict(entry) for entry in models),
            aliases=dict(data.get("aliases") or {}),
            embedding_aliases=dict(data.get("embeddingAliases") or {}),
            last_updated=str(data.get("lastUpdated") or ""),
        )


class ModelCache(Protocol):
    """Store of per-provider snapshots keyed by provider name."""

    def read(self, provider: str) -> CacheSnapshot:
        """Return the latest snapshot or raise :class:`CacheReadError`."""

    def write(self, snapshot: CacheSnapshot) -> None:
        """Persist ``snapshot`` atomically or raise :class:`CacheWriteError`."""


class JsonFileModelCache:
    """:class:`ModelCache` backed by one JSON file per provider.

    Args:
        directory: Directory holding ``<provider>.json`` files.
        paths: Per-provider file overrides (the ``modelsFile`` setting).
    """

    def __init__(
        self,
        directory: PathLike = "./data/models",
        *,
        paths: Optional[Mapping[str, PathLike]] = None,
    ) -> None:
        self.directory = Path(directory)
        self._paths: Dict[str, Path] = {name: Path(p) for name, p in (paths or {}).items()}

    def path_for(self, provider: str) -> Path:
        return self._paths.get(provider, self.directory / f"{provider}.json")

    def read(self, provider: str) -> CacheSnapshot:
        path = self.path_for(provider)
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError as exc:
            raise CacheReadError(
                f"No cached models for {provider} at {path}",
                context={"provider": provider, "path": str(path)},
            ) from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise CacheReadError(
                f"Unable to read cached models for {provider}: {exc}",
                context={"provider": provider, "path": str(path)},
            ) from exc

        if not isinstance(data, dict):
            raise CacheReadError(
                f"Cache file {path} must contain a JSON object",
                context={"provider": provider, "path": str(path)},
            )
        try:
            snapshot = CacheSnapshot.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise CacheReadError(
                f"Cache file {path} is malformed: {exc}",
                context={"provider": provider, "path": str(path)},
            ) from exc

        logger.debug("Read %d cached models for %s from %s", snapshot.total_models, provider, path)
        return snapshot

    def write(self, snapshot: CacheSnapshot) -> None:
        path = self.path_for(snapshot.provider)
        tmp_path: Optional[Path] = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(path.parent), prefix=f".{path.stem}-", suffix=".json.tmp"
            )
            os.close(fd)
            tmp_path = Path(tmp_name)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(snapshot.to_dict(), fh, indent=2, ensure_ascii=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            raise CacheWriteError(
                f"Unable to save models for {snapshot.provider}: {exc}",
                context={"provider": snapshot.provider, "path": str(path)},
            ) from exc
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

        logger.debug("Saved %d models for %s to %s", snapshot.total_models, snapshot.provider, path)


def snapshot_from_records(
    provider: str,
    records: Sequence[ModelRecord],
    *,
    aliases: Mapping[str, str],
    embedding_aliases: Mapping[str, Any],
) -> CacheSnapshot:
    return CacheSnapshot(
        provider=provider,
        models=tuple(records),
        aliases=dict(aliases),
        embedding_aliases=dict(embedding_aliases),
    )


__all__ = [
    "CacheSnapshot",
    "JsonFileModelCache",
    "ModelCache",
    "snapshot_from_records",
    "utc_timestamp",
]
