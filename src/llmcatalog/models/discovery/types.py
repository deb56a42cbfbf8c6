"""Shared dataclasses for model discovery.

Records are immutable so they can be handed to any thread without copying.
Serialization uses the camelCase keys of the on-disk cache format.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class ModelCapabilities:
    """Capability flags detected for a single model.

    Embedding and audio models are never chat models; constructing a value
    that says otherwise raises ``ValueError``.
    """

    chat: bool = True
    streaming: bool = False
    embeddings: bool = False
    vision: bool = False
    audio: bool = False
    json_mode: bool = False
    extras: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.chat and (self.embeddings or self.audio):
            raise ValueError("embedding and audio models cannot also be chat models")
        object.__setattr__(self, "extras", tuple(sorted(set(self.extras))))

    def with_extras(self, *tags: str) -> ModelCapabilities:
        return replace(self, extras=self.extras + tuple(tags))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "chat": self.chat,
            "streaming": self.streaming,
            "embeddings": self.embeddings,
            "vision": self.vision,
            "audio": self.audio,
            "jsonMode": self.json_mode,
        }
        if self.extras:
            data["extras"] = list(self.extras)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelCapabilities:
        embeddings = bool(data.get("embeddings", False))
        audio = bool(data.get("audio", False))
        return cls(
            chat=bool(data.get("chat", True)) and not (embeddings or audio),
            streaming=bool(data.get("streaming", False)),
            embeddings=embeddings,
            vision=bool(data.get("vision", False)),
            audio=audio,
            json_mode=bool(data.get("jsonMode", data.get("json_mode", False))),
            extras=tuple(str(tag) for tag in data.get("extras", ()) or ()),
        )


@dataclass(frozen=True)
class ModelRecord:
    """Canonical description of one model offered by a provider."""

    id: str
    name: str
    provider: str = ""
    capabilities: ModelCapabilities = field(default_factory=ModelCapabilities)
    last_updated: Optional[str] = None
    object: str = "model"
    owned_by: Optional[str] = None
    created: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "object": self.object,
            "provider": self.provider,
            "capabilities": self.capabilities.to_dict(),
        }
        if self.owned_by is not None:
            data["owned_by"] = self.owned_by
        if self.created is not None:
            data["created"] = self.created
        if self.last_updated is not None:
            data["lastUpdated"] = self.last_updated
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ModelRecord:
        model_id = data.get("id") or data.get("name")
        if not model_id:
            raise ValueError(f"model entry has no id: {dict(data)!r}")
        created = data.get("created")
        return cls(
            id=str(model_id),
            name=str(data.get("name") or model_id),
            provider=str(data.get("provider") or ""),
            capabilities=ModelCapabilities.from_dict(data.get("capabilities") or {}),
            last_updated=data.get("lastUpdated"),
            object=str(data.get("object") or "model"),
            owned_by=data.get("owned_by"),
            created=int(created) if isinstance(created, (int, float)) else None,
        )


__all__ = ["ModelCapabilities", "ModelRecord"]
