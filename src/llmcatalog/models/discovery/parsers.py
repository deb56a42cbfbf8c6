"""Vendor response parsers and capability enrichers.

Each parser accepts the decoded JSON body of a provider's model-list endpoint
and returns bare :class:`ModelRecord` values in the provider's native order.
A body whose shape the parser does not recognize produces an empty list.
Entries without an identifier are skipped.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional

from llmcatalog.models.discovery.types import ModelCapabilities, ModelRecord

IFLYTEK_DOMAINS = ("general", "generalv2", "generalv3", "generalv3.5")

_STEP_VISION = re.compile(r"\dv\b|\dv-|vision")


def _dig(data: Any, *path: str) -> Any:
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _first(entry: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = entry.get(key)
        if value:
            return str(value)
    return None


def _created(entry: Mapping[str, Any]) -> Optional[int]:
    value = entry.get("created")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    return None


def _collect(
    entries: Any,
    *,
    id_keys: Iterable[str],
    name_keys: Iterable[str],
    owner: Optional[str],
) -> List[ModelRecord]:
    if not isinstance(entries, list):
        return []

    id_keys = tuple(id_keys)
    name_keys = tuple(name_keys)
    records: List[ModelRecord] = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            continue
        model_id = _first(entry, *id_keys)
        if model_id is None:
            continue
        records.append(
            ModelRecord(
                id=model_id,
                name=_first(entry, *name_keys) or model_id,
                object=str(entry.get("object") or "model"),
                owned_by=owner or _first(entry, "owned_by"),
                created=_created(entry),
            )
        )
    return records


# ----------------------------------------------------------------------
# Parsers
# ----------------------------------------------------------------------
def parse_openai_compatible(data: Any, owner: Optional[str] = None) -> List[ModelRecord]:
    """Parse the OpenAI ``{"data": [{"id": ...}]}`` list format."""
    return _collect(_dig(data, "data"), id_keys=("id",), name_keys=("id",), owner=owner)


def parse_alibaba(data: Any) -> List[ModelRecord]:
    """DashScope nests models under ``output.models``."""
    return _collect(
        _dig(data, "output", "models"),
        id_keys=("model_id", "id"),
        name_keys=("model_name", "model_id", "id"),
        owner="alibaba",
    )


def parse_baidu(data: Any) -> List[ModelRecord]:
    return _collect(
        _dig(data, "result", "data"),
        id_keys=("id", "name"),
        name_keys=("name", "id"),
        owner="baidu",
    )


def parse_tencent(data: Any) -> List[ModelRecord]:
    """Tencent Cloud wraps everything in a PascalCase ``Response`` envelope."""
    return _collect(
        _dig(data, "Response", "Models"),
        id_keys=("ModelId", "Id"),
        name_keys=("ModelName", "ModelId", "Id"),
        owner="tencent",
    )


def parse_coze(data: Any) -> List[ModelRecord]:
    """Coze lists bots rather than models; each bot is addressable like a model."""
    return _collect(
        _dig(data, "data"),
        id_keys=("bot_id", "id"),
        name_keys=("bot_name", "name", "bot_id", "id"),
        owner="coze",
    )


def parse_minimax(data: Any) -> List[ModelRecord]:
    return _collect(
        _dig(data, "data"),
        id_keys=("id", "model_name"),
        name_keys=("model_name", "id"),
        owner="minimax",
    )


def parse_baichuan(data: Any) -> List[ModelRecord]:
    return _collect(
        _dig(data, "data"),
        id_keys=("id", "name"),
        name_keys=("name", "id"),
        owner="baichuan",
    )


def parse_bytedance(data: Any) -> List[ModelRecord]:
    return _collect(
        _dig(data, "data"),
        id_keys=("id", "model"),
        name_keys=("name", "id", "model"),
        owner="bytedance",
    )


def parse_iflytek(data: Any) -> List[ModelRecord]:
    """Spark has no list endpoint; a recognized chat answer implies the domain set."""
    if _dig(data, "payload", "choices", "text") is None:
        return []
    return [
        ModelRecord(id=f"spark-{domain}", name=f"Spark {domain}", owned_by="iflytek")
        for domain in IFLYTEK_DOMAINS
    ]


# ----------------------------------------------------------------------
# Enrichers
# ----------------------------------------------------------------------
def enrich_bytedance(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    lowered = model_name.lower()
    if capabilities.chat and "doubao" in lowered and "vision" in lowered:
        return replace(capabilities, vision=True)
    return capabilities


def enrich_stepfun(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    lowered = model_name.lower()
    if capabilities.chat and "step" in lowered and _STEP_VISION.search(lowered):
        return replace(capabilities, vision=True)
    return capabilities


def enrich_yi(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    lowered = model_name.lower()
    if not (capabilities.chat and "yi" in lowered):
        return capabilities
    if "vision" in lowered or "vl" in lowered:
        capabilities = replace(capabilities, vision=True)
    if "large" in lowered or "34b" in lowered:
        capabilities = capabilities.with_extras("large_context")
    return capabilities


def enrich_xai(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    if "grok" in model_name.lower():
        return capabilities.with_extras("realtime_data")
    return capabilities


def enrich_coze(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    return capabilities.with_extras("conversational")


def enrich_minimax(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    lowered = model_name.lower()
    if "abab" in lowered and "embo" in lowered:
        return replace(capabilities, chat=False, embeddings=True, vision=False)
    return capabilities


def enrich_iflytek(model_name: str, capabilities: ModelCapabilities) -> ModelCapabilities:
    # Spark chat models accept speech input; audio stays reserved for non-chat models.
    if capabilities.chat and "spark" in model_name.lower():
        return capabilities.with_extras("speech")
    return capabilities


__all__ = [
    "parse_alibaba",
    "parse_baichuan",
    "parse_baidu",
    "parse_bytedance",
    "parse_coze",
    "parse_iflytek",
    "parse_minimax",
    "parse_openai_compatible",
    "parse_tencent",
    "enrich_bytedance",
    "enrich_coze",
    "enrich_iflytek",
    "enrich_minimax",
    "enrich_stepfun",
    "enrich_xai",
    "enrich_yi",
]
