"""Name-based capability detection for discovered models.

Rules, matched case-insensitively against the model name and applied in
precedence order:

1. ``embedding`` / ``embed``: embedding model, never chat.
2. ``whisper`` / ``tts``: audio model, never chat.
3. Anything else is a chat model; ``vision`` or a multimodal marker
   (``4v``, ``4o``) additionally marks it vision-capable.

Streaming and JSON-mode support are provider properties copied from the
static configuration. They are never guessed from the model name.
"""

from __future__ import annotations

from typing import Tuple

from llmcatalog.models.discovery.types import ModelCapabilities

EMBEDDING_MARKERS: Tuple[str, ...] = ("embedding", "embed")
AUDIO_MARKERS: Tuple[str, ...] = ("whisper", "tts")
VISION_MARKERS: Tuple[str, ...] = ("vision", "4v", "4o")


def detect_capabilities(name: str, *, streaming: bool, json_mode: bool) -> ModelCapabilities:
    """Return the capabilities implied by ``name`` and the provider flags."""

    lowered = (name or "").lower()

    if any(marker in lowered for marker in EMBEDDING_MARKERS):
        return ModelCapabilities(
            chat=False, embeddings=True, streaming=streaming, json_mode=json_mode
        )
    if any(marker in lowered for marker in AUDIO_MARKERS):
        return ModelCapabilities(chat=False, audio=True, streaming=streaming, json_mode=json_mode)

    return ModelCapabilities(
        chat=True,
        vision=any(marker in lowered for marker in VISION_MARKERS),
        streaming=streaming,
        json_mode=json_mode,
    )


def static_capabilities(*, streaming: bool, json_mode: bool) -> ModelCapabilities:
    """Capabilities assumed for models known only from configured aliases."""

    return ModelCapabilities(chat=True, streaming=streaming, json_mode=json_mode)


__all__ = ["detect_capabilities", "static_capabilities"]
