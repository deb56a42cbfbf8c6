import json

import pytest

from llmcatalog._internal.exceptions import CacheReadError, CacheWriteError
from llmcatalog.models.discovery.cache import (
    CacheSnapshot,
    JsonFileModelCache,
    snapshot_from_records,
)
from llmcatalog.models.discovery.types import ModelCapabilities, ModelRecord


def _snapshot(provider="openai"):
    records = [
        ModelRecord(
            id="gpt-4o",
            name="gpt-4o",
            provider=provider,
            capabilities=ModelCapabilities(vision=True, streaming=True, json_mode=True),
            last_updated="2024-05-01T00:00:00+00:00",
        ),
        ModelRecord(
            id="text-embedding-3-small",
            name="text-embedding-3-small",
            provider=provider,
            capabilities=ModelCapabilities(chat=False, embeddings=True),
        ),
    ]
    return snapshot_from_records(
        provider,
        records,
        aliases={"default": "gpt-4o"},
        embedding_aliases={"default": "text-embedding-3-small"},
    )


def test_write_then_read_returns_same_records(tmp_path):
    cache = JsonFileModelCache(tmp_path)
    snapshot = _snapshot()

    cache.write(snapshot)
    loaded = cache.read("openai")

    assert loaded.models == snapshot.models
    assert loaded.aliases == {"default": "gpt-4o"}
    assert loaded.total_models == 2


def test_file_uses_camel_case_layout(tmp_path):
    cache = JsonFileModelCache(tmp_path)
    cache.write(_snapshot())

    data = json.loads((tmp_path / "openai.json").read_text(encoding="utf-8"))

    assert set(data) == {
        "provider",
        "lastUpdated",
        "totalModels",
        "models",
        "aliases",
        "embeddingAliases",
    }
    assert data["totalModels"] == 2
    assert data["models"][0]["capabilities"]["jsonMode"] is True
    assert data["models"][0]["lastUpdated"] == "2024-05-01T00:00:00+00:00"


def test_write_leaves_no_temporary_files(tmp_path):
    cache = JsonFileModelCache(tmp_path)

    cache.write(_snapshot())
    cache.write(_snapshot())

    assert sorted(p.name for p in tmp_path.iterdir()) == ["openai.json"]


def test_write_creates_missing_directories(tmp_path):
    cache = JsonFileModelCache(tmp_path / "data" / "models")

    cache.write(_snapshot())

    assert (tmp_path / "data" / "models" / "openai.json").exists()


def test_models_file_override(tmp_path):
    target = tmp_path / "custom" / "openai-models.json"
    cache = JsonFileModelCache(tmp_path, paths={"openai": target})

    cache.write(_snapshot())

    assert cache.path_for("openai") == target
    assert target.exists()
    assert cache.path_for("xai") == tmp_path / "xai.json"


def test_missing_file_raises_cache_read_error(tmp_path):
    with pytest.raises(CacheReadError) as exc_info:
        JsonFileModelCache(tmp_path).read("openai")

    assert exc_info.value.context["provider"] == "openai"


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        "[]",
        json.dumps({"provider": "openai"}),
        json.dumps({"provider": "openai", "models": [{"object": "model"}]}),
    ],
)
def test_malformed_file_raises_cache_read_error(tmp_path, content):
    (tmp_path / "openai.json").write_text(content, encoding="utf-8")

    with pytest.raises(CacheReadError):
        JsonFileModelCache(tmp_path).read("openai")


def test_unwritable_location_raises_cache_write_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    cache = JsonFileModelCache(blocker / "models")

    with pytest.raises(CacheWriteError):
        cache.write(_snapshot())


def test_failed_write_keeps_previous_snapshot(tmp_path, monkeypatch):
    cache = JsonFileModelCache(tmp_path)
    cache.write(_snapshot())

    def broken_dump(*args, **kwargs):
        raise TypeError("not serializable")

    monkeypatch.setattr("llmcatalog.models.discovery.cache.json.dump", broken_dump)

    with pytest.raises(CacheWriteError):
        cache.write(CacheSnapshot(provider="openai", models=()))

    monkeypatch.undo()
    assert cache.read("openai").total_models == 2
    assert sorted(p.name for p in tmp_path.iterdir()) == ["openai.json"]
