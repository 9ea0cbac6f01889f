# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for the memory and file caches."""

import json
from datetime import timedelta

import pytest

from core.cache.exceptions import (
    CacheError,
    CacheExpiredError,
    CacheNotFoundError,
    CacheSerializationError,
)
from infra.cache.factory import create_image_cache
from infra.cache.file_cache import FileCache
from infra.cache.memory_cache import MemoryCache

MINUTE = timedelta(minutes=1)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(name="clock")
def clock_fixture():
    """Fresh fake clock."""
    return FakeClock()


class TestMemoryCache:
    """Tests for MemoryCache."""

    def test_set_and_get(self, clock) -> None:
        """Stored values come back decoded."""
        cache = MemoryCache(clock=clock)
        cache.set("k", {"digest": "sha256:x"}, MINUTE)

        assert cache.get("k") == {"digest": "sha256:x"}
        assert len(cache) == 1

    def test_values_are_copies(self, clock) -> None:
        """Mutating a stored or returned value does not touch the cache."""
        cache = MemoryCache(clock=clock)
        value = {"a": [1]}
        cache.set("k", value, MINUTE)
        value["a"].append(2)
        cache.get("k")["a"].append(3)

        assert cache.get("k") == {"a": [1]}

    def test_missing_key(self, clock) -> None:
        with pytest.raises(CacheNotFoundError):
            MemoryCache(clock=clock).get("nope")

    def test_expired_key_is_evicted(self, clock) -> None:
        """Reading an expired key raises and removes it."""
        cache = MemoryCache(clock=clock)
        cache.set("k", 1, MINUTE)
        clock.advance(60)

        with pytest.raises(CacheExpiredError):
            cache.get("k")
        with pytest.raises(CacheNotFoundError):
            cache.get("k")

    def test_unserializable_value(self, clock) -> None:
        with pytest.raises(CacheSerializationError):
            MemoryCache(clock=clock).set("k", object(), MINUTE)

    def test_delete(self, clock) -> None:
        cache = MemoryCache(clock=clock)
        cache.set("k", 1, MINUTE)
        cache.delete("k")
        cache.delete("k")
        assert len(cache) == 0

    def test_cleanup_expired(self, clock) -> None:
        """Only expired entries are removed."""
        cache = MemoryCache(clock=clock)
        cache.set("short", 1, timedelta(seconds=10))
        cache.set("long", 2, timedelta(hours=1))
        clock.advance(30)

        assert cache.cleanup_expired() == 1
        assert cache.get("long") == 2
        assert cache.cleanup_expired() == 0


class TestFileCache:
    """Tests for FileCache."""

    def test_persist_writes_versioned_snapshot(self, tmp_path, clock) -> None:
        """Snapshots carry a version and the encoded entries."""
        path = tmp_path / "cache" / "digests.json"
        cache = FileCache(path, clock=clock)
        cache.set("k", {"v": 1}, MINUTE)

        cache.persist()

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["version"] == "1.0"
        assert data["entries"]["k"]["expires_at"] == 1060.0
        assert json.loads(data["entries"]["k"]["value"]) == {"v": 1}
        assert not (tmp_path / "cache" / "digests.json.tmp").exists()

    def test_reload_skips_expired_entries(self, tmp_path, clock) -> None:
        """A new cache restores live entries only."""
        path = tmp_path / "digests.json"
        cache = FileCache(path, clock=clock)
        cache.set("short", 1, timedelta(seconds=10))
        cache.set("long", 2, timedelta(hours=1))
        cache.close()

        clock.advance(30)
        reloaded = FileCache(path, clock=clock)

        assert len(reloaded) == 1
        assert reloaded.get("long") == 2

    def test_corrupt_snapshot_starts_empty(self, tmp_path, clock) -> None:
        path = tmp_path / "digests.json"
        path.write_text("{not json", encoding="utf-8")

        cache = FileCache(path, clock=clock)

        assert len(cache) == 0

    def test_persist_failure_raises_cache_error(self, tmp_path, clock) -> None:
        """A snapshot target that is a directory cannot be replaced."""
        path = tmp_path / "digests.json"
        cache = FileCache(path, clock=clock)
        path.mkdir()

        with pytest.raises(CacheError):
            cache.persist()


class TestCreateImageCache:
    """Tests for the cache factory."""

    def test_memory_without_path(self, monkeypatch) -> None:
        monkeypatch.delenv("IMAGE_CACHE_FILE_PATH", raising=False)
        cache = create_image_cache()
        assert isinstance(cache, MemoryCache)
        assert not isinstance(cache, FileCache)

    def test_file_cache_from_argument(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("IMAGE_CACHE_FILE_PATH", raising=False)
        cache = create_image_cache(str(tmp_path / "c.json"))
        assert isinstance(cache, FileCache)

    def test_environment_overrides_argument(self, monkeypatch, tmp_path) -> None:
        """IMAGE_CACHE_FILE_PATH wins over the configured path."""
        monkeypatch.setenv("IMAGE_CACHE_FILE_PATH", str(tmp_path / "env.json"))
        cache = create_image_cache(str(tmp_path / "config.json"))
        assert cache.path == tmp_path / "env.json"

    def test_unusable_directory_falls_back_to_memory(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("IMAGE_CACHE_FILE_PATH", raising=False)
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")

        cache = create_image_cache(str(blocker / "sub" / "c.json"))

        assert not isinstance(cache, FileCache)
