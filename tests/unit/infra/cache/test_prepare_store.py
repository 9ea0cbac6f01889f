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

"""Unit tests for CachePrepareResultStore."""

from datetime import timedelta

from core.cache.exceptions import CacheError
from core.stack.entities import ImageInfo, PrepareResult
from infra.cache.memory_cache import MemoryCache
from infra.cache.prepare_store import CachePrepareResultStore


class BrokenCache(MemoryCache):
    """Cache that fails every call."""

    def set(self, key, value, ttl):
        raise CacheError("down", key)

    def get(self, key):
        raise CacheError("down", key)


def _result() -> PrepareResult:
    return PrepareResult(
        namespace="dev-alice",
        images={"web": ImageInfo(digest="web@sha256:" + "a" * 64, image="web:main")},
        commit="abc",
        tag="v1",
    )


class TestCachePrepareResultStore:
    """Tests for the prepare result store."""

    def test_save_and_load(self) -> None:
        """A saved result loads back equal."""
        store = CachePrepareResultStore(MemoryCache())
        store.save("req-1", _result())

        assert store.load("req-1") == _result()

    def test_unknown_request(self) -> None:
        assert CachePrepareResultStore(MemoryCache()).load("nope") is None

    def test_expired_request(self) -> None:
        """Results vanish after the TTL."""
        now = [0.0]
        store = CachePrepareResultStore(MemoryCache(clock=lambda: now[0]), ttl=timedelta(minutes=15))
        store.save("req-1", _result())
        now[0] = 15 * 60

        assert store.load("req-1") is None

    def test_cache_failures_are_swallowed(self) -> None:
        """A broken cache loses results instead of failing requests."""
        store = CachePrepareResultStore(BrokenCache())
        store.save("req-1", _result())
        assert store.load("req-1") is None

    def test_malformed_payload(self) -> None:
        cache = MemoryCache()
        cache.set("prepare:req-1", {"images": {}}, timedelta(minutes=1))
        assert CachePrepareResultStore(cache).load("req-1") is None
