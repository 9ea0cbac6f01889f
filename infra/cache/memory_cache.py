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

"""In-memory TTL cache."""

import json
import logging
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Dict

from core.cache.exceptions import (
    CacheExpiredError,
    CacheNotFoundError,
    CacheSerializationError,
)
from core.cache.repositories import Cache

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Encoded value and its absolute expiry (epoch seconds)."""

    value: str
    expires_at: float


class MemoryCache(Cache):
    """Thread-safe cache holding JSON-encoded values in a dict.

    Values are stored encoded so callers never share mutable state through
    the cache. Expired entries are evicted on read and by ``cleanup_expired``.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def set(self, key: str, value: Any, ttl: timedelta) -> None:
        try:
            encoded = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise CacheSerializationError(f"Cannot encode cache value: {exc}", key) from exc
        entry = CacheEntry(value=encoded, expires_at=self._clock() + ttl.total_seconds())
        with self._lock:
            self._entries[key] = entry

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                raise CacheNotFoundError(f"Cache key not found: {key}", key)
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                raise CacheExpiredError(f"Cache key expired: {key}", key)
        try:
            return json.loads(entry.value)
        except ValueError as exc:
            raise CacheSerializationError(f"Cannot decode cache value: {exc}", key) from exc

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def cleanup_expired(self) -> int:
        with self._lock:
            snapshot = list(self._entries.items())

        now = self._clock()
        expired = [key for key, entry in snapshot if now >= entry.expires_at]

        removed = 0
        with self._lock:
            for key in expired:
                entry = self._entries.get(key)
                if entry is not None and now >= entry.expires_at:
                    del self._entries[key]
                    removed += 1
        if removed:
            logger.debug("Evicted %d expired cache entries", removed)
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _snapshot(self) -> Dict[str, CacheEntry]:
        with self._lock:
            return dict(self._entries)

    def _restore(self, entries: Dict[str, CacheEntry]) -> None:
        with self._lock:
            self._entries.update(entries)
